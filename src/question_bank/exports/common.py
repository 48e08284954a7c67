from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
from urllib.parse import urlparse

from question_bank.core.models import Question

EXPORT_COLUMNS: Tuple[str, str, str, str] = ("Link", "Type", "Topic", "Difficulty")


@dataclass(frozen=True)
class ExportArtifact:
    """A finished, downloadable export: the bytes plus how to offer them."""
    filename: str
    mime_type: str
    data: bytes


def _text(value: object) -> str:
    if value is None:
        return ""
    # enums carry their display text in .value
    return str(getattr(value, "value", value))


def project_row(q: Question) -> Tuple[str, str, str, str]:
    """The four exported fields of a question; missing values become ""."""
    return (_text(q.link), _text(q.type), _text(q.topic), _text(q.difficulty))


def has_http_prefix(link: str) -> bool:
    return (link or "").startswith("http")


def is_absolute_link(link: str) -> bool:
    parsed = urlparse((link or "").strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
