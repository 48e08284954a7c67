from __future__ import annotations

from typing import Iterable, Sequence

from question_bank.config import CSV_EXPORT_FILENAME
from question_bank.core.models import Question
from question_bank.exports.common import EXPORT_COLUMNS, ExportArtifact, project_row

CSV_MIME_TYPE = "text/csv"


def _quote(value: str) -> str:
    # embedded quotes are doubled so the output parses as standard CSV
    return '"' + value.replace('"', '""') + '"'


def _line(values: Iterable[str]) -> str:
    return ",".join(_quote(v) for v in values)


def to_csv(questions: Sequence[Question]) -> str:
    """
    Header plus one line per question, every field quoted, joined by "\\n".
    """
    lines = [_line(EXPORT_COLUMNS)]
    lines.extend(_line(project_row(q)) for q in questions)
    return "\n".join(lines)


def export_csv(questions: Sequence[Question]) -> ExportArtifact:
    return ExportArtifact(
        filename=CSV_EXPORT_FILENAME,
        mime_type=CSV_MIME_TYPE,
        data=to_csv(questions).encode("utf-8"),
    )
