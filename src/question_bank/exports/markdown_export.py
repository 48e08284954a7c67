from __future__ import annotations

from typing import Sequence

from question_bank.config import MARKDOWN_EXPORT_FILENAME
from question_bank.core.models import Question
from question_bank.exports.common import ExportArtifact, project_row

MARKDOWN_MIME_TYPE = "text/markdown"

MARKDOWN_HEADER = "| Link | Type | Topic | Difficulty |\n|------|------|--------|------------|"


def to_markdown(questions: Sequence[Question]) -> str:
    rows = ["| " + " | ".join(project_row(q)) + " |" for q in questions]
    return "\n".join([MARKDOWN_HEADER, *rows])


def export_markdown(questions: Sequence[Question]) -> ExportArtifact:
    return ExportArtifact(
        filename=MARKDOWN_EXPORT_FILENAME,
        mime_type=MARKDOWN_MIME_TYPE,
        data=to_markdown(questions).encode("utf-8"),
    )
