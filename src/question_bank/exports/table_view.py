"""
Tabular view of filtered questions for on-screen display.

`build_table_frame` projects the questions onto the four export columns;
`render_table_html` renders that frame with http links as anchors.
"""

from __future__ import annotations

from html import escape
from typing import List, Sequence

import pandas as pd

from question_bank.core.models import Question
from question_bank.exports.common import EXPORT_COLUMNS, has_http_prefix, project_row


def build_table_frame(questions: Sequence[Question]) -> pd.DataFrame:
    rows = [project_row(q) for q in questions]
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))


def _link_cell(link: str) -> str:
    if has_http_prefix(link):
        href = escape(link, quote=True)
        return f'<a href="{href}" target="_blank" rel="noreferrer">{escape(link)}</a>'
    return escape(link)


def render_table_html(questions: Sequence[Question]) -> str:
    frame = build_table_frame(questions)
    head = "".join(f"<th>{escape(c)}</th>" for c in frame.columns)

    body_rows: List[str] = []
    for link, kind, topic, difficulty in frame.itertuples(index=False, name=None):
        cells = [_link_cell(link), escape(kind), escape(topic), escape(difficulty)]
        body_rows.append("<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>")

    return (
        '<table class="question-table">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        "</table>"
    )
