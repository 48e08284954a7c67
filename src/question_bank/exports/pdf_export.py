"""
Paginated document export.

The export is split in two steps:
  - build_document(): a declarative description of the report (title block
    plus the four-column table), independent of any rendering library.
  - a DocumentRenderer turns that description into bytes.

Rendering is an optional capability. ReportLab is used when installed
(`pip install .[pdf]`); without a renderer, export_pdf raises
DocumentRendererUnavailable and nothing is written.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple
from xml.sax.saxutils import escape, quoteattr

from question_bank.config import PDF_EXPORT_FILENAME, PDF_TITLE
from question_bank.core.models import Question
from question_bank.exports.common import (
    EXPORT_COLUMNS,
    ExportArtifact,
    is_absolute_link,
    project_row,
)

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

try:
    import reportlab  # noqa: F401
except ImportError:
    REPORTLAB_AVAILABLE = False
else:
    REPORTLAB_AVAILABLE = True


class DocumentRendererUnavailable(Exception):
    """Raised when no document renderer is available to produce the PDF."""


@dataclass(frozen=True)
class DocumentCell:
    text: str
    link: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.link is not None


@dataclass(frozen=True)
class ReportDocument:
    title: str
    header: Tuple[str, ...]
    rows: Tuple[Tuple[DocumentCell, ...], ...]


class DocumentRenderer(Protocol):
    def render(self, document: ReportDocument) -> bytes:
        ...


def _link_cell(link: str) -> DocumentCell:
    return DocumentCell(text=link, link=link if is_absolute_link(link) else None)


def build_document(questions: Sequence[Question], title: str = PDF_TITLE) -> ReportDocument:
    rows: List[Tuple[DocumentCell, ...]] = []
    for q in questions:
        link, kind, topic, difficulty = project_row(q)
        rows.append((_link_cell(link), DocumentCell(kind), DocumentCell(topic), DocumentCell(difficulty)))
    return ReportDocument(title=title, header=EXPORT_COLUMNS, rows=tuple(rows))


class ReportLabRenderer:
    """Renders a ReportDocument to an A4 PDF with ReportLab."""

    def __init__(self, title_font_size: int = 18):
        self.title_font_size = title_font_size

    def render(self, document: ReportDocument) -> bytes:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "ReportTitle",
            parent=styles["Heading1"],
            fontSize=self.title_font_size,
            leading=self.title_font_size + 4,
            spaceAfter=10,
        )
        cell_style = styles["BodyText"]

        def cell(c: DocumentCell) -> Paragraph:
            text = escape(c.text)
            if c.is_link:
                text = f'<a href={quoteattr(c.link)} color="blue"><u>{text}</u></a>'
            return Paragraph(text, cell_style)

        data = [[Paragraph(f"<b>{escape(h)}</b>", cell_style) for h in document.header]]
        data.extend([cell(c) for c in row] for row in document.rows)

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, title=document.title)
        col_width = doc.width / max(len(document.header), 1)

        table = Table(data, colWidths=[col_width] * len(document.header), repeatRows=1)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))

        doc.build([Paragraph(escape(document.title), title_style), table])
        return buffer.getvalue()


def default_renderer() -> Optional[DocumentRenderer]:
    if REPORTLAB_AVAILABLE:
        return ReportLabRenderer()
    return None


def export_pdf(
    questions: Sequence[Question],
    renderer: Optional[DocumentRenderer] = None,
) -> ExportArtifact:
    """
    Render the questions report.

    The whole document is rendered in memory before an artifact is returned,
    so a failure never leaves a partial file behind.
    """
    active = renderer if renderer is not None else default_renderer()
    if active is None:
        logger.warning("PDF export requested but no document renderer is available.")
        raise DocumentRendererUnavailable(
            "PDF export is unavailable: install the 'pdf' extra (ReportLab) and try again."
        )

    data = active.render(build_document(questions))
    return ExportArtifact(filename=PDF_EXPORT_FILENAME, mime_type=PDF_MIME_TYPE, data=data)
