"""
Export serializers.

Each takes the filtered question list and produces an ExportArtifact (or, for
the on-screen table, a DataFrame / HTML string).
"""

from question_bank.exports.common import EXPORT_COLUMNS, ExportArtifact
from question_bank.exports.csv_export import export_csv
from question_bank.exports.markdown_export import export_markdown
from question_bank.exports.pdf_export import DocumentRendererUnavailable, export_pdf
from question_bank.exports.table_view import build_table_frame, render_table_html

__all__ = [
    "EXPORT_COLUMNS",
    "ExportArtifact",
    "DocumentRendererUnavailable",
    "build_table_frame",
    "export_csv",
    "export_markdown",
    "export_pdf",
    "render_table_html",
]
