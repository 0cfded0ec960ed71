"""Export Rendering — PDF, DOCX and CSV documents from a ResultSet.

Invariants:
    - Renderers consume ResultSet.columns/rows only: same shape as the JSON API
    - Header row always present; zero rows → headers-only document, never an error
    - PDF and DOCX pages are landscape, size from page_format_for(columns)
      (A4 for one category, A3 for the full matrix)
    - Unknown format → UnsupportedExportFormatError

Design Decisions:
    - PDF is printed by weasyprint from an HTML table with an @page rule; all
      record text passes through html.escape
    - python-docx Table Grid layout with bold header cells, like other report
      exports in the codebase family
    - Renderers return (bytes, media type, filename) so routes stay thin
"""

import csv
import html
import io
import logging
from dataclasses import dataclass

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Mm, Pt, RGBColor
from weasyprint import HTML

from seatfinder.core.errors import UnsupportedExportFormatError
from seatfinder.core.export_layout import (
    ExportHeader, cell_text, column_labels, page_format_for,
)
from seatfinder.core.resolve import ResultSet

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
CSV_MEDIA_TYPE = "text/csv"
PDF_MEDIA_TYPE = "application/pdf"
EXPORT_BASENAME = "students"
SUPPORTED_FORMATS = frozenset({"pdf", "docx", "csv"})
DEFAULT_FORMAT = "pdf"


@dataclass(frozen=True)
class RenderedExport:
    content: bytes
    media_type: str
    filename: str


def render_csv(result: ResultSet) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(column_labels(result.columns))
    for row in result.rows:
        writer.writerow([cell_text(row[c]) for c in result.columns])
    return buffer.getvalue()


def render_docx(
    result: ResultSet, header: ExportHeader, title: str = "Students Data",
) -> bytes:
    """Landscape DOCX with title, student header block and the result table."""
    doc = Document()

    section = doc.sections[0]
    width_mm, height_mm = page_format_for(result.columns).landscape_mm
    section.orientation = WD_ORIENT.LANDSCAPE
    section.page_width = Mm(width_mm)
    section.page_height = Mm(height_mm)
    for side in ("left_margin", "right_margin", "top_margin", "bottom_margin"):
        setattr(section, side, Mm(10))

    style = doc.styles["Normal"]
    style.font.name = "Helvetica"
    style.font.size = Pt(10)

    heading = doc.add_paragraph()
    run = heading.add_run(title)
    run.bold = True
    run.font.size = Pt(16)

    p = doc.add_paragraph()
    for label, value in header.lines():
        p.add_run(f"{label}: ").bold = True
        p.add_run(f"{value}    ")

    labels = column_labels(result.columns)
    table = doc.add_table(rows=1, cols=len(labels))
    table.style = "Table Grid"
    hdr_cells = table.rows[0].cells
    for i, label in enumerate(labels):
        hdr_cells[i].text = label
        for paragraph in hdr_cells[i].paragraphs:
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            for r in paragraph.runs:
                r.font.bold = True
                r.font.color.rgb = RGBColor(30, 30, 120)

    for row in result.rows:
        row_cells = table.add_row().cells
        for i, column in enumerate(result.columns):
            row_cells[i].text = cell_text(row[column])

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


_PDF_CSS = """
@page {{ size: {width}mm {height}mm; margin: 10mm; }}
body {{ font-family: Helvetica, Arial, sans-serif; font-size: 9pt; }}
h1 {{ font-size: 16pt; margin: 0 0 4mm 0; }}
.student {{ margin-bottom: 4mm; }}
.student span {{ margin-right: 8mm; }}
table {{ border-collapse: collapse; width: 100%; }}
th, td {{ border: 0.5pt solid #444; padding: 1.5pt 3pt; }}
th {{ background: #1e1e78; color: #fff; text-align: center; }}
"""


def build_pdf_html(
    result: ResultSet, header: ExportHeader, title: str = "Students Data",
) -> str:
    """HTML page for the PDF export: title, student block, result table."""
    width_mm, height_mm = page_format_for(result.columns).landscape_mm
    esc = html.escape

    parts = ["<!DOCTYPE html><html><head><meta charset='utf-8'>"]
    parts.append(f"<title>{esc(title)}</title>")
    parts.append(f"<style>{_PDF_CSS.format(width=width_mm, height=height_mm)}</style>")
    parts.append("</head><body>")
    parts.append(f"<h1>{esc(title)}</h1>")
    parts.append("<div class='student'>")
    for label, value in header.lines():
        parts.append(f"<span><b>{esc(label)}:</b> {esc(value)}</span>")
    parts.append("</div>")

    parts.append("<table><thead><tr>")
    for label in column_labels(result.columns):
        parts.append(f"<th>{esc(label)}</th>")
    parts.append("</tr></thead><tbody>")
    for row in result.rows:
        cells = "".join(f"<td>{esc(cell_text(row[c]))}</td>" for c in result.columns)
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</tbody></table></body></html>")
    return "\n".join(parts)


def render_pdf(
    result: ResultSet, header: ExportHeader, title: str = "Students Data",
) -> bytes:
    return HTML(string=build_pdf_html(result, header, title)).write_pdf()


def render_export(
    result: ResultSet,
    export_format: str,
    header: ExportHeader | None = None,
    title: str = "Students Data",
) -> RenderedExport:
    """Dispatch to the renderer for export_format ("pdf", "docx" or "csv")."""
    fmt = export_format.strip().lower()
    if fmt == "pdf":
        content = render_pdf(result, header or ExportHeader(), title)
        media_type = PDF_MEDIA_TYPE
    elif fmt == "csv":
        content = render_csv(result).encode("utf-8")
        media_type = CSV_MEDIA_TYPE
    elif fmt == "docx":
        content = render_docx(result, header or ExportHeader(), title)
        media_type = DOCX_MEDIA_TYPE
    else:
        raise UnsupportedExportFormatError(export_format)

    logger.info(
        f"Rendered {fmt} export",
        extra={"export_format": fmt, "row_count": result.row_count},
    )
    return RenderedExport(
        content=content, media_type=media_type,
        filename=f"{EXPORT_BASENAME}.{fmt}",
    )
