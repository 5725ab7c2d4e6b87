"""Report export to Excel and PDF.

Hides the file formats: callers hand over a ReportPayload and a path.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..responses.currency import format_clp, parse_amount
from ..responses.models import ReportPayload
from .charts import normalize_name

MONEY_COLUMN_HINTS = ("total", "monto", "saldo", "neto", "iva", "precio", "valor")
CLP_NUMBER_FORMAT = '"$"#,##0'
SHEET_TITLE = "Informe"
DEFAULT_TITLE = "Informe de ventas"
HEADER_FILL = "FF5722"

SUPPORTED_FORMATS = ("xlsx", "pdf")


def is_money_column(name: str) -> bool:
    normalized = normalize_name(name)
    return any(hint in normalized for hint in MONEY_COLUMN_HINTS)


def _money_columns(report: ReportPayload) -> set[str]:
    """Money-named columns whose non-empty cells all parse as numbers."""
    money = set()
    for column in report.columns:
        if not is_money_column(column):
            continue
        cells = [row.get(column) for row in report.rows if row.get(column) not in (None, "")]
        if cells and all(parse_amount(cell) is not None for cell in cells):
            money.add(column)
    return money


def _cell_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _require_rows(report: ReportPayload) -> None:
    if report.is_empty:
        raise ValueError("Report has no rows to export")


def export_spreadsheet(report: ReportPayload, path: Path) -> Path:
    """Write the report as a one-sheet Excel workbook.

    Args:
        report: Report to export
        path: Destination .xlsx file

    Returns:
        The written path

    Raises:
        ValueError: If the report has no rows
    """
    _require_rows(report)
    path = Path(path)
    money = _money_columns(report)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(report.columns)
    for cell in ws[1]:
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill("solid", fgColor=HEADER_FILL)

    for row in report.rows:
        ws.append([
            parse_amount(row[column]) if column in money and row[column] not in (None, "")
            else _cell_value(row[column])
            for column in report.columns
        ])

    for index, column in enumerate(report.columns, start=1):
        letter = get_column_letter(index)
        if column in money:
            for cell in ws[letter][1:]:
                cell.number_format = CLP_NUMBER_FORMAT
        width = max(len(str(column)), *(len(str(row[column] or "")) for row in report.rows))
        ws.column_dimensions[letter].width = min(width + 2, 50)

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def export_pdf(report: ReportPayload, path: Path) -> Path:
    """Render the report as a PDF table.

    Args:
        report: Report to export
        path: Destination .pdf file

    Returns:
        The written path

    Raises:
        ValueError: If the report has no rows
    """
    _require_rows(report)
    path = Path(path)
    money = _money_columns(report)
    styles = getSampleStyleSheet()
    title = report.question.strip() or DEFAULT_TITLE

    doc = SimpleDocTemplate(
        str(path),
        pagesize=landscape(A4),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        title=title,
    )

    cell_style = styles["BodyText"]
    table_rows = [[Paragraph(f"<b>{column}</b>", cell_style) for column in report.columns]]
    for row in report.rows:
        cells = []
        for column in report.columns:
            value = row[column]
            if column in money and value not in (None, ""):
                text = format_clp(value)
            else:
                text = "" if value is None else str(value)
            cells.append(Paragraph(_escape(text), cell_style))
        table_rows.append(cells)

    table = Table(table_rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(f"#{HEADER_FILL}")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#FAFAFA")]),
            ]
        )
    )

    story = [
        Paragraph(_escape(title), styles["Title"]),
        Paragraph(f"Generado el {datetime.now():%d-%m-%Y %H:%M}", styles["Normal"]),
        Spacer(1, 12),
        table,
    ]

    path.parent.mkdir(parents=True, exist_ok=True)
    doc.build(story)
    return path


def _escape(text: str) -> str:
    # Paragraph parses a mini-HTML dialect
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def export_report(report: ReportPayload, path: Path) -> Path:
    """Export a report, picking the format from the file suffix.

    Raises:
        ValueError: If the suffix is not .xlsx or .pdf, or the report is empty
    """
    path = Path(path)
    suffix = path.suffix.lower().lstrip(".")
    if suffix == "xlsx":
        return export_spreadsheet(report, path)
    if suffix == "pdf":
        return export_pdf(report, path)
    raise ValueError(
        f"Unsupported export format: {path.suffix or '(none)'}. "
        f"Supported formats: {', '.join('.' + f for f in SUPPORTED_FORMATS)}"
    )


def default_export_path(fmt: str, directory: Path | None = None) -> Path:
    """Build a timestamped file name such as informe_ventas_20250101_120000.xlsx."""
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(directory or Path.cwd()) / f"informe_ventas_{stamp}.{fmt}"
