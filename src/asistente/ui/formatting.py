"""Text formatting utilities for the TUI.

Hides the details of turning bot markup, reports and charts into Rich
renderables.
"""

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..reports.charts import ChartData
from ..reports.exporter import is_money_column
from ..responses.currency import format_clp, parse_amount
from ..responses.markup import STRONG_PATTERN, strip_markup
from ..responses.models import ReportPayload
from .config import CHART_BAR_WIDTH, CHART_MAX_ITEMS, REPORT_PREVIEW_ROWS


def to_rich_markup(text: str) -> str:
    """Convert bot message markup to Rich markup.

    <strong>...</strong> becomes bold, other tags are dropped and any
    square brackets in the text are escaped.
    """
    parts = []
    last = 0
    for match in STRONG_PATTERN.finditer(text):
        parts.append(escape(strip_markup(text[last:match.start()])))
        parts.append(f"[b]{escape(strip_markup(match.group(1)))}[/b]")
        last = match.end()
    parts.append(escape(strip_markup(text[last:])))
    return "".join(parts)


def render_message_text(text: str) -> Text:
    """Render bot message text, falling back to plain text on bad markup."""
    try:
        return Text.from_markup(to_rich_markup(text), overflow="fold")
    except Exception:
        return Text(strip_markup(text), overflow="fold")


def format_cell(column: str, value: object) -> str:
    """Format a report cell, showing money columns as CLP."""
    if value is None:
        return ""
    if is_money_column(column) and parse_amount(value) is not None:
        return format_clp(value)
    return str(value)


def report_table(report: ReportPayload, max_rows: int = REPORT_PREVIEW_ROWS) -> Table:
    """Build a Rich table previewing the first rows of a report."""
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    for column in report.columns:
        justify = "right" if is_money_column(column) else "left"
        table.add_column(str(column), justify=justify, overflow="fold")

    for row in report.rows[:max_rows]:
        table.add_row(*(format_cell(column, row[column]) for column in report.columns))

    hidden = len(report.rows) - max_rows
    if hidden > 0:
        table.caption = f"... {hidden} filas más (exporta para ver todo)"
    return table


def render_chart(chart: ChartData, width: int = CHART_BAR_WIDTH) -> Text:
    """Draw chart data as horizontal text bars.

    Pie charts are drawn the same way with a share percentage per label.
    """
    text = Text()
    text.append(f"{chart.title}\n", style="bold")

    items = list(zip(chart.labels, chart.values, strict=False))[:CHART_MAX_ITEMS]
    if not items:
        return text

    total = sum(value for _, value in items if value > 0)
    peak = max((value for _, value in items), default=0.0)
    label_width = min(max(len(label) for label, _ in items), 24)

    for label, value in items:
        bar_len = int(round(width * value / peak)) if peak > 0 and value > 0 else 0
        text.append(f"{label[:label_width]:<{label_width}} ", style="cyan")
        text.append("█" * bar_len, style="magenta")
        text.append(f" {format_clp(value)}")
        if chart.kind == "pie" and total > 0 and value > 0:
            text.append(f" ({value / total:.0%})", style="dim")
        text.append("\n")

    if len(chart.labels) > CHART_MAX_ITEMS:
        text.append(f"... {len(chart.labels) - CHART_MAX_ITEMS} más\n", style="dim")
    return text
