"""Chart data for reports.

Hides the guess of which report column is the label and which is the
value. The webhook sends no schema, so columns are matched by name against
preference lists, with type-based fallbacks.
"""

import re
import unicodedata
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from ..responses.currency import parse_amount
from ..responses.models import ReportPayload

LABEL_PREFERENCES = ("cliente", "nombre_cliente", "categoria_doc", "direccion_destino")
VALUE_PREFERENCES = ("total", "monto", "saldo", "neto", "iva")

# Pie charts stay readable up to this many slices
MAX_PIE_SLICES = 6
UNNAMED_LABEL = "Sin nombre"


@dataclass(frozen=True)
class ChartData:
    """Labels and values ready to plot."""

    kind: Literal["pie", "bar"]
    title: str
    label_column: str
    value_column: str
    labels: list[str]
    values: list[float]


def normalize_name(name: str) -> str:
    """Lowercase, drop accents and every non-alphanumeric character."""
    decomposed = unicodedata.normalize("NFKD", str(name))
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]", "", ascii_only.lower())


def is_id_column(name: str) -> bool:
    lowered = str(name).strip().lower()
    return lowered == "id" or lowered.startswith("id_") or lowered.endswith("_id")


def _by_preference(columns: Sequence[str], preferences: Sequence[str]) -> str | None:
    candidates = [column for column in columns if not is_id_column(column)]
    for preference in preferences:
        wanted = normalize_name(preference)
        for column in candidates:
            if wanted in normalize_name(column):
                return column
    return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip()) and parse_amount(value) is None


def _is_positive_number(value: Any) -> bool:
    amount = parse_amount(value)
    return amount is not None and amount > 0


def pick_chart_columns(
    columns: Sequence[str],
    first_row: Mapping[str, Any],
) -> tuple[str, str] | None:
    """Choose the (label, value) columns of a report.

    Args:
        columns: Column names in report order
        first_row: Sample record used for type-based fallbacks

    Returns:
        (label_column, value_column), or None when either cannot be found
    """
    label = _by_preference(columns, LABEL_PREFERENCES)
    if label is None:
        label = next(
            (c for c in columns if not is_id_column(c) and _is_text(first_row.get(c))),
            None,
        )

    value = _by_preference([c for c in columns if c != label], VALUE_PREFERENCES)
    if value is None:
        value = next(
            (
                c for c in columns
                if c != label and not is_id_column(c) and _is_positive_number(first_row.get(c))
            ),
            None,
        )

    if label is None or value is None:
        return None
    return label, value


def build_chart(report: ReportPayload | None) -> ChartData | None:
    """Build chart data from a report, or None if nothing is plottable."""
    if report is None or report.is_empty:
        return None

    picked = pick_chart_columns(report.columns, report.rows[0])
    if picked is None:
        return None
    label_column, value_column = picked

    labels = []
    values = []
    for row in report.rows:
        raw_label = row.get(label_column)
        labels.append(str(raw_label) if raw_label not in (None, "") else UNNAMED_LABEL)
        values.append(parse_amount(row.get(value_column)) or 0.0)

    if len(labels) <= MAX_PIE_SLICES:
        kind = "pie"
        title = f"Distribución por {label_column}"
    else:
        kind = "bar"
        title = f"Valores por {label_column}"

    return ChartData(
        kind=kind,
        title=title,
        label_column=label_column,
        value_column=value_column,
        labels=labels,
        values=values,
    )
