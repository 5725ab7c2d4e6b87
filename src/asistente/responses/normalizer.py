"""Webhook response normalization.

Hides the shape-sniffing of the webhook payload: the raw JSON (or text) is
first classified into a closed set of variants, then turned into one
display-ready string plus an optional report.
"""

import re
from collections.abc import Mapping
from typing import Any

from .currency import format_clp
from .markup import emphasize
from .messages import (
    FALLBACK_MESSAGE,
    NO_DATA_MESSAGE,
    NO_DATA_PHRASE,
    REPORT_READY_MESSAGE,
)
from .models import (
    NormalizedResponse,
    PlainText,
    ReportPayload,
    StructuredContent,
    TabularReport,
    Unrecognized,
    WebhookPayload,
)

CURRENCY_PATTERN = re.compile(r"\$\d{1,3}(?:\.\d{3})+")
PERCENTAGE_PATTERN = re.compile(r"\d{1,3}(?:[.,]\d{1,2})?%")

# Either key marks a report; the webhook has used both over time
REPORT_FLAG_KEYS = ("report", "informe")
ROWS_KEYS = ("rows", "results")
QUESTION_KEYS = ("question", "pregunta")


def _first_rows(payload: Mapping) -> list | None:
    for key in ROWS_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return None


def _question(payload: Mapping) -> str:
    for key in QUESTION_KEYS:
        value = payload.get(key)
        if isinstance(value, str):
            return value
    return ""


def classify_payload(raw: Any) -> WebhookPayload:
    """Classify a raw webhook payload. First match wins.

    Args:
        raw: Decoded webhook body (str, dict, list or anything else)

    Returns:
        One of PlainText, StructuredContent, TabularReport, Unrecognized
    """
    if isinstance(raw, Mapping):
        rows = _first_rows(raw)
        flagged = any(raw.get(key) is True for key in REPORT_FLAG_KEYS)
        if flagged or rows is not None:
            return TabularReport(question=_question(raw), rows=rows or [])

    if isinstance(raw, list) and raw and all(isinstance(item, Mapping) for item in raw):
        return TabularReport(rows=raw)

    if isinstance(raw, str):
        return PlainText(text=raw)

    if isinstance(raw, Mapping):
        message = raw.get("message")
        if isinstance(message, Mapping) and isinstance(message.get("content"), str):
            return StructuredContent(content=message["content"])

    return Unrecognized()


def highlight_amounts(text: str) -> str:
    """Reformat grouped currency and emphasize currency and percentages."""

    def _currency(match: re.Match) -> str:
        digits = match.group(0).replace("$", "").replace(".", "")
        return emphasize(format_clp(int(digits)))

    text = CURRENCY_PATTERN.sub(_currency, text)
    return PERCENTAGE_PATTERN.sub(lambda match: emphasize(match.group(0)), text)


def _display_text(text: str) -> str:
    text = text.strip()
    if not text:
        return FALLBACK_MESSAGE

    highlighted = highlight_amounts(text)
    if NO_DATA_PHRASE in highlighted.lower():
        return NO_DATA_MESSAGE
    return highlighted


def normalize(raw: Any) -> NormalizedResponse:
    """Turn a raw webhook payload into display text and an optional report.

    Never raises: payloads of unexpected shape degrade to the fallback text.
    """
    payload = classify_payload(raw)

    if isinstance(payload, TabularReport):
        report = ReportPayload(question=payload.question, rows=payload.rows)
        return NormalizedResponse(display_text=REPORT_READY_MESSAGE, report=report)

    if isinstance(payload, PlainText):
        return NormalizedResponse(display_text=_display_text(payload.text))

    if isinstance(payload, StructuredContent):
        return NormalizedResponse(display_text=_display_text(payload.content))

    return NormalizedResponse(display_text=FALLBACK_MESSAGE)
