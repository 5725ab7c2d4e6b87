from .currency import format_clp, parse_amount
from .markup import emphasize, strip_markup
from .messages import (
    CONNECTION_ERROR_MESSAGE,
    FALLBACK_MESSAGE,
    NO_DATA_MESSAGE,
    REPORT_READY_MESSAGE,
    WELCOME_MESSAGE,
)
from .models import (
    Message,
    NormalizedResponse,
    PlainText,
    ReportPayload,
    StructuredContent,
    TabularReport,
    Unrecognized,
    WebhookPayload,
)
from .normalizer import classify_payload, normalize

__all__ = [
    "CONNECTION_ERROR_MESSAGE",
    "FALLBACK_MESSAGE",
    "NO_DATA_MESSAGE",
    "REPORT_READY_MESSAGE",
    "WELCOME_MESSAGE",
    "Message",
    "NormalizedResponse",
    "PlainText",
    "ReportPayload",
    "StructuredContent",
    "TabularReport",
    "Unrecognized",
    "WebhookPayload",
    "classify_payload",
    "emphasize",
    "format_clp",
    "normalize",
    "parse_amount",
    "strip_markup",
]
