"""
Asistente: a terminal chat client for a sales question-answering webhook.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "1.0.1"

from .conversation import ConversationController, ConversationSession
from .reports import build_chart, export_report
from .responses import Message, ReportPayload, format_clp, normalize
from .speech import NarrationPipeline, create_speech_engine, number_to_words
from .webhook import WebhookError, create_webhook_client

__all__ = [
    "ConversationController",
    "ConversationSession",
    "Message",
    "NarrationPipeline",
    "ReportPayload",
    "WebhookError",
    "build_chart",
    "create_speech_engine",
    "create_webhook_client",
    "export_report",
    "format_clp",
    "normalize",
    "number_to_words",
]
