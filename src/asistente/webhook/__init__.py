from .base import WebhookClient, WebhookError
from .client import HttpWebhookClient
from .factory import create_webhook_client

__all__ = [
    "HttpWebhookClient",
    "WebhookClient",
    "WebhookError",
    "create_webhook_client",
]
