from typing import Any

from .base import WebhookClient
from .client import HttpWebhookClient


def create_webhook_client(transport: str, **config: Any) -> WebhookClient:
    """Create a webhook client instance.

    Args:
        transport: Transport type ('http')
        **config: Transport-specific configuration
            For http:
                - url: str (required)
                - upload_url: str | None
                - question_field: str (default: 'question')
                - timeout: float (default: 30.0)

    Returns:
        Initialized webhook client

    Raises:
        ValueError: If transport type is not supported
        TypeError: If required configuration is missing
    """
    if transport.lower() in ("http", "https"):
        if not config.get("url"):
            raise TypeError("HTTP webhook client requires 'url' in config")
        return HttpWebhookClient(**config)

    raise ValueError(
        f"Unsupported webhook transport: {transport}. "
        f"Supported transports: 'http'"
    )
