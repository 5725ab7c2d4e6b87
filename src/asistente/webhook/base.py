from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class WebhookError(Exception):
    """Transport or decoding failure while talking to the webhook."""


class WebhookClient(ABC):
    """Abstract base class for the question-answering webhook.

    This module hides the design decision of how the webhook is reached.
    Implementations must handle transport details like:
    - HTTP client setup and timeouts
    - Request body encoding
    - Response decoding (JSON or bare text)

    Every failure surfaces as WebhookError.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            payload = await client.ask("ventas de enero")
    """

    @abstractmethod
    async def ask(self, question: str) -> Any:
        """Send a question and return the decoded response body.

        Args:
            question: User text, forwarded as-is

        Returns:
            Decoded JSON value, or the text body for non-JSON responses

        Raises:
            WebhookError: On network errors, non-2xx statuses or bad JSON
        """
        pass

    @abstractmethod
    async def upload(self, path: Path) -> Any:
        """Upload a spreadsheet file and return the decoded response body.

        Raises:
            WebhookError: On network errors, non-2xx statuses or bad JSON
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "WebhookClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
