import json
from pathlib import Path
from typing import Any

import httpx

from .base import WebhookClient, WebhookError

SPREADSHEET_CONTENT_TYPES = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}


class HttpWebhookClient(WebhookClient):
    """Webhook client over HTTP using httpx.

    Hidden design decisions:
    - One attempt per call, no retries
    - Explicit timeout so a hung webhook cannot keep the chat busy forever
    - Bodies that parse as JSON are decoded whatever the content type says,
      anything else is returned as text
    """

    def __init__(
        self,
        url: str,
        upload_url: str | None = None,
        question_field: str = "question",
        timeout: float = 30.0,
        **client_kwargs: Any
    ):
        """Initialize the HTTP webhook client.

        Args:
            url: Webhook endpoint receiving questions
            upload_url: Endpoint receiving spreadsheet uploads (optional)
            question_field: JSON field carrying the question
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._url = url
        self._upload_url = upload_url
        self._question_field = question_field
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)
        self._debug_callback: Any | None = None

    @property
    def url(self) -> str:
        return self._url

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Webhook", message)

    async def ask(self, question: str) -> Any:
        self._debug("debug", f"POST {self._url}")
        try:
            response = await self._client.post(
                self._url,
                json={self._question_field: question},
            )
        except httpx.HTTPError as e:
            raise WebhookError(f"Request failed: {e}") from e
        return self._decode(response)

    async def upload(self, path: Path) -> Any:
        if not self._upload_url:
            raise WebhookError("Upload URL not configured")

        path = Path(path)
        content_type = SPREADSHEET_CONTENT_TYPES.get(
            path.suffix.lower(), "application/octet-stream"
        )
        self._debug("debug", f"Uploading {path.name} to {self._upload_url}")
        try:
            with path.open("rb") as fh:
                response = await self._client.post(
                    self._upload_url,
                    files={"file": (path.name, fh, content_type)},
                )
        except OSError as e:
            raise WebhookError(f"Cannot read {path}: {e}") from e
        except httpx.HTTPError as e:
            raise WebhookError(f"Upload failed: {e}") from e
        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        if not response.is_success:
            raise WebhookError(f"Webhook returned HTTP {response.status_code}")

        self._debug("debug", f"HTTP {response.status_code}, {len(response.content)} bytes")
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            # Some webhooks label JSON bodies as text
            try:
                return json.loads(response.text)
            except json.JSONDecodeError:
                return response.text

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise WebhookError(f"Malformed JSON response: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
