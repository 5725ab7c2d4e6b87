"""Update detection.

Hides where the published version lives and how it is compared. The check
only raises a flag; what "reload" means is up to the front end.
"""

from collections.abc import Mapping
from typing import Any

import httpx

# Front ends exit with this code to ask the launcher for a restart
RELOAD_EXIT_CODE = 3


class VersionChecker:
    """Compares the running version with a published version.json."""

    def __init__(self, url: str, current_version: str, timeout: float = 5.0) -> None:
        """Initialize the checker.

        Args:
            url: Location of a JSON document like {"version": "1.0.2"}
            current_version: Version of the running application
            timeout: Request timeout in seconds
        """
        self._url = url
        self._current_version = current_version
        self._timeout = timeout
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Version", message)

    async def check(self, client: httpx.AsyncClient | None = None) -> bool:
        """Return True if a different version has been published.

        Any failure (network, status, body) counts as "no update".
        """
        owns_client = client is None
        client = client or httpx.AsyncClient(timeout=self._timeout)
        try:
            response = await client.get(self._url, headers={"Cache-Control": "no-store"})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._debug("warning", f"Could not check version: {e}")
            return False
        finally:
            if owns_client:
                await client.aclose()

        published = data.get("version") if isinstance(data, Mapping) else None
        if not published or str(published) == self._current_version:
            return False

        self._debug("info", f"New version available: {published} (running {self._current_version})")
        return True
