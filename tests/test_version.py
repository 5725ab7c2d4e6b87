"""Unit tests for the update checker."""
import httpx
import pytest

from asistente.version import RELOAD_EXIT_CODE, VersionChecker

VERSION_URL = "https://ventas.example.com/version.json"


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestVersionChecker:
    """Tests for VersionChecker.check."""

    @pytest.mark.asyncio
    async def test_newer_version(self):
        """Test that a different published version is reported."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["cache"] = request.headers.get("cache-control")
            return httpx.Response(200, json={"version": "1.0.2"})

        async with mock_client(handler) as client:
            assert await VersionChecker(VERSION_URL, "1.0.1").check(client)
        assert seen["cache"] == "no-store"

    @pytest.mark.asyncio
    async def test_same_version(self):
        """Test that the running version is not an update."""
        async with mock_client(lambda r: httpx.Response(200, json={"version": "1.0.1"})) as client:
            assert not await VersionChecker(VERSION_URL, "1.0.1").check(client)

    @pytest.mark.asyncio
    async def test_missing_version_field(self):
        """Test that documents without a version are ignored."""
        async with mock_client(lambda r: httpx.Response(200, json={"build": 7})) as client:
            assert not await VersionChecker(VERSION_URL, "1.0.1").check(client)
        async with mock_client(lambda r: httpx.Response(200, json=["1.0.2"])) as client:
            assert not await VersionChecker(VERSION_URL, "1.0.1").check(client)

    @pytest.mark.asyncio
    async def test_failures_are_not_updates(self):
        """Test that HTTP errors and bad bodies return False with a warning."""
        logs = []
        checker = VersionChecker(VERSION_URL, "1.0.1")
        checker.set_debug_callback(lambda level, component, message: logs.append((level, component)))

        async with mock_client(lambda r: httpx.Response(404)) as client:
            assert not await checker.check(client)
        async with mock_client(lambda r: httpx.Response(200, content=b"<html>")) as client:
            assert not await checker.check(client)

        assert logs == [("warning", "Version"), ("warning", "Version")]

    def test_reload_exit_code(self):
        """Test that the reload code is distinct from success and generic failure."""
        assert RELOAD_EXIT_CODE not in (0, 1, 2)
