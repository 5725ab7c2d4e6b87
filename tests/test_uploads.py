"""Unit tests for spreadsheet upload notices."""
import pytest
from conftest import FakeWebhookClient

from asistente.conversation import upload_spreadsheet
from asistente.responses.messages import (
    UPLOAD_ERROR_MESSAGE,
    UPLOAD_SELECT_FILE_MESSAGE,
    UPLOAD_SUCCESS_MESSAGE,
)
from asistente.webhook import WebhookError


@pytest.fixture
def spreadsheet(tmp_path):
    """Create a file with an Excel suffix."""
    path = tmp_path / "ventas.xlsx"
    path.write_bytes(b"PK\x03\x04")
    return path


class TestUploadSpreadsheet:
    """Tests for upload_spreadsheet."""

    @pytest.mark.asyncio
    async def test_no_path(self):
        """Test that a missing path asks for a file."""
        client = FakeWebhookClient()
        assert await upload_spreadsheet(client, None) == UPLOAD_SELECT_FILE_MESSAGE
        assert await upload_spreadsheet(client, "") == UPLOAD_SELECT_FILE_MESSAGE
        assert client.uploads == []

    @pytest.mark.asyncio
    async def test_nonexistent_file(self, tmp_path):
        """Test that a path to nothing asks for a file."""
        client = FakeWebhookClient()
        notice = await upload_spreadsheet(client, tmp_path / "nada.xlsx")
        assert notice == UPLOAD_SELECT_FILE_MESSAGE
        assert client.uploads == []

    @pytest.mark.asyncio
    async def test_wrong_suffix(self, tmp_path):
        """Test that non-Excel files are refused before uploading."""
        path = tmp_path / "ventas.csv"
        path.write_text("a,b\n1,2\n")
        client = FakeWebhookClient()

        assert await upload_spreadsheet(client, path) == UPLOAD_SELECT_FILE_MESSAGE
        assert client.uploads == []

    @pytest.mark.asyncio
    async def test_server_message_is_used(self, spreadsheet):
        """Test that the response's mensaje field is shown."""
        client = FakeWebhookClient({"mensaje": "Se cargaron 120 filas"})
        assert await upload_spreadsheet(client, spreadsheet) == "Se cargaron 120 filas"
        assert client.uploads == [spreadsheet]

    @pytest.mark.asyncio
    async def test_default_success_notice(self, spreadsheet):
        """Test the notice when the server says nothing useful."""
        client = FakeWebhookClient({"ok": True})
        assert await upload_spreadsheet(client, str(spreadsheet)) == UPLOAD_SUCCESS_MESSAGE

    @pytest.mark.asyncio
    async def test_upload_failure(self, spreadsheet):
        """Test that a webhook failure becomes the error notice."""
        client = FakeWebhookClient(WebhookError("HTTP 500"))
        assert await upload_spreadsheet(client, spreadsheet) == UPLOAD_ERROR_MESSAGE
