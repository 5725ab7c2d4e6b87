from collections.abc import Mapping
from pathlib import Path

from ..responses.messages import (
    UPLOAD_ERROR_MESSAGE,
    UPLOAD_SELECT_FILE_MESSAGE,
    UPLOAD_SUCCESS_MESSAGE,
)
from ..webhook.base import WebhookClient, WebhookError

SPREADSHEET_SUFFIXES = (".xlsx", ".xls")


async def upload_spreadsheet(client: WebhookClient, path: str | Path | None) -> str:
    """Upload an Excel file and return the notice to show the user.

    The notice is transient (a toast), not a conversation message.
    """
    if not path:
        return UPLOAD_SELECT_FILE_MESSAGE

    path = Path(path).expanduser()
    if not path.is_file() or path.suffix.lower() not in SPREADSHEET_SUFFIXES:
        return UPLOAD_SELECT_FILE_MESSAGE

    try:
        payload = await client.upload(path)
    except WebhookError:
        return UPLOAD_ERROR_MESSAGE

    if isinstance(payload, Mapping):
        notice = payload.get("mensaje")
        if isinstance(notice, str) and notice.strip():
            return notice
    return UPLOAD_SUCCESS_MESSAGE
