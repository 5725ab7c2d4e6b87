from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Message(BaseModel):
    """A chat message in the conversation."""

    model_config = ConfigDict(frozen=True)

    sender: Literal["user", "bot"] = Field(description="Who wrote the message")
    text: str = Field(description="Message text, may embed <strong> emphasis markup")
    timestamp: datetime = Field(default_factory=datetime.now)


class ReportPayload(BaseModel):
    """Tabular result set returned by the webhook.

    Every record carries exactly the columns of the first record.
    """

    model_config = ConfigDict(frozen=True)

    question: str = Field(default="", description="Question echoed by the webhook")
    rows: list[dict[str, Any]] = Field(default_factory=list, description="Uniform records")

    @field_validator("rows", mode="before")
    @classmethod
    def _uniform_rows(cls, value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, (list, tuple)):
            return []
        columns: list[str] = []
        for row in value:
            if isinstance(row, Mapping):
                columns = [str(key) for key in row]
                break
        uniform = []
        for row in value:
            source = row if isinstance(row, Mapping) else {}
            uniform.append({column: source.get(column) for column in columns})
        return uniform

    @property
    def columns(self) -> list[str]:
        """Column names, taken from the first record."""
        if not self.rows:
            return []
        return list(self.rows[0].keys())

    @property
    def is_empty(self) -> bool:
        return not self.rows


class PlainText(BaseModel):
    """Webhook answered with a bare string."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain_text"] = "plain_text"
    text: str


class StructuredContent(BaseModel):
    """Webhook answered with an object carrying message.content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured_content"] = "structured_content"
    content: str


class TabularReport(BaseModel):
    """Webhook answered with a report flag and/or a rows array."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tabular_report"] = "tabular_report"
    question: str = ""
    rows: list[Any] = Field(default_factory=list)


class Unrecognized(BaseModel):
    """Webhook answer matched none of the known shapes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"


WebhookPayload = PlainText | StructuredContent | TabularReport | Unrecognized


class NormalizedResponse(BaseModel):
    """Display-ready answer plus an optional report."""

    model_config = ConfigDict(frozen=True)

    display_text: str
    report: ReportPayload | None = None
