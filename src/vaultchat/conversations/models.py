"""Data models for persisted conversations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConversationRecord(BaseModel):
    """A conversation transcript stored in the vault."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Vault-relative path of the transcript")
    name: str = Field(description="File name without extension")
    created: datetime | None = Field(default=None, description="Creation time, if known")

    def display_label(self) -> str:
        """Label used in conversation pickers: name and creation time."""
        if self.created is None:
            return self.name
        return f"{self.name} - {self.created.strftime('%Y-%m-%d %H:%M:%S')}"
