"""Data models for the vault layer."""

from datetime import datetime
from posixpath import basename, dirname, splitext

from pydantic import BaseModel, ConfigDict, Field


class VaultFile(BaseModel):
    """A document stored in the vault, addressed by its vault-relative path.

    Paths always use forward slashes regardless of platform, so they can be
    compared and prefixed the same way everywhere (``convos/convo-1.md``).
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Vault-relative POSIX path")
    ctime: datetime | None = Field(default=None, description="Creation time, if known")

    @property
    def name(self) -> str:
        """File name including extension."""
        return basename(self.path)

    @property
    def basename(self) -> str:
        """File name without extension."""
        return splitext(self.name)[0]

    @property
    def extension(self) -> str:
        """Extension without the leading dot, lower-cased."""
        return splitext(self.name)[1].lstrip(".").lower()

    @property
    def parent(self) -> str:
        """Vault-relative path of the containing folder ('' at the root)."""
        return dirname(self.path)
