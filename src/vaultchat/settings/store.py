"""Settings persistence.

Hides where and how the settings record is stored. The record lives in a
JSON file; it is loaded once, held in memory and written back after every
mutation.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import Settings

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".vaultchat"
SETTINGS_FILE = "settings.json"


class SettingsStore:
    """Load, hold and persist the process-wide :class:`Settings`."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._settings = Settings()

    @classmethod
    def for_vault(cls, vault_root: str | Path) -> "SettingsStore":
        """Store at the default location inside a vault directory."""
        return cls(Path(vault_root) / SETTINGS_DIR / SETTINGS_FILE)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def settings(self) -> Settings:
        """The in-memory settings (always the latest value)."""
        return self._settings

    def load(self) -> Settings:
        """Load settings from disk, falling back to defaults.

        A missing file yields defaults silently; an unreadable or invalid file
        yields defaults with a warning.
        """
        if not self._path.exists():
            self._settings = Settings()
            return self._settings

        try:
            raw = self._path.read_text(encoding="utf-8")
            self._settings = Settings.model_validate_json(raw)
        except (OSError, ValidationError, ValueError) as e:
            logger.warning("Error loading settings from %s: %s", self._path, e)
            self._settings = Settings()

        return self._settings

    def save(self) -> None:
        """Write the in-memory settings to disk.

        Raises:
            RuntimeError: If the file cannot be written
        """
        data = self._settings.model_dump(mode="json", by_alias=True)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise RuntimeError(f"Failed to save settings: {e}") from e
        logger.debug("Settings saved to %s", self._path)

    def update(self, **changes: Any) -> Settings:
        """Apply changes by field name and persist immediately.

        Nothing changes in memory unless every value is valid and the file
        was written.

        Raises:
            AttributeError: If a field name is unknown
            ValidationError: If a value is invalid
            RuntimeError: If the file cannot be written
        """
        for name in changes:
            if name not in Settings.model_fields:
                raise AttributeError(f"Unknown setting: {name}")

        previous = self._settings.model_copy(deep=True)
        try:
            for name, value in changes.items():
                setattr(self._settings, name, value)
            self.save()
        except (ValidationError, RuntimeError):
            self._settings = previous
            raise
        return self._settings
