"""Prompt text shipped with the package.

The system instruction lives in ``system.txt`` beside this module. Point
``VAULTCHAT_PROMPTS_DIR`` at a directory holding a file of the same name
to replace it without editing the install.
"""

import logging
import os
from functools import cache
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPTS_DIR_ENV = "VAULTCHAT_PROMPTS_DIR"
_PACKAGE_DIR = Path(__file__).parent


def _candidates(name: str) -> list[Path]:
    filename = f"{name}.txt"
    directories = [_PACKAGE_DIR]
    override = os.environ.get(PROMPTS_DIR_ENV)
    if override:
        directories.insert(0, Path(override).expanduser())
    return [directory / filename for directory in directories]


@cache
def load_prompt(name: str) -> str:
    """Text of prompt ``name`` with surrounding whitespace removed.

    Raises:
        FileNotFoundError: If no candidate directory has ``<name>.txt``
    """
    candidates = _candidates(name)
    for path in candidates:
        if path.is_file():
            logger.debug("Loaded prompt %s from %s", name, path)
            return path.read_text(encoding="utf-8").strip()
    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found (searched {searched})")


def get_system_prompt() -> str:
    """The instruction sent ahead of every message."""
    return load_prompt("system")


def clear_cache() -> None:
    """Forget loaded prompts, e.g. after changing the override directory."""
    load_prompt.cache_clear()


__all__ = [
    "PROMPTS_DIR_ENV",
    "load_prompt",
    "get_system_prompt",
    "clear_cache",
]
