"""Best-effort note previews for the context picker."""

import logging
from collections.abc import Callable
from typing import Any

import frontmatter

from ..vault import Vault, VaultFile

logger = logging.getLogger(__name__)

PREVIEW_ERROR = "Error loading preview"
PREVIEW_MAX_CHARS = 300


async def load_preview(
    vault: Vault,
    file: VaultFile,
    render: Callable[[str], Any] | None = None,
    max_chars: int = PREVIEW_MAX_CHARS,
) -> Any:
    """Read the start of a note for display next to a search result.

    YAML front matter is stripped. Failures never propagate: they are logged
    and the :data:`PREVIEW_ERROR` placeholder is returned instead.

    Args:
        vault: Vault holding the note
        file: Note to preview
        render: Optional markdown renderer applied to the excerpt
        max_chars: Excerpt length

    Returns:
        Rendered excerpt (or plain text without a renderer)
    """
    try:
        content = await vault.read(file.path)
        body = frontmatter.loads(content).content.strip()
        excerpt = body[:max_chars] + ("..." if len(body) > max_chars else "")
        return render(excerpt) if render is not None else excerpt
    except Exception as e:
        logger.error("Error loading preview for %s: %s", file.path, e)
        return PREVIEW_ERROR
