"""Text rendering for the TUI.

Markdown rendering is passed to widgets as a plain callable, so any
``render(text) -> renderable`` can replace the default.
"""

from collections.abc import Callable
from typing import Any

from rich.markdown import Markdown

Renderer = Callable[[str], Any]


def render_markdown(text: str) -> Markdown:
    """Render markdown text as a Rich renderable."""
    return Markdown(text, code_theme="monokai", hyperlinks=True)


def truncate(text: str, limit: int) -> str:
    """Shorten text to ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
