"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Muted ink-on-paper dark theme for long reading sessions
VAULT_NIGHT = Theme(
    name="vault-night",
    primary="#7aa2f7",      # Blue - chat accent
    secondary="#bb9af7",    # Violet - notes accent
    accent="#e0af68",       # Amber - context highlights
    foreground="#c0caf5",
    background="#16161e",
    success="#9ece6a",
    warning="#ff9e64",
    error="#f7768e",
    surface="#1a1b26",
    panel="#1f2335",
    dark=True,
    variables={
        "block-cursor-foreground": "#16161e",
        "block-cursor-background": "#c0caf5",
        "block-cursor-text-style": "bold",
        "input-selection-background": "#7aa2f7 30%",

        "border": "#3b4261",
        "border-blurred": "#292e42",

        "scrollbar": "#292e42",
        "scrollbar-hover": "#3b4261",
        "scrollbar-active": "#7aa2f7",
        "scrollbar-background": "#1f2335",

        "footer-key-foreground": "#e0af68",
        "footer-background": "#16161e",

        "text-muted": "#565f89",
    },
)
