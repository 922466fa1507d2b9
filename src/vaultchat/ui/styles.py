"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout:
- Notes pane on the left (tabs of open notes)
- Chat pane on the right (conversation bar, messages, context, input)
- Log panel docked at the bottom, hidden until toggled
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    background: $background;
}

#main {
    height: 1fr;
}

/* ============================================
   Notes Pane - Open Notes as Tabs
   ============================================ */
#notes {
    width: 1fr;
    height: 100%;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;

    &:focus-within {
        border: round $secondary;
    }

    & TabPane {
        padding: 0 1;
    }
}

/* ============================================
   Chat Pane
   ============================================ */
#chat-pane {
    width: 1fr;
    height: 100%;

    &.-hidden {
        display: none;
    }
}

ConversationBar {
    height: auto;
    padding: 0 0 1 0;

    & Select {
        width: 1fr;
    }

    & Checkbox {
        width: auto;
    }
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }

    &:focus-within {
        border: round $primary-lighten-1;
    }
}

#error-message {
    height: auto;
    color: $error;
    text-style: bold;
    padding: 0 1;

    &.-empty {
        display: none;
    }
}

/* ============================================
   Context Bar - Chips, Search, Results
   ============================================ */
ContextBar {
    height: auto;
    padding: 1 0 0 0;
}

#selected-contexts {
    height: auto;
    padding: 0 0 1 0;
}

.context-chip {
    height: 1;
    min-width: 4;
    margin: 0 1 0 0;
    background: $accent 20%;
    color: $foreground;
    border: none;

    &:hover {
        background: $error 30%;
    }
}

#context-search {
    border: tall $border;

    &:focus {
        border: tall $accent;
    }
}

#context-results {
    height: auto;
    max-height: 12;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 14;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
    scrollbar-gutter: stable;

    &:focus {
        border: round $warning;
    }
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }

    &:disabled {
        border: round $border;
        opacity: 60%;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

#send-btn {
    width: 12;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
        border: tall $success-lighten-1;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
}

/* ============================================
   Chrome
   ============================================ */
* {
    scrollbar-background: $panel;
    scrollbar-color: $surface-lighten-1;
    scrollbar-color-hover: $primary 50%;
    scrollbar-color-active: $primary;
    scrollbar-size: 1 1;
}

Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

Footer {
    background: $panel;
    height: auto;
}

OptionList {
    background: $surface;
    border: tall $border;
    padding: 0 1;
}

OptionList > .option-list--option-highlighted {
    background: $primary 20%;
}
"""
