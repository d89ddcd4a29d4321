"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Motto Banner
   ============================================ */
#motto {
    width: 100%;
    height: auto;
    padding: 0 1;
    text-align: center;
    text-style: bold;
    color: $primary;
    background: $primary 15%;
}

/* ============================================
   Chat History Panel - Primary Focus Area
   ============================================ */
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

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
MessageBubble {
    height: auto;
    max-width: 80%;
    margin: 1 0 0 0;
    padding: 0 1;

    &.user-message {
        align-horizontal: right;
        margin-left: 20%;
        background: $secondary 20%;
        border-right: tall $secondary;
    }

    &.assistant-message {
        background: $primary 15%;
        border-left: tall $primary;
    }

    .message-header {
        color: $text-muted;
        text-style: bold;
    }

    .message-content {
        color: $foreground;
    }
}

/* ============================================
   Welcome Panel
   ============================================ */
WelcomePanel {
    height: auto;
    margin: 2 4;
    padding: 1 2;
    align-horizontal: center;
    border: round $accent 60%;
    background: $surface;

    .welcome-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
    }

    .welcome-body {
        width: 100%;
        text-align: center;
        margin-top: 1;
    }

    .welcome-quote {
        width: 100%;
        text-align: center;
        text-style: italic;
        color: $accent;
        margin-top: 1;
    }
}

/* ============================================
   Typing Indicator and Error Notice
   ============================================ */
TypingIndicator {
    width: auto;
    height: 1;
    margin: 1 0 0 0;
    padding: 0 1;
    color: $primary;
    background: $surface;
}

ErrorNotice {
    width: 100%;
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
    color: $error;
    background: $error 10%;
    border: round $error 60%;
}

/* ============================================
   Input Bar
   ============================================ */
#chat-input-bar {
    height: auto;
    padding: 0 1;
    background: $surface;

    #chat-input {
        width: 1fr;
        border: tall $border;

        &:focus {
            border: tall $primary;
        }
    }

    #send-btn {
        min-width: 10;
        margin-left: 1;
    }
}

/* ============================================
   Debug Panel
   ============================================ */
#debug-panel {
    height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}
"""
