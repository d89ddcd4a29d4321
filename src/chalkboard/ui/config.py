"""UI configuration constants.

Centralizes log levels, formats and animation timing for the UI module.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel thresholds. Entries below the panel's level are dropped."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level: str) -> "LogLevel":
        """Parse a level name such as "warning"; unknown names mean DEBUG."""
        return cls.__members__.get(level.upper(), cls.DEBUG)


# Rich styles for the log panel
LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}
COMPONENT_STYLES = {
    "TUI": "cyan",
    "Chat": "green",
    "LLM": "magenta",
    "Storage": "bright_green",
}

# Message timestamps, e.g. "9:05 AM"
MESSAGE_TIME_FORMAT = "%I:%M %p"

# Log panel timestamps
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Entries kept for Up/Down recall in the input bar
INPUT_HISTORY_MAX_SIZE = 100

# Label used for the user's own turns
USER_LABEL = "You"

# Frames cycled by the typing indicator
TYPING_FRAMES = ("●○○", "○●○", "○○●")
TYPING_INTERVAL = 0.3  # Seconds between frames
