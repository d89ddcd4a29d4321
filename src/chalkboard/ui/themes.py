"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Dark/light mode configuration

Each persona contributes its accent colours; the neutral base comes from
the light or dark palette below.
"""

from textual.theme import Theme

from ..chat import DisplayMode
from ..persona import PersonaConfig

# Neutral bases (Tailwind slate scale)
_LIGHT_BASE = {
    "foreground": "#1e293b",    # slate-800
    "background": "#f1f5f9",    # slate-100
    "surface": "#ffffff",
    "panel": "#f8fafc",         # slate-50
    "border": "#cbd5e1",        # slate-300
    "muted": "#64748b",         # slate-500
}

_DARK_BASE = {
    "foreground": "#e2e8f0",    # slate-200
    "background": "#0f172a",    # slate-900
    "surface": "#1e293b",       # slate-800
    "panel": "#111827",
    "border": "#334155",        # slate-700
    "muted": "#94a3b8",         # slate-400
}


def theme_name(persona: PersonaConfig, mode: DisplayMode) -> str:
    """Registered name of the theme for a persona and display mode."""
    return f"{persona.key}-{mode.value}"


def build_theme(persona: PersonaConfig, mode: DisplayMode) -> Theme:
    """Build the Textual theme for a persona in the given display mode."""
    palette = persona.ui.palette
    base = _DARK_BASE if mode.is_dark else _LIGHT_BASE
    return Theme(
        name=theme_name(persona, mode),
        primary=palette.primary,
        secondary=palette.secondary,
        accent=palette.accent,
        foreground=base["foreground"],
        background=base["background"],
        surface=base["surface"],
        panel=base["panel"],
        success="#22c55e",
        warning="#f59e0b",
        error="#ef4444",
        dark=mode.is_dark,
        variables={
            # Border colors
            "border": base["border"],
            "border-blurred": base["border"],

            # Scrollbar styling
            "scrollbar": base["border"],
            "scrollbar-hover": palette.secondary,
            "scrollbar-active": palette.primary,
            "scrollbar-background": base["panel"],

            # Footer styling
            "footer-key-foreground": palette.accent,

            # Text variants
            "text-muted": base["muted"],

            # Input styling
            "input-selection-background": f"{palette.primary} 30%",
        },
    )


def persona_themes(persona: PersonaConfig) -> list[Theme]:
    """Both themes for a persona, ready to register."""
    return [build_theme(persona, mode) for mode in DisplayMode]
