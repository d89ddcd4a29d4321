"""Persona module.

Static persona data and the prompt builder that turns it into a prompt.
"""

from .builder import build_prompt
from .loader import DEFAULT_PERSONA, available_personas, clear_cache, load_persona
from .models import PersonaConfig

__all__ = [
    "DEFAULT_PERSONA",
    "PersonaConfig",
    "available_personas",
    "build_prompt",
    "clear_cache",
    "load_persona",
]
