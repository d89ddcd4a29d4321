"""Persona loading.

Personas ship as JSON files next to this module. A persona can be
overridden by placing ``personas/<key>.json`` in the working directory.
"""

from functools import lru_cache
from pathlib import Path

from .models import PersonaConfig

# Default persona directory (package location)
_PERSONA_DIR = Path(__file__).parent / "data"

DEFAULT_PERSONA = "supportive"


def _candidate_paths(key: str) -> list[Path]:
    filename = f"{key}.json"
    return [Path.cwd() / "personas" / filename, _PERSONA_DIR / filename]


@lru_cache(maxsize=8)
def load_persona(key: str = DEFAULT_PERSONA) -> PersonaConfig:
    """Load a persona by key.

    Search order:
    1. Current working directory: ./personas/{key}.json
    2. Package data directory: chalkboard/persona/data/{key}.json

    Args:
        key: Persona variant identifier

    Returns:
        Validated persona configuration

    Raises:
        FileNotFoundError: If the persona is not found in any location
        pydantic.ValidationError: If the file does not match the persona shape
    """
    paths = _candidate_paths(key)
    for path in paths:
        if path.exists():
            return PersonaConfig.model_validate_json(path.read_text(encoding="utf-8"))

    searched = "\n".join(f"  - {path}" for path in paths)
    raise FileNotFoundError(f"Persona '{key}' not found. Searched:\n{searched}")


def available_personas() -> list[str]:
    """List persona keys shipped with the package or overridden locally."""
    keys = {path.stem for path in _PERSONA_DIR.glob("*.json")}
    local_dir = Path.cwd() / "personas"
    if local_dir.is_dir():
        keys.update(path.stem for path in local_dir.glob("*.json"))
    return sorted(keys)


def clear_cache() -> None:
    """Clear the persona cache (useful after modifying persona files)."""
    load_persona.cache_clear()
