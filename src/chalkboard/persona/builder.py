"""Prompt composition from persona data.

Hides the layout of the composed prompt. Each section getter returns one
block; ``build_prompt`` shows the order they are assembled in.
"""

from .models import PersonaConfig


def _quoted(phrases: list[str]) -> str:
    return ", ".join(f'"{phrase}"' for phrase in phrases)


def _identity(persona: PersonaConfig) -> str:
    traits = ", ".join(persona.personality.traits)
    return (
        f"You are {persona.name}, {persona.role} with the following traits: {traits}.\n"
        f"Your communication style is {persona.personality.communication_style}.\n"
        f"Your teaching style is {persona.personality.teaching_style}.\n"
        f"You have {persona.emotional_depth} emotional depth."
    )


def _classroom(persona: PersonaConfig) -> str:
    classroom = persona.classroom
    return (
        f"Your classroom has a {classroom.reputation} reputation.\n"
        f"Things that concern you: {', '.join(classroom.concerns)}.\n"
        f"Your common phrases include: {_quoted(classroom.common_phrases)}."
    )


def _behavior(persona: PersonaConfig) -> str:
    behavior = persona.classroom.behavior
    return "\n".join([
        "Your behavior includes:",
        f"- Apologies: {behavior.apologies}",
        f"- Handling mistakes: {behavior.mistakes}",
        f"- Jokes: {behavior.jokes}",
        f"- Teaching focus: {behavior.teaching}",
    ])


def _triggers(persona: PersonaConfig) -> str:
    triggers = persona.emotional_triggers
    lines = [
        f"You get happy when: {', '.join(triggers.gets_happy_when)}.",
        f"You apologize for: {', '.join(triggers.apologizes_for)}.",
    ]
    if triggers.gets_angry_when:
        lines.append(f"You get angry when: {', '.join(triggers.gets_angry_when)}.")
    return "\n".join(lines)


def _fill(template: str, values: dict[str, str]) -> str:
    """Substitute known ``{placeholder}``s; any other braces stay literal."""
    for key, value in values.items():
        template = template.replace("{" + key + "}", value)
    return template


def _response_style(persona: PersonaConfig) -> str:
    style = persona.response_style
    values = {
        "name": persona.name,
        "humor_style": persona.personality.humor_style,
    }
    lines = [f"IMPORTANT: When responding to the {style.student_label} (user):"]
    for number, directive in enumerate(style.directives, 1):
        lines.append(f"{number}. {_fill(directive, values)}")
    lines.append("")
    lines.append(_fill(style.closing, values))
    return "\n".join(lines)


def build_prompt(persona: PersonaConfig, user_text: str) -> str:
    """Compose the full prompt for one user message.

    Sections are joined in a fixed order: identity, classroom, behaviour,
    emotional triggers, response style, then the user's text verbatim.

    Args:
        persona: Persona whose data drives every section
        user_text: The user's message; appended unchanged at the end

    Returns:
        The composed prompt string
    """
    sections = [
        _identity(persona),
        _classroom(persona),
        _behavior(persona),
        _triggers(persona),
        _response_style(persona),
    ]
    label = persona.response_style.student_label
    return "\n\n".join(sections) + f"\n\nHere's the {label}'s message: {user_text}"
