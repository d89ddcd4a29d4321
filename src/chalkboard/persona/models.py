"""Data models for persona configuration.

A persona is static, read-only data loaded once at startup. Every variant
shares the same shape; only the values differ.
"""

from pydantic import BaseModel, ConfigDict, Field


class Personality(BaseModel):
    """Character traits and style descriptors."""

    model_config = ConfigDict(frozen=True)

    traits: list[str] = Field(default_factory=list)
    communication_style: str
    teaching_style: str
    humor_style: str


class ClassroomBehavior(BaseModel):
    """Free-text directives for each behaviour category."""

    model_config = ConfigDict(frozen=True)

    apologies: str
    mistakes: str
    jokes: str
    teaching: str


class Classroom(BaseModel):
    model_config = ConfigDict(frozen=True)

    reputation: str
    concerns: list[str] = Field(default_factory=list)
    common_phrases: list[str] = Field(default_factory=list)
    behavior: ClassroomBehavior


class EmotionalTriggers(BaseModel):
    model_config = ConfigDict(frozen=True)

    gets_happy_when: list[str] = Field(default_factory=list)
    apologizes_for: list[str] = Field(default_factory=list)
    gets_angry_when: list[str] = Field(default_factory=list)


class ResponseStyle(BaseModel):
    """Per-variant template for the closing block of the prompt.

    Directives and closing may reference ``{name}`` and ``{humor_style}``;
    other braces are kept as written.
    """

    model_config = ConfigDict(frozen=True)

    directives: list[str] = Field(min_length=1)
    closing: str
    student_label: str = Field(default="student", description="How the prompt refers to the user")


class Palette(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str


class PersonaUI(BaseModel):
    """Static user-facing strings and colours for a persona."""

    model_config = ConfigDict(frozen=True)

    tagline: str
    motto: str
    welcome_title: str
    welcome_body: str
    welcome_quote: str
    input_placeholder: str
    error_message: str = Field(description="Fallback shown when the model call fails")
    clear_confirmation: str = Field(description="Prompt shown before clearing history")
    palette: Palette


class PersonaConfig(BaseModel):
    """Complete persona definition."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Variant identifier, e.g. 'supportive'")
    name: str
    role: str = Field(description="Role framing, e.g. 'a supportive teacher AI'")
    personality: Personality
    emotional_depth: str
    classroom: Classroom
    emotional_triggers: EmotionalTriggers
    response_style: ResponseStyle
    ui: PersonaUI
