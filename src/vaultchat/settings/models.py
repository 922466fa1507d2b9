"""Settings data model.

Field names are snake_case in Python and camelCase on disk, so a settings
record written by the note-app plugin (``apiKey``, ``conversationFolder``...)
loads unchanged.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_CONVERSATION_FOLDER = "convos"


class Hotkey(BaseModel):
    """A key plus the modifiers held with it, e.g. Mod+Shift+N."""

    model_config = ConfigDict(frozen=True)

    modifiers: list[str] = Field(default_factory=list)
    key: str


class Shortcuts(BaseModel):
    """Keybindings for the four named actions. An empty list means unbound."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    open_interface: list[Hotkey] = Field(
        default_factory=lambda: [Hotkey(modifiers=["Mod"], key="O")]
    )
    open_last_conversation: list[Hotkey] = Field(
        default_factory=lambda: [Hotkey(modifiers=["Mod"], key="L")]
    )
    new_conversation: list[Hotkey] = Field(
        default_factory=lambda: [Hotkey(modifiers=["Mod", "Shift"], key="N")]
    )
    hide_interface: list[Hotkey] = Field(
        default_factory=lambda: [Hotkey(modifiers=["Mod"], key="H")]
    )


class Settings(BaseModel):
    """Process-wide configuration, persisted on every mutation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    api_key: str = Field(default="", description="Anthropic API key")
    conversation_folder: str = Field(
        default=DEFAULT_CONVERSATION_FOLDER,
        description="Vault folder where conversations are saved",
    )
    current_conversation_path: str | None = Field(
        default=None,
        description="Vault path of the active conversation (may be stale)",
    )
    include_all_open_files: bool = Field(
        default=False,
        description="Attach every open note as context, not just the active one",
    )
    shortcuts: Shortcuts = Field(default_factory=Shortcuts)
