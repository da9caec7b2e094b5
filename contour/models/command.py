"""Command palette models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict


class CommandCategory(str, Enum):
    """Palette groups, in display order"""
    TOOLS = "tools"
    CONVERTERS = "converters"
    LANGUAGE = "language"
    NAVIGATION = "navigation"


class HandlerKind(str, Enum):
    """What selecting a command does"""
    MODULE = "module"      # focus an embedded tool
    NAVIGATE = "navigate"  # hand a path to the host


class CommandHandler(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: HandlerKind
    target: str


class Command(BaseModel):
    """Static palette entry. Loaded once, never mutated."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: CommandCategory
    icon: str
    handler: CommandHandler


class CommandGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: CommandCategory
    label: str
    commands: list[Command]


CATEGORY_INFO = {
    CommandCategory.TOOLS: {"label": "Tools", "icon": "Wrench"},
    CommandCategory.CONVERTERS: {"label": "Converters", "icon": "ArrowLeftRight"},
    CommandCategory.LANGUAGE: {"label": "Language", "icon": "Type"},
    CommandCategory.NAVIGATION: {"label": "Go to", "icon": "Monitor"},
}
