"""Built-in palette commands and per-module placeholder hints."""
from typing import Dict, List

from contour.models.command import Command, CommandCategory, CommandHandler, HandlerKind
from contour.models.module import ModuleId
from .navigation import NAV_TARGETS
from .registry import CommandRegistry, command_registry

MODULE_META: Dict[ModuleId, Dict[str, str]] = {
    ModuleId.CALCULATOR: {"label": "Calculator", "icon": "Calculator", "placeholder": "Type a math expression... (e.g., 5+3*2)"},
    ModuleId.UNITS: {"label": "Unit Converter", "icon": "ArrowLeftRight", "placeholder": "e.g., 5km to miles, 100f to c, 2kg to lb"},
    ModuleId.CURRENCY: {"label": "Currency Converter", "icon": "DollarSign", "placeholder": "e.g., 50 usd to eur, 100 gbp to jpy"},
    ModuleId.TIMEZONE: {"label": "Timezone Converter", "icon": "Globe", "placeholder": "e.g., 3pm EST in IST, now in Tokyo"},
    ModuleId.COLOR: {"label": "Color Converter", "icon": "Palette", "placeholder": "e.g., #ff5733, rgb(255,87,51), coral"},
    ModuleId.DATE: {"label": "Date Calculator", "icon": "Calendar", "placeholder": "e.g., days until Dec 25, 30 days from now"},
    ModuleId.TIMER: {"label": "Timer", "icon": "Timer", "placeholder": "e.g., 5m, 1h30m, 90s, 10:00"},
    ModuleId.RANDOM: {"label": "Random", "icon": "Dices", "placeholder": "e.g., 2d6, flip a coin, random 1-100"},
    ModuleId.WORDCOUNT: {"label": "Word Count", "icon": "AlignLeft", "placeholder": "Paste or type text to count"},
    ModuleId.TRANSLATOR: {"label": "Translator", "icon": "Languages", "placeholder": "e.g., hello to french, en>de: good morning"},
    ModuleId.DICTIONARY: {"label": "Dictionary", "icon": "BookOpen", "placeholder": "Type a word to define"},
}


def _module_command(module_id: ModuleId, description: str, category: CommandCategory) -> Command:
    meta = MODULE_META[module_id]
    return Command(
        id=module_id.value,
        name=meta["label"],
        description=description,
        category=category,
        icon=meta["icon"],
        handler=CommandHandler(kind=HandlerKind.MODULE, target=module_id.value),
    )


def _navigation_commands() -> List[Command]:
    seen = set()
    commands = []
    for name, entry in NAV_TARGETS.items():
        if entry["path"] in seen:
            continue
        seen.add(entry["path"])
        commands.append(Command(
            id=f"go-{name}",
            name=f"Go to {name.title()}",
            description=f"Open {entry['path']}",
            category=CommandCategory.NAVIGATION,
            icon=entry["icon"],
            handler=CommandHandler(kind=HandlerKind.NAVIGATE, target=entry["path"]),
        ))
    return commands


CONTOUR_COMMANDS: List[Command] = [
    _module_command(ModuleId.CALCULATOR, "Evaluate math expressions", CommandCategory.TOOLS),
    _module_command(ModuleId.TIMER, "Start a countdown", CommandCategory.TOOLS),
    _module_command(ModuleId.RANDOM, "Roll dice, flip coins, pick numbers", CommandCategory.TOOLS),
    _module_command(ModuleId.DATE, "Days between dates and offsets", CommandCategory.TOOLS),
    _module_command(ModuleId.UNITS, "Length, weight, temperature and more", CommandCategory.CONVERTERS),
    _module_command(ModuleId.CURRENCY, "Live exchange rates", CommandCategory.CONVERTERS),
    _module_command(ModuleId.TIMEZONE, "Convert times between zones", CommandCategory.CONVERTERS),
    _module_command(ModuleId.COLOR, "HEX, RGB and HSL", CommandCategory.CONVERTERS),
    _module_command(ModuleId.TRANSLATOR, "Translate text between languages", CommandCategory.LANGUAGE),
    _module_command(ModuleId.DICTIONARY, "Look up word definitions", CommandCategory.LANGUAGE),
    _module_command(ModuleId.WORDCOUNT, "Count words and characters", CommandCategory.LANGUAGE),
    *_navigation_commands(),
]


def register_all_commands(registry: CommandRegistry = command_registry) -> CommandRegistry:
    """Register the built-in commands. Call at startup; safe to call twice."""
    for command in CONTOUR_COMMANDS:
        registry.register(command)
    return registry
