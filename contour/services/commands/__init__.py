from .registry import CommandRegistry, command_registry, group_commands
from .catalog import CONTOUR_COMMANDS, MODULE_META, register_all_commands
from .navigation import NAV_TARGETS, NavigationTarget, resolve_navigation

__all__ = [
    "CommandRegistry",
    "command_registry",
    "group_commands",
    "CONTOUR_COMMANDS",
    "MODULE_META",
    "register_all_commands",
    "NAV_TARGETS",
    "NavigationTarget",
    "resolve_navigation",
]
