"""Command Registry - palette entries and search."""
import logging
from typing import Dict, List, Optional

from contour.models.command import CATEGORY_INFO, Command, CommandGroup

logger = logging.getLogger(__name__)


def group_commands(commands: List[Command]) -> List[CommandGroup]:
    """Group by category, categories in order of first appearance."""
    grouped: Dict[str, List[Command]] = {}
    for cmd in commands:
        grouped.setdefault(cmd.category, []).append(cmd)
    return [
        CommandGroup(category=category, label=CATEGORY_INFO[category]["label"], commands=cmds)
        for category, cmds in grouped.items()
    ]


class CommandRegistry:
    """Manages registration, lookup and search of palette commands."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command):
        """Register a command. Ids are unique; re-registering replaces in place."""
        self._commands[command.id] = command
        logger.info(f"Command registered: {command.id}")

    def get_command(self, command_id: str) -> Optional[Command]:
        return self._commands.get(command_id)

    def has_commands(self) -> bool:
        return len(self._commands) > 0

    def get_command_ids(self) -> List[str]:
        return list(self._commands.keys())

    def search_commands(self, query: str) -> List[Command]:
        """
        Case-insensitive substring match over name, description and category.

        Returns:
            The flattened result list, ordered group by group so that an index
            into it matches the grouped display. Empty query returns everything.
        """
        q = query.strip().lower()
        matches = [
            cmd for cmd in self._commands.values()
            if not q
            or q in cmd.name.lower()
            or q in cmd.description.lower()
            or q in cmd.category.value
            or q in CATEGORY_INFO[cmd.category]["label"].lower()
        ]
        return [cmd for group in group_commands(matches) for cmd in group.commands]

    def search_grouped(self, query: str) -> List[CommandGroup]:
        return group_commands(self.search_commands(query))


# Global singleton
command_registry = CommandRegistry()
