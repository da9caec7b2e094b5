"""
Command registry tests.

Covers:
- Search over name/description/category, grouped by category
- Navigation table lookup (exact then partial)
"""

from contour.models.command import CommandCategory, HandlerKind
from contour.models.module import ModuleId
from contour.services.commands import CONTOUR_COMMANDS, MODULE_META, resolve_navigation
from contour.services.commands.registry import group_commands


def test_every_module_has_a_command_and_placeholder(commands):
    ids = set(commands.get_command_ids())
    for module_id in ModuleId:
        assert module_id.value in ids
        assert MODULE_META[module_id]["placeholder"]


def test_empty_query_returns_everything_grouped(commands):
    results = commands.search_commands("")
    assert len(results) == len(CONTOUR_COMMANDS)
    categories = [cmd.category for cmd in results]
    # flattened list is contiguous per category
    seen = []
    for category in categories:
        if not seen or seen[-1] != category:
            assert category not in seen
            seen.append(category)


def test_search_is_case_insensitive_substring(commands):
    ids = [cmd.id for cmd in commands.search_commands("TIM")]
    assert "timer" in ids
    assert "timezone" in ids
    assert "calculator" not in ids


def test_search_matches_description_and_category(commands):
    assert "currency" in [cmd.id for cmd in commands.search_commands("exchange")]
    assert {cmd.category for cmd in commands.search_commands("converters")} == {CommandCategory.CONVERTERS}


def test_search_without_match_is_empty(commands):
    assert commands.search_commands("zzzz") == []
    assert commands.search_grouped("zzzz") == []


def test_grouped_labels(commands):
    groups = commands.search_grouped("")
    assert [g.category for g in groups][0] == CommandCategory.TOOLS
    assert all(g.label for g in groups)
    assert sum(len(g.commands) for g in groups) == len(CONTOUR_COMMANDS)


def test_group_commands_keeps_first_appearance_order():
    picked = [c for c in CONTOUR_COMMANDS if c.category in (CommandCategory.LANGUAGE, CommandCategory.TOOLS)]
    groups = group_commands(list(reversed(picked)))
    assert groups[0].category == CommandCategory.LANGUAGE


def test_navigation_commands_use_navigate_handler(commands):
    nav = [c for c in commands.search_commands("") if c.category == CommandCategory.NAVIGATION]
    assert nav
    assert all(c.handler.kind == HandlerKind.NAVIGATE for c in nav)
    assert len({c.handler.target for c in nav}) == len(nav)


def test_resolve_navigation_exact_and_partial():
    assert resolve_navigation("go cal").path == "/calendar"
    assert resolve_navigation("go kitchen").path == "/kitchen"
    assert resolve_navigation("go shopping list").path == "/shopping-list"
    assert resolve_navigation("go nowhere") is None
    assert resolve_navigation("calendar") is None
