"""
Contour engine (state machine) tests.

Covers:
- hidden / commands / module transitions driven by analyze()
- Command palette selection with wraparound
- Focused stickiness, including the running-timer input lock
- Generation checks on async resolution
- Host callbacks: navigation, copy, subscribers, timer completion
"""

import pytest

from contour.models.command import Command, CommandCategory, CommandHandler, HandlerKind
from contour.models.module import ModuleId
from contour.models.state import ContourMode, INITIAL_STATE
from contour.services.commands import group_commands
from contour.services.timer.models.timer_state import TimerPhase
from tests.conftest import settle_tasks


# ---------------------------------------------------------------------------
# Mode transitions
# ---------------------------------------------------------------------------

def test_starts_hidden(engine):
    assert engine.state == INITIAL_STATE
    assert not engine.is_visible


def test_empty_input_hides(engine):
    engine.analyze("5+5")
    assert engine.state.mode == ContourMode.MODULE
    engine.analyze("   ")
    assert engine.state == INITIAL_STATE


def test_slash_opens_full_palette(engine, commands):
    state = engine.analyze("/")
    assert state.mode == ContourMode.COMMANDS
    assert state.selected_index == 0
    assert state.command_query == ""
    assert [c.id for c in state.commands] == [c.id for c in commands.search_commands("")]


def test_slash_query_filters(engine):
    state = engine.analyze("/tim")
    ids = {c.id for c in state.commands}
    assert {"timer", "timezone"} <= ids
    assert state.command_query == "tim"


def test_go_query_offers_navigation_shortcut(engine):
    state = engine.analyze("/go cal")
    first = state.commands[0]
    assert first.handler.kind == HandlerKind.NAVIGATE
    assert first.handler.target == "/calendar"


def test_go_shortcut_keeps_flat_list_grouped(engine_factory, commands):
    commands.register(Command(
        id="calc-gains",
        name="Gains",
        description="go calculate gains",
        category=CommandCategory.TOOLS,
        icon="Calculator",
        handler=CommandHandler(kind=HandlerKind.MODULE, target="calculator"),
    ))
    engine = engine_factory(commands=commands)
    state = engine.analyze("/go cal")

    flattened = [cmd for group in group_commands(state.commands) for cmd in group.commands]
    assert state.commands == flattened
    assert state.commands[0].id == "calc-gains"
    navigation = [cmd for cmd in state.commands if cmd.category == CommandCategory.NAVIGATION]
    assert navigation[0].handler.target == "/calendar"


def test_units_scenario(engine):
    state = engine.analyze("5km to miles")
    assert state.mode == ContourMode.MODULE
    assert state.module.id == ModuleId.UNITS
    assert state.module.focused is False
    assert state.module.units.is_partial is False


def test_no_match_hides(engine):
    engine.analyze("5+5")
    assert engine.analyze("just chatting").mode == ContourMode.HIDDEN


def test_auto_detected_module_is_replaced_on_change(engine):
    engine.analyze("#ff0000")
    assert engine.state.module.id == ModuleId.COLOR
    engine.analyze("2*21")
    assert engine.state.module.id == ModuleId.CALCULATOR
    assert engine.state.module.calculator.value == 42


# ---------------------------------------------------------------------------
# Palette selection
# ---------------------------------------------------------------------------

def test_select_down_is_circular(engine):
    state = engine.analyze("/")
    n = len(state.commands)
    for _ in range(n):
        engine.select_down()
    assert engine.state.selected_index == 0


def test_select_up_wraps_to_last(engine):
    state = engine.analyze("/")
    engine.select_up()
    assert engine.state.selected_index == len(state.commands) - 1
    assert engine.selected_command == state.commands[-1]


def test_selection_noop_when_empty(engine):
    state = engine.analyze("/zzzz")
    assert state.commands == []
    assert engine.select_down() is state
    assert engine.select_up() is state
    assert engine.selected_command is None


def test_selection_noop_outside_palette(engine):
    state = engine.analyze("5+5")
    assert engine.select_down() is state


def test_select_module_command_focuses(engine):
    engine.analyze("/calc")
    engine.select_command()
    state = engine.state
    assert state.mode == ContourMode.MODULE
    assert state.module.id == ModuleId.CALCULATOR
    assert state.module.focused is True
    assert state.commands == []


def test_select_navigation_command_calls_host_and_dismisses(engine, navigations):
    engine.analyze("/go kitchen")
    engine.select_command()
    assert navigations == ["/kitchen"]
    assert engine.state == INITIAL_STATE


# ---------------------------------------------------------------------------
# Focused mode
# ---------------------------------------------------------------------------

def test_focus_round_trip_stays_focused(engine):
    engine.focus_on_module("calculator")
    state = engine.analyze("2+2")
    assert state.module.calculator.value == 4
    assert state.module.focused is True

    state = engine.analyze("")
    assert state.mode == ContourMode.MODULE
    assert state.module.id == ModuleId.CALCULATOR
    assert state.module.focused is True
    assert state.module.result is None
    assert engine.is_focused


def test_focused_mode_ignores_priority_chain(engine):
    engine.focus_on_module("calculator")
    state = engine.analyze("5km to miles")
    assert state.module.id == ModuleId.CALCULATOR
    assert state.module.result is None


def test_focused_mode_ignores_command_trigger(engine):
    engine.focus_on_module("wordcount")
    state = engine.analyze("/not a command")
    assert state.mode == ContourMode.MODULE
    assert state.module.wordcount.words == 3


def test_focus_unknown_module_keeps_state(engine):
    state = engine.analyze("/")
    assert engine.focus_on_module("teleporter") is state


def test_dismiss_leaves_focus(engine):
    engine.focus_on_module("date")
    engine.dismiss()
    assert engine.state == INITIAL_STATE
    assert engine.analyze("5+5").module.focused is False


# ---------------------------------------------------------------------------
# Timer through the engine
# ---------------------------------------------------------------------------

def test_focused_timer_lifecycle(engine, intervals, completed_timers):
    engine.focus_on_module("timer")
    state = engine.analyze("3s")
    assert state.module.timer.total_seconds == 3

    engine.start_timer()
    assert engine.state.module.timer.is_running
    assert len(intervals.active) == 1

    # running timers ignore input
    before = engine.state
    assert engine.analyze("10m") is before

    intervals.advance(3)
    timer = engine.state.module.timer
    assert timer.is_complete
    assert timer.display == "00:00"
    assert len(completed_timers) == 1
    assert not intervals.active


def test_paused_timer_accepts_new_duration(engine, intervals):
    engine.focus_on_module("timer")
    engine.analyze("5m")
    engine.start_timer()
    intervals.advance(10)
    engine.toggle_timer()
    assert engine.timer.phase == TimerPhase.PAUSED
    assert engine.state.module.timer.remaining_seconds == 290

    state = engine.analyze("2m")
    assert state.module.timer.total_seconds == 120
    assert not intervals.active


def test_malformed_duration_gives_placeholder(engine):
    engine.focus_on_module("timer")
    state = engine.analyze("soon")
    assert state.module.id == ModuleId.TIMER
    assert state.module.timer is None


def test_set_timer_duration_on_bare_timer(engine):
    engine.focus_on_module("timer")
    engine.set_timer_duration(90)
    timer = engine.state.module.timer
    assert timer.total_seconds == 90
    assert timer.label == "1m 30s"


def test_reset_timer(engine, intervals):
    engine.focus_on_module("timer")
    engine.analyze("1m")
    engine.start_timer()
    intervals.advance(20)
    engine.reset_timer()
    timer = engine.state.module.timer
    assert timer.remaining_seconds == timer.total_seconds == 60
    assert not timer.is_running
    assert not timer.is_complete


def test_dismiss_clears_running_interval(engine, intervals):
    engine.focus_on_module("timer")
    engine.analyze("1m")
    engine.start_timer()
    engine.dismiss()
    assert not intervals.active
    intervals.advance(5)
    assert engine.state == INITIAL_STATE


def test_timer_controls_ignored_for_other_modules(engine, intervals):
    engine.analyze("5+5")
    engine.start_timer()
    assert not intervals.intervals


# ---------------------------------------------------------------------------
# Async resolution
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_currency_loads_then_resolves(engine, currency_resolver):
    state = engine.analyze("50 usd to eur")
    assert state.module.currency.is_loading

    await settle_tasks()
    currency_resolver.settle(0, 0.9)
    await engine.wait_for_pending()

    result = engine.state.module.currency
    assert not result.is_loading
    assert result.rate == 0.9
    assert result.to_value == pytest.approx(45)


@pytest.mark.asyncio
@pytest.mark.parametrize("order", [(0, 1), (1, 0)])
async def test_superseded_currency_result_is_never_applied(engine, currency_resolver, order):
    engine.analyze("50 usd to eur")
    await settle_tasks()
    engine.analyze("50 usd to gbp")
    await settle_tasks()
    assert len(currency_resolver.calls) == 2

    rates = {0: 0.92, 1: 0.79}
    for index in order:
        currency_resolver.settle(index, rates[index])
        await settle_tasks()
    await engine.wait_for_pending()

    result = engine.state.module.currency
    assert result.to_currency == "GBP"
    assert result.rate == 0.79


@pytest.mark.asyncio
async def test_result_dropped_after_module_change(engine, currency_resolver):
    engine.analyze("50 usd to eur")
    await settle_tasks()
    engine.analyze("5+5")
    currency_resolver.settle(0, 0.9)
    await engine.wait_for_pending()
    assert engine.state.module.id == ModuleId.CALCULATOR


@pytest.mark.asyncio
async def test_result_dropped_after_dismiss(engine, currency_resolver):
    engine.analyze("50 usd to eur")
    await settle_tasks()
    engine.dismiss()
    currency_resolver.settle(0, 0.9)
    await engine.wait_for_pending()
    assert engine.state == INITIAL_STATE


@pytest.mark.asyncio
async def test_resolver_failure_becomes_error_field(engine, currency_resolver):
    engine.analyze("50 usd to eur")
    await settle_tasks()
    currency_resolver.settle(0, RuntimeError("rate service exploded"))
    await engine.wait_for_pending()

    result = engine.state.module.currency
    assert result.error == "Lookup failed"
    assert not result.is_loading


@pytest.mark.asyncio
async def test_focused_translator_resolves(engine, translator_resolver):
    engine.focus_on_module("translator")
    engine.analyze("good morning to french")
    await engine.wait_for_pending()
    result = engine.state.module.translator
    assert result.translated == "<good morning>"
    assert result.target_lang == "fr"
    assert translator_resolver.calls == 1


@pytest.mark.asyncio
async def test_channel_without_resolver_stays_loading(engine):
    engine.analyze("define serendipity")
    await engine.wait_for_pending()
    assert engine.state.module.dictionary.is_loading


def test_without_event_loop_result_stays_loading(engine, currency_resolver):
    state = engine.analyze("50 usd to eur")
    assert state.module.currency.is_loading
    assert currency_resolver.calls == []


@pytest.mark.asyncio
async def test_partial_currency_is_not_dispatched(engine, currency_resolver):
    engine.analyze("50 usd to")
    await settle_tasks()
    assert currency_resolver.calls == []


def test_generation_bumps_on_each_request(engine):
    start = engine.generation(ModuleId.CURRENCY)
    engine.analyze("50 usd to eur")
    engine.analyze("50 usd to gbp")
    assert engine.generation(ModuleId.CURRENCY) == start + 2


# ---------------------------------------------------------------------------
# Host callbacks
# ---------------------------------------------------------------------------

def test_subscribe_and_unsubscribe(engine):
    seen = []
    unsubscribe = engine.subscribe(seen.append)
    engine.analyze("5+5")
    unsubscribe()
    engine.analyze("")
    assert len(seen) == 1
    assert seen[0].module.id == ModuleId.CALCULATOR


def test_broken_listener_does_not_break_engine(engine):
    def broken(_state):
        raise ValueError("render failed")

    engine.subscribe(broken)
    assert engine.analyze("5+5").mode == ContourMode.MODULE


def test_copy_value_goes_to_host(engine_factory):
    copied = []
    engine = engine_factory(on_copy=copied.append)
    engine.on_copy_value("42")
    assert copied == ["42"]


def test_copy_value_without_handler_is_noop(engine):
    engine.on_copy_value("42")
