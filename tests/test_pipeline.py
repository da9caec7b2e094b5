"""
Detection pipeline tests.

Covers:
- Priority order is explicit data and first match wins
- Focused detection never returns None
- The resolution continuation drops stale results
"""

import pytest

from contour.models.module import ModuleId, CurrencyResult
from contour.models.state import ContourMode, ContourState, ModuleData
from contour.services.detectors.currency import apply_rate, detect_currency
from contour.services.engine import (
    DETECTOR_CHAIN,
    FOCUSED_DETECTORS,
    DetectorEntry,
    apply_resolution,
    auto_detect,
    detector_order,
    focused_detect,
)
from contour.services.engine.pipeline import run_detector
from tests.conftest import FIXED_NOW


def test_priority_order_is_fixed():
    assert detector_order() == [
        ModuleId.COLOR,
        ModuleId.UNITS,
        ModuleId.CURRENCY,
        ModuleId.TIMEZONE,
        ModuleId.DATE,
        ModuleId.RANDOM,
        ModuleId.TRANSLATOR,
        ModuleId.DICTIONARY,
        ModuleId.WORDCOUNT,
        ModuleId.CALCULATOR,
    ]


def test_every_module_has_a_focused_detector():
    assert set(FOCUSED_DETECTORS) == set(ModuleId)


@pytest.mark.parametrize("text", ["#123456", "#123", "#000000"])
def test_color_beats_calculator(text):
    module = auto_detect(text)
    assert module.id == ModuleId.COLOR


@pytest.mark.parametrize(
    "text, module_id",
    [
        ("5km to miles", ModuleId.UNITS),
        ("50 usd to eur", ModuleId.CURRENCY),
        ("50 pounds to usd", ModuleId.CURRENCY),
        ("10 pounds to euros", ModuleId.CURRENCY),
        ("10 pounds to kg", ModuleId.UNITS),
        ("3pm EST in IST", ModuleId.TIMEZONE),
        ("days until christmas", ModuleId.DATE),
        ("roll 2d6", ModuleId.RANDOM),
        ("translate hello to french", ModuleId.TRANSLATOR),
        ("define serendipity", ModuleId.DICTIONARY),
        ("wc: one two three", ModuleId.WORDCOUNT),
        ("5+3*2", ModuleId.CALCULATOR),
    ],
)
def test_auto_detect_routes_by_grammar(text, module_id):
    module = auto_detect(text, now=FIXED_NOW)
    assert module.id == module_id
    assert module.focused is False
    assert module.result is not None


@pytest.mark.parametrize("text", ["", "   ", "hello there", "5m", "42"])
def test_auto_detect_no_match(text):
    assert auto_detect(text) is None


def test_focused_miss_yields_bare_module():
    module = focused_detect(ModuleId.CALCULATOR, "not math")
    assert module == ModuleData.bare(ModuleId.CALCULATOR)
    assert module.focused is True
    assert module.result is None


def test_focused_timer_parses_durations():
    module = focused_detect(ModuleId.TIMER, "1h30m")
    assert module.timer.total_seconds == 5400


def test_focused_skips_priority_chain():
    # "#123" would be a color in auto mode
    assert focused_detect(ModuleId.CALCULATOR, "#123").result is None


def test_raising_detector_counts_as_no_match():
    def broken(text):
        raise RuntimeError("boom")

    assert run_detector(DetectorEntry(ModuleId.CALCULATOR, broken), "1+1") is None


def _loading_state():
    partial = detect_currency("50 usd to eur")
    return ContourState(mode=ContourMode.MODULE, module=ModuleData.with_result(ModuleId.CURRENCY, partial)), partial


def test_apply_resolution_current_generation():
    state, partial = _loading_state()
    resolved = apply_rate(partial, 0.9)
    new_state = apply_resolution(state, ModuleId.CURRENCY, 3, 3, resolved)
    assert new_state.module.currency.rate == 0.9
    assert state.module.currency.rate is None


def test_apply_resolution_discards_old_generation():
    state, partial = _loading_state()
    assert apply_resolution(state, ModuleId.CURRENCY, 2, 3, apply_rate(partial, 0.9)) is state


def test_apply_resolution_discards_other_module():
    state = ContourState(
        mode=ContourMode.MODULE,
        module=ModuleData.bare(ModuleId.CALCULATOR),
    )
    result = CurrencyResult(from_value=1, from_currency="USD", to_currency="EUR", display="x")
    assert apply_resolution(state, ModuleId.CURRENCY, 1, 1, result) is state


def test_chain_entries_declare_clock_and_rng_use():
    flags = {entry.module_id: (entry.uses_clock, entry.uses_rng) for entry in DETECTOR_CHAIN}
    assert flags[ModuleId.DATE] == (True, False)
    assert flags[ModuleId.RANDOM] == (False, True)
