"""
Detection pipeline

The auto-detect priority order is data: DETECTOR_CHAIN is walked top to
bottom and the first non-None result wins. Narrow grammars come first; the
calculator is the catch-all and must stay last.
"""
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from contour.models.module import ModuleId
from contour.models.state import ContourMode, ContourState, ModuleData
from contour.services.detectors import (
    detect_calculator,
    detect_units,
    detect_currency,
    detect_timezone,
    detect_color,
    detect_date,
    detect_timer,
    detect_random,
    detect_word_count,
    focused_word_count,
    detect_translator,
    focused_translator,
    detect_dictionary,
    focused_dictionary,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorEntry:
    module_id: ModuleId
    detect: Callable[..., Any]
    uses_clock: bool = False
    uses_rng: bool = False


DETECTOR_CHAIN: Tuple[DetectorEntry, ...] = (
    DetectorEntry(ModuleId.COLOR, detect_color),
    DetectorEntry(ModuleId.UNITS, detect_units),
    DetectorEntry(ModuleId.CURRENCY, detect_currency),
    DetectorEntry(ModuleId.TIMEZONE, detect_timezone, uses_clock=True),
    DetectorEntry(ModuleId.DATE, detect_date, uses_clock=True),
    DetectorEntry(ModuleId.RANDOM, detect_random, uses_rng=True),
    DetectorEntry(ModuleId.TRANSLATOR, detect_translator),
    DetectorEntry(ModuleId.DICTIONARY, detect_dictionary),
    DetectorEntry(ModuleId.WORDCOUNT, detect_word_count),
    DetectorEntry(ModuleId.CALCULATOR, detect_calculator),
)

# Focused mode: one detector per module, some more permissive than their auto-detect twin
FOCUSED_DETECTORS: Dict[ModuleId, DetectorEntry] = {
    ModuleId.CALCULATOR: DetectorEntry(ModuleId.CALCULATOR, detect_calculator),
    ModuleId.UNITS: DetectorEntry(ModuleId.UNITS, detect_units),
    ModuleId.CURRENCY: DetectorEntry(ModuleId.CURRENCY, detect_currency),
    ModuleId.TIMEZONE: DetectorEntry(ModuleId.TIMEZONE, detect_timezone, uses_clock=True),
    ModuleId.COLOR: DetectorEntry(ModuleId.COLOR, detect_color),
    ModuleId.DATE: DetectorEntry(ModuleId.DATE, detect_date, uses_clock=True),
    ModuleId.TIMER: DetectorEntry(ModuleId.TIMER, detect_timer),
    ModuleId.RANDOM: DetectorEntry(ModuleId.RANDOM, detect_random, uses_rng=True),
    ModuleId.WORDCOUNT: DetectorEntry(ModuleId.WORDCOUNT, focused_word_count),
    ModuleId.TRANSLATOR: DetectorEntry(ModuleId.TRANSLATOR, focused_translator),
    ModuleId.DICTIONARY: DetectorEntry(ModuleId.DICTIONARY, focused_dictionary),
}


def detector_order() -> List[ModuleId]:
    return [entry.module_id for entry in DETECTOR_CHAIN]


def run_detector(
    entry: DetectorEntry,
    text: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
):
    """Call one detector. An unexpected exception counts as no match."""
    kwargs = {}
    if entry.uses_clock:
        kwargs["now"] = now
    if entry.uses_rng:
        kwargs["rng"] = rng
    try:
        return entry.detect(text, **kwargs)
    except Exception as e:
        logger.error(f"Detector {entry.module_id.value} failed on {text!r}: {e}")
        return None


def auto_detect(
    text: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Optional[ModuleData]:
    """First match along DETECTOR_CHAIN as an unfocused module, or None."""
    trimmed = text.strip()
    if not trimmed:
        return None
    for entry in DETECTOR_CHAIN:
        result = run_detector(entry, trimmed, now, rng)
        if result is not None:
            logger.debug(f"Auto-detected {entry.module_id.value}: {trimmed!r}")
            return ModuleData.with_result(entry.module_id, result, focused=False)
    return None


def focused_detect(
    module_id: ModuleId,
    text: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> ModuleData:
    """Run only the focused module's detector. A miss yields the bare placeholder, never None."""
    trimmed = text.strip()
    result = run_detector(FOCUSED_DETECTORS[module_id], trimmed, now, rng) if trimmed else None
    if result is None:
        return ModuleData.bare(module_id, focused=True)
    return ModuleData.with_result(module_id, result, focused=True)


def apply_resolution(
    state: ContourState,
    module_id: ModuleId,
    captured_generation: int,
    current_generation: int,
    result,
) -> ContourState:
    """
    Continuation for a settled resolver.

    Returns `state` unchanged (the same object) when the result is stale: the
    channel's generation moved on, or a different module is showing.
    """
    if captured_generation != current_generation:
        return state
    module = state.module
    if state.mode != ContourMode.MODULE or module is None or module.id != module_id:
        return state
    return state.model_copy(update={"module": module.model_copy(update={module_id.value: result})})
