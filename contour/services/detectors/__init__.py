"""Detectors - one pure function per module type."""
from .calculator import detect_calculator
from .units import detect_units
from .currency import detect_currency
from .timezone import detect_timezone
from .color import detect_color
from .date import detect_date
from .timer import detect_timer
from .random_gen import detect_random
from .word_count import detect_word_count, focused_word_count
from .translator import detect_translator, focused_translator
from .dictionary import detect_dictionary, focused_dictionary

__all__ = [
    "detect_calculator",
    "detect_units",
    "detect_currency",
    "detect_timezone",
    "detect_color",
    "detect_date",
    "detect_timer",
    "detect_random",
    "detect_word_count",
    "focused_word_count",
    "detect_translator",
    "focused_translator",
    "detect_dictionary",
    "focused_dictionary",
]
