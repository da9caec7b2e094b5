from .module import (
    ModuleId,
    DetectionResult,
    ResolvableResult,
    CalculatorResult,
    UnitResult,
    CurrencyResult,
    TimezoneResult,
    ColorResult,
    DateResult,
    RandomResult,
    WordCountResult,
    TranslatorResult,
    DictionaryResult,
    Meaning,
)
from .command import Command, CommandCategory, CommandGroup, CommandHandler, HandlerKind, CATEGORY_INFO
from .state import ContourMode, ContourState, ModuleData, INITIAL_STATE

__all__ = [
    "ModuleId",
    "DetectionResult",
    "ResolvableResult",
    "CalculatorResult",
    "UnitResult",
    "CurrencyResult",
    "TimezoneResult",
    "ColorResult",
    "DateResult",
    "RandomResult",
    "WordCountResult",
    "TranslatorResult",
    "DictionaryResult",
    "Meaning",
    "Command",
    "CommandCategory",
    "CommandGroup",
    "CommandHandler",
    "HandlerKind",
    "CATEGORY_INFO",
    "ContourMode",
    "ContourState",
    "ModuleData",
    "INITIAL_STATE",
]
