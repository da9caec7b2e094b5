"""Contour state snapshot models"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from contour.models.command import Command
from contour.models.module import (
    ModuleId,
    DetectionResult,
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
)
from contour.services.timer.models.timer_state import TimerState


class ContourMode(str, Enum):
    HIDDEN = "hidden"
    COMMANDS = "commands"
    MODULE = "module"


class ModuleData(BaseModel):
    """
    Active module payload. At most one result field is populated and it
    matches `id`. focused=True means the module was opened from the palette.
    """
    model_config = ConfigDict(frozen=True)

    id: ModuleId
    focused: bool = False
    calculator: Optional[CalculatorResult] = None
    units: Optional[UnitResult] = None
    currency: Optional[CurrencyResult] = None
    timezone: Optional[TimezoneResult] = None
    color: Optional[ColorResult] = None
    date: Optional[DateResult] = None
    timer: Optional[TimerState] = None
    random: Optional[RandomResult] = None
    wordcount: Optional[WordCountResult] = None
    translator: Optional[TranslatorResult] = None
    dictionary: Optional[DictionaryResult] = None

    @classmethod
    def bare(cls, module_id: ModuleId, focused: bool = True) -> "ModuleData":
        """Module with no result payload (renders the placeholder hint)."""
        return cls(id=module_id, focused=focused)

    @classmethod
    def with_result(cls, module_id: ModuleId, result, focused: bool = False) -> "ModuleData":
        return cls(id=module_id, focused=focused, **{module_id.value: result})

    @property
    def result(self) -> Optional[DetectionResult | TimerState]:
        return getattr(self, self.id.value)


class ContourState(BaseModel):
    """Immutable snapshot handed to the UI layer after every engine call."""
    model_config = ConfigDict(frozen=True)

    mode: ContourMode = ContourMode.HIDDEN
    module: Optional[ModuleData] = None
    commands: List[Command] = Field(default_factory=list)
    command_query: str = ""
    selected_index: int = 0


INITIAL_STATE = ContourState()
