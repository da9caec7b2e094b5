"""Module ids and detection result models"""
from datetime import date as Date
from enum import Enum
from typing import List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


class ModuleId(str, Enum):
    """Embedded tool types"""
    CALCULATOR = "calculator"
    UNITS = "units"
    CURRENCY = "currency"
    TIMEZONE = "timezone"
    COLOR = "color"
    DATE = "date"
    TIMER = "timer"
    RANDOM = "random"
    WORDCOUNT = "wordcount"
    TRANSLATOR = "translator"
    DICTIONARY = "dictionary"


class DetectionResult(BaseModel):
    """Base for every detector output"""
    model_config = ConfigDict(frozen=True)

    display: str
    is_partial: bool = False  # recognized shape, not yet complete


class ResolvableResult(DetectionResult):
    """Result completed asynchronously by a resolver"""
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def needs_resolution(self) -> bool:
        return not self.is_partial and self.is_loading


class CalculatorResult(DetectionResult):
    expression: str
    value: Optional[float] = None


class UnitResult(DetectionResult):
    category: Optional[str] = None
    from_value: float
    from_unit: str
    to_unit: Optional[str] = None
    to_value: Optional[float] = None


class CurrencyResult(ResolvableResult):
    from_value: float
    from_currency: str
    to_currency: Optional[str] = None
    to_value: Optional[float] = None
    rate: Optional[float] = None


class TimezoneResult(DetectionResult):
    from_time: str
    from_zone: str
    to_zone: Optional[str] = None
    to_time: Optional[str] = None
    day_offset: int = 0
    subtitle: Optional[str] = None


class ColorResult(DetectionResult):
    input: str
    hex: Optional[str] = None
    rgb: Optional[Tuple[int, int, int]] = None
    hsl: Optional[Tuple[int, int, int]] = None
    name: Optional[str] = None
    subtitle: Optional[str] = None


class DateResult(DetectionResult):
    target_date: Optional[Date] = None
    days: Optional[int] = None
    subtitle: Optional[str] = None


class RandomResult(DetectionResult):
    kind: Literal["dice", "coin", "number"]
    spec: str
    values: List[Union[int, str]] = Field(default_factory=list)
    total: Optional[int] = None


class WordCountResult(DetectionResult):
    words: int = 0
    characters: int = 0
    characters_no_spaces: int = 0
    sentences: int = 0
    lines: int = 0
    reading_time_seconds: int = 0


class TranslatorResult(ResolvableResult):
    text: str
    source_lang: str = "auto"
    target_lang: Optional[str] = None
    translated: Optional[str] = None


class Meaning(BaseModel):
    model_config = ConfigDict(frozen=True)

    part_of_speech: str
    definition: str
    example: Optional[str] = None


class DictionaryResult(ResolvableResult):
    word: str
    phonetic: Optional[str] = None
    meanings: List[Meaning] = Field(default_factory=list)
