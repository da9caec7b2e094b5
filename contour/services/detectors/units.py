"""Unit converter detector - "<number> <unit> to <unit>" across physical categories."""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from contour.models.module import UnitResult
from contour.services.detectors.currency import resolve_code
from contour.utils.number_format import format_number, parse_number


@dataclass(frozen=True)
class Unit:
    symbol: str
    category: str
    factor: float  # multiplier to the category base unit
    aliases: Tuple[str, ...] = ()


UNITS: List[Unit] = [
    # length (base: metre)
    Unit("mm", "length", 0.001, ("millimeter", "millimeters", "millimetre", "millimetres")),
    Unit("cm", "length", 0.01, ("centimeter", "centimeters", "centimetre", "centimetres")),
    Unit("m", "length", 1.0, ("meter", "meters", "metre", "metres")),
    Unit("km", "length", 1000.0, ("kilometer", "kilometers", "kilometre", "kilometres", "kms")),
    Unit("in", "length", 0.0254, ("inch", "inches", '"')),
    Unit("ft", "length", 0.3048, ("foot", "feet", "'")),
    Unit("yd", "length", 0.9144, ("yard", "yards")),
    Unit("mi", "length", 1609.344, ("mile", "miles")),
    Unit("nmi", "length", 1852.0, ("nautical mile", "nautical miles")),
    # mass (base: gram)
    Unit("mg", "mass", 0.001, ("milligram", "milligrams")),
    Unit("g", "mass", 1.0, ("gram", "grams", "gm")),
    Unit("kg", "mass", 1000.0, ("kilogram", "kilograms", "kilo", "kilos", "kgs")),
    Unit("t", "mass", 1_000_000.0, ("tonne", "tonnes", "metric ton", "metric tons")),
    Unit("oz", "mass", 28.349523125, ("ounce", "ounces")),
    Unit("lb", "mass", 453.59237, ("lbs", "pound", "pounds")),
    Unit("st", "mass", 6350.29318, ("stone", "stones")),
    # volume (base: litre)
    Unit("ml", "volume", 0.001, ("milliliter", "milliliters", "millilitre", "millilitres")),
    Unit("l", "volume", 1.0, ("liter", "liters", "litre", "litres")),
    Unit("tsp", "volume", 0.00492892159375, ("teaspoon", "teaspoons")),
    Unit("tbsp", "volume", 0.01478676478125, ("tablespoon", "tablespoons")),
    Unit("fl oz", "volume", 0.0295735295625, ("floz", "fluid ounce", "fluid ounces")),
    Unit("cup", "volume", 0.2365882365, ("cups",)),
    Unit("pt", "volume", 0.473176473, ("pint", "pints")),
    Unit("qt", "volume", 0.946352946, ("quart", "quarts")),
    Unit("gal", "volume", 3.785411784, ("gallon", "gallons")),
    # area (base: square metre)
    Unit("m²", "area", 1.0, ("m2", "sqm", "sq m", "square meter", "square meters", "square metre", "square metres")),
    Unit("km²", "area", 1_000_000.0, ("km2", "sq km", "square kilometer", "square kilometers")),
    Unit("ft²", "area", 0.09290304, ("ft2", "sqft", "sq ft", "square foot", "square feet")),
    Unit("ac", "area", 4046.8564224, ("acre", "acres")),
    Unit("ha", "area", 10_000.0, ("hectare", "hectares")),
    # speed (base: metre per second)
    Unit("m/s", "speed", 1.0, ("mps", "meters per second")),
    Unit("km/h", "speed", 1 / 3.6, ("kmh", "kph", "kmph", "kilometers per hour")),
    Unit("mph", "speed", 0.44704, ("miles per hour",)),
    Unit("kn", "speed", 0.514444, ("knot", "knots", "kt")),
    # time (base: second)
    Unit("ms", "time", 0.001, ("millisecond", "milliseconds")),
    Unit("s", "time", 1.0, ("sec", "secs", "second", "seconds")),
    Unit("min", "time", 60.0, ("mins", "minute", "minutes")),
    Unit("h", "time", 3600.0, ("hr", "hrs", "hour", "hours")),
    Unit("day", "time", 86400.0, ("days", "d")),
    Unit("wk", "time", 604800.0, ("week", "weeks")),
    # digital storage (base: byte)
    Unit("B", "data", 1.0, ("byte", "bytes")),
    Unit("KB", "data", 1024.0, ("kilobyte", "kilobytes", "kib")),
    Unit("MB", "data", 1024.0 ** 2, ("megabyte", "megabytes", "mib")),
    Unit("GB", "data", 1024.0 ** 3, ("gigabyte", "gigabytes", "gib")),
    Unit("TB", "data", 1024.0 ** 4, ("terabyte", "terabytes", "tib")),
    # temperature (converted through celsius, factor unused)
    Unit("°C", "temperature", 1.0, ("c", "celsius", "degc", "°c", "centigrade")),
    Unit("°F", "temperature", 1.0, ("f", "fahrenheit", "degf", "°f")),
    Unit("K", "temperature", 1.0, ("k", "kelvin", "kelvins")),
]


def _build_lookup() -> Dict[str, Unit]:
    lookup: Dict[str, Unit] = {}
    for unit in UNITS:
        lookup[unit.symbol.lower()] = unit
        for alias in unit.aliases:
            lookup[alias.lower()] = unit
    return lookup


UNIT_LOOKUP = _build_lookup()

UNIT_PATTERN = re.compile(
    r"^(?P<value>-?\d[\d,]*(?:\.\d+)?|-?\.\d+)\s*(?P<from>[a-z°²/'\" ]+?)"
    r"(?:\s+(?P<conn>to|in|into|as)(?:\s+(?P<to>[a-z°²/'\" ]+?))?)?\s*$",
    re.IGNORECASE,
)


def find_unit(label: str) -> Optional[Unit]:
    return UNIT_LOOKUP.get(re.sub(r"\s+", " ", label.strip().lower()))


def get_unit_categories() -> Dict[str, List[str]]:
    """Unit symbols per category, in table order."""
    categories: Dict[str, List[str]] = {}
    for unit in UNITS:
        categories.setdefault(unit.category, []).append(unit.symbol)
    return categories


def _to_celsius(value: float, unit: Unit) -> float:
    if unit.symbol == "°F":
        return (value - 32) * 5 / 9
    if unit.symbol == "K":
        return value - 273.15
    return value


def _from_celsius(value: float, unit: Unit) -> float:
    if unit.symbol == "°F":
        return value * 9 / 5 + 32
    if unit.symbol == "K":
        return value + 273.15
    return value


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert between two units of the same category. Raises ValueError otherwise."""
    if from_unit.category != to_unit.category:
        raise ValueError(f"Cannot convert {from_unit.category} to {to_unit.category}")
    if from_unit.category == "temperature":
        return _from_celsius(_to_celsius(value, from_unit), to_unit)
    return value * from_unit.factor / to_unit.factor


def convert_direct(value: float, from_label: str, to_label: str) -> Optional[UnitResult]:
    """Convert with unit labels, as used by the interactive converter."""
    from_unit, to_unit = find_unit(from_label), find_unit(to_label)
    if not from_unit or not to_unit or from_unit.category != to_unit.category:
        return None
    to_value = convert(value, from_unit, to_unit)
    return UnitResult(
        category=from_unit.category,
        from_value=value,
        from_unit=from_unit.symbol,
        to_unit=to_unit.symbol,
        to_value=to_value,
        display=f"{format_number(value)} {from_unit.symbol} = {format_number(to_value)} {to_unit.symbol}",
    )


def detect_units(text: str) -> Optional[UnitResult]:
    """
    Detect a unit conversion such as "5km to miles" or "100f in c".

    A recognized source followed by a connector without a usable target
    ("5 km to", "5 km to kg") is a partial result.
    """
    match = UNIT_PATTERN.match(text.strip())
    if not match or not match.group("conn"):
        return None

    from_unit = find_unit(match.group("from"))
    if not from_unit:
        return None
    try:
        value = parse_number(match.group("value"))
    except ValueError:
        return None

    source = f"{format_number(value)} {from_unit.symbol}"
    to_label = match.group("to")
    if not to_label:
        return UnitResult(
            category=from_unit.category,
            from_value=value,
            from_unit=from_unit.symbol,
            display=f"{source} → ?",
            is_partial=True,
        )

    to_unit = find_unit(to_label)
    if not to_unit:
        if resolve_code(match.group("from")) and resolve_code(to_label):
            # "50 pounds to usd" is money
            return None
        return UnitResult(
            category=from_unit.category,
            from_value=value,
            from_unit=from_unit.symbol,
            display=f"{source} → {to_label.strip()}?",
            is_partial=True,
        )
    if to_unit.category != from_unit.category:
        return UnitResult(
            category=from_unit.category,
            from_value=value,
            from_unit=from_unit.symbol,
            to_unit=to_unit.symbol,
            display=f"Can't convert {from_unit.category} to {to_unit.category}",
            is_partial=True,
        )

    to_value = convert(value, from_unit, to_unit)
    return UnitResult(
        category=from_unit.category,
        from_value=value,
        from_unit=from_unit.symbol,
        to_unit=to_unit.symbol,
        to_value=to_value,
        display=f"{source} = {format_number(to_value)} {to_unit.symbol}",
    )
