"""Number formatting shared by the calculator and converters"""
import math


def format_number(value: float, max_decimals: int = 6) -> str:
    """
    Human-readable number with thousands separators.

    Args:
        value: Number to format
        max_decimals: Maximum digits after the decimal point

    Returns:
        str: "1,234.5678" style string, integers without a fraction,
        very large/small magnitudes in scientific notation
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if magnitude >= 1e15 or magnitude < 10 ** -max_decimals:
        return f"{value:.{max_decimals}g}"

    rounded = round(value, max_decimals)
    if rounded == int(rounded):
        return f"{int(rounded):,}"

    text = f"{rounded:,.{max_decimals}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def parse_number(text: str) -> float:
    """Parse "1,234.5" / "1.5k" style amounts. Raises ValueError."""
    cleaned = text.replace(",", "").replace("_", "").strip().lower()
    multiplier = 1.0
    if cleaned.endswith("k"):
        multiplier, cleaned = 1_000.0, cleaned[:-1]
    return float(cleaned) * multiplier
