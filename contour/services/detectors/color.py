"""Color detector - hex, rgb(), hsl() and CSS color names."""
import colorsys
import re
from typing import Dict, List, Optional, Tuple

from contour.models.module import ColorResult

NAMED_COLORS: Dict[str, str] = {
    "black": "#000000", "white": "#ffffff", "red": "#ff0000", "green": "#008000",
    "blue": "#0000ff", "yellow": "#ffff00", "orange": "#ffa500", "purple": "#800080",
    "pink": "#ffc0cb", "brown": "#a52a2a", "gray": "#808080", "grey": "#808080",
    "cyan": "#00ffff", "magenta": "#ff00ff", "lime": "#00ff00", "navy": "#000080",
    "teal": "#008080", "olive": "#808000", "maroon": "#800000", "silver": "#c0c0c0",
    "gold": "#ffd700", "coral": "#ff7f50", "salmon": "#fa8072", "tomato": "#ff6347",
    "crimson": "#dc143c", "indigo": "#4b0082", "violet": "#ee82ee", "lavender": "#e6e6fa",
    "turquoise": "#40e0d0", "aqua": "#00ffff", "beige": "#f5f5dc", "ivory": "#fffff0",
    "khaki": "#f0e68c", "plum": "#dda0dd", "orchid": "#da70d6", "tan": "#d2b48c",
    "chocolate": "#d2691e", "skyblue": "#87ceeb", "steelblue": "#4682b4",
    "royalblue": "#4169e1", "slategray": "#708090", "hotpink": "#ff69b4",
    "forestgreen": "#228b22", "seagreen": "#2e8b57", "mintcream": "#f5fffa",
    "rebeccapurple": "#663399", "goldenrod": "#daa520", "firebrick": "#b22222",
}

COLOR_PRESETS: List[Dict[str, str]] = [
    {"name": "Coral", "hex": "#FF7F50"},
    {"name": "Tomato", "hex": "#FF6347"},
    {"name": "Gold", "hex": "#FFD700"},
    {"name": "Sea Green", "hex": "#2E8B57"},
    {"name": "Turquoise", "hex": "#40E0D0"},
    {"name": "Royal Blue", "hex": "#4169E1"},
    {"name": "Indigo", "hex": "#4B0082"},
    {"name": "Hot Pink", "hex": "#FF69B4"},
]

HEX_PATTERN = re.compile(r"^#(?P<hex>[0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)
HEX_PARTIAL_PATTERN = re.compile(r"^#[0-9a-f]{1,5}$", re.IGNORECASE)
RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*[, ]\s*(\d{1,3})\s*[, ]\s*(\d{1,3})\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
HSL_PATTERN = re.compile(
    r"^hsla?\(\s*(\d{1,3})(?:deg)?\s*[, ]\s*(\d{1,3})%?\s*[, ]\s*(\d{1,3})%?\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
FUNCTION_PARTIAL_PATTERN = re.compile(r"^(?:rgba?|hsla?)\([\d\s,.%/deg]*$", re.IGNORECASE)

_HEX_TO_NAME = {}
for _name, _hex in NAMED_COLORS.items():
    _HEX_TO_NAME.setdefault(_hex, _name)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[int, int, int]:
    h, light, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return round(h * 360) % 360, round(s * 100), round(light * 100)


def hsl_to_rgb(h: int, s: int, light: int) -> Tuple[int, int, int]:
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, light / 100, s / 100)
    return round(r * 255), round(g * 255), round(b * 255)


def color_from_rgb(r: int, g: int, b: int, source: str, name: Optional[str] = None) -> ColorResult:
    """Build a full result (hex, rgb, hsl) from channel values."""
    hex_value = rgb_to_hex(r, g, b)
    hsl = rgb_to_hsl(r, g, b)
    name = name or _HEX_TO_NAME.get(hex_value.lower())
    return ColorResult(
        input=source,
        hex=hex_value,
        rgb=(r, g, b),
        hsl=hsl,
        name=name,
        display=hex_value,
        subtitle=f"rgb({r}, {g}, {b}) · hsl({hsl[0]}, {hsl[1]}%, {hsl[2]}%)" + (f" · {name}" if name else ""),
    )


def detect_color(text: str) -> Optional[ColorResult]:
    """Detect "#ff5733", "#abc", "rgb(255, 87, 51)", "hsl(11, 100%, 60%)" or "coral"."""
    s = text.strip()

    match = HEX_PATTERN.match(s)
    if match:
        return color_from_rgb(*hex_to_rgb(match.group("hex")), source=s)
    if HEX_PARTIAL_PATTERN.match(s):
        return ColorResult(input=s, display=f"{s.upper()}…", is_partial=True)

    match = RGB_PATTERN.match(s)
    if match:
        r, g, b = (int(v) for v in match.groups())
        if max(r, g, b) > 255:
            return ColorResult(input=s, display="RGB values must be 0-255", is_partial=True)
        return color_from_rgb(r, g, b, source=s)

    match = HSL_PATTERN.match(s)
    if match:
        h, sat, light = (int(v) for v in match.groups())
        if sat > 100 or light > 100:
            return ColorResult(input=s, display="Saturation and lightness must be 0-100%", is_partial=True)
        return color_from_rgb(*hsl_to_rgb(h, sat, light), source=s)

    if FUNCTION_PARTIAL_PATTERN.match(s):
        return ColorResult(input=s, display=f"{s}…", is_partial=True)

    key = s.lower().replace(" ", "")
    if key in NAMED_COLORS:
        return color_from_rgb(*hex_to_rgb(NAMED_COLORS[key]), source=s, name=key)
    return None
