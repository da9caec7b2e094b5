"""Random generator detector - dice, coin flips and number ranges."""
import random
import re
from typing import Optional

from contour.models.module import RandomResult

MAX_DICE = 100
MAX_SIDES = 1000

DICE_PATTERN = re.compile(r"^(?:roll\s+)?(?:an?\s+)?(?P<count>\d{1,3})?d(?P<sides>\d{1,4})(?P<mod>\s*[+-]\s*\d{1,4})?$", re.IGNORECASE)
ROLL_DIE_PATTERN = re.compile(r"^roll(?:\s+(?:an?|the))?(?:\s+(?P<count>\d{1,3}))?\s+(?:dice|die)$", re.IGNORECASE)
COIN_PATTERN = re.compile(r"^(?:flip|toss)(?:\s+an?)?\s+coins?$|^coin\s*(?:flip|toss)$|^heads\s+or\s+tails\??$", re.IGNORECASE)
RANGE_PATTERN = re.compile(
    r"^(?:random|rand|pick|pick\s+a\s+number|random\s+number|rng)"
    r"(?:\s+(?:between|from))?\s+(?P<low>-?\d{1,9})\s*(?:-|to|and|\.\.)\s*(?P<high>-?\d{1,9})$",
    re.IGNORECASE,
)
BARE_RANDOM_PATTERN = re.compile(r"^(?:random\s+number|rng)$", re.IGNORECASE)


def _roll_dice(count: int, sides: int, modifier: int, rng: random.Random, spec: str) -> RandomResult:
    values = [rng.randint(1, sides) for _ in range(count)]
    total = sum(values) + modifier
    if count == 1 and not modifier:
        display = f"🎲 {total}"
    else:
        breakdown = " + ".join(str(v) for v in values)
        if modifier:
            breakdown += f" {'+' if modifier > 0 else '-'} {abs(modifier)}"
        display = f"🎲 {total} ({breakdown})"
    return RandomResult(kind="dice", spec=spec, values=values, total=total, display=display)


def detect_random(text: str, rng: Optional[random.Random] = None) -> Optional[RandomResult]:
    """
    Detect "roll 2d6", "d20", "roll a die", "flip a coin", "random 1-100".

    The outcome comes from `rng`; pass a seeded Random for reproducible results.
    """
    s = text.strip()
    rng = rng or random.Random()

    match = DICE_PATTERN.match(s)
    if match:
        count = int(match.group("count") or 1)
        sides = int(match.group("sides"))
        modifier = int(re.sub(r"\s", "", match.group("mod") or "0"))
        if count < 1 or sides < 2 or count > MAX_DICE or sides > MAX_SIDES:
            return RandomResult(kind="dice", spec=s, display="Dice must be 1-100 × d2-d1000", is_partial=True)
        spec = f"{count}d{sides}" + (f"{modifier:+d}" if modifier else "")
        return _roll_dice(count, sides, modifier, rng, spec)

    match = ROLL_DIE_PATTERN.match(s)
    if match:
        count = int(match.group("count") or 1)
        if count < 1 or count > MAX_DICE:
            return None
        return _roll_dice(count, 6, 0, rng, f"{count}d6")

    if COIN_PATTERN.match(s):
        side = rng.choice(["Heads", "Tails"])
        return RandomResult(kind="coin", spec="coin", values=[side], display=f"🪙 {side}")

    match = RANGE_PATTERN.match(s)
    if match:
        low, high = int(match.group("low")), int(match.group("high"))
        if low > high:
            low, high = high, low
        value = rng.randint(low, high)
        return RandomResult(kind="number", spec=f"{low}-{high}", values=[value], total=value, display=str(value))

    if BARE_RANDOM_PATTERN.match(s):
        value = rng.randint(1, 100)
        return RandomResult(kind="number", spec="1-100", values=[value], total=value, display=str(value))
    return None
