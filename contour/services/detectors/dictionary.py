"""Dictionary detector - "define <word>", "what does <word> mean"."""
import re
from typing import Optional

from contour.models.module import DictionaryResult, Meaning

_WORD = r"(?P<word>[a-z][a-z'’ -]{0,40}?)"
TRIGGER_PATTERN = re.compile(
    r"^(?:define|def|dict|dictionary|definition(?:\s+of)?|meaning(?:\s+of)?|what\s+is\s+the\s+meaning\s+of)"
    r"(?:\s*:\s*|\s+)" + _WORD + r"\s*\??$",
    re.IGNORECASE,
)
QUESTION_PATTERN = re.compile(r"^what\s+does\s+" + _WORD + r"\s+mean\s*\??$", re.IGNORECASE)
TRIGGER_ONLY_PATTERN = re.compile(r"^(?:define|definition(?:\s+of)?|meaning\s+of)\s*:?$", re.IGNORECASE)
PLAIN_WORD_PATTERN = re.compile(r"^" + _WORD + r"\s*\??$", re.IGNORECASE)

MAX_WORDS = 3


def _lookup(word: str) -> Optional[DictionaryResult]:
    word = re.sub(r"\s+", " ", word.strip().strip("'’-")).lower()
    if not word or len(word.split(" ")) > MAX_WORDS:
        return None
    return DictionaryResult(word=word, display=f"Looking up “{word}”…", is_loading=True)


def detect_dictionary(text: str) -> Optional[DictionaryResult]:
    """Every complete lookup starts loading; the resolver fills in meanings."""
    s = text.strip()
    match = TRIGGER_PATTERN.match(s) or QUESTION_PATTERN.match(s)
    if match:
        return _lookup(match.group("word"))
    if TRIGGER_ONLY_PATTERN.match(s):
        return DictionaryResult(word="", display="Type a word to define…", is_partial=True)
    return None


def focused_dictionary(text: str) -> Optional[DictionaryResult]:
    result = detect_dictionary(text)
    if result is not None:
        return result
    match = PLAIN_WORD_PATTERN.match(text.strip())
    return _lookup(match.group("word")) if match else None


def apply_definition(result: DictionaryResult, phonetic: Optional[str], meanings: list[Meaning]) -> DictionaryResult:
    first = meanings[0] if meanings else None
    display = f"{first.part_of_speech} · {first.definition}" if first else result.word
    return result.model_copy(update={
        "phonetic": phonetic,
        "meanings": meanings,
        "is_loading": False,
        "error": None,
        "display": display,
    })
