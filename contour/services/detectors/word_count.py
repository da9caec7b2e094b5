"""Word count detector - needs an explicit marker so ordinary prose is left alone."""
import math
import re
from typing import Optional

from contour.models.module import WordCountResult

WORDS_PER_MINUTE = 238

# "count" and "words" only count as markers with a colon ("words: ...")
TRIGGER_PATTERN = re.compile(
    r"^(?:(?:wc|word\s*count|count\s+words(?:\s+in)?)(?:\s*[:\-]\s*|\s+)|(?:count|words)\s*:\s*)(?P<body>.*)$"
    r"|^(?:wc|word\s*count|count\s+words)\s*:?$",
    re.IGNORECASE | re.DOTALL,
)


def count_text(body: str) -> WordCountResult:
    """Count words, characters, sentences and lines of `body`."""
    words = re.findall(r"[^\W_]+(?:['’-][^\W_]+)*", body)
    sentences = [s for s in re.split(r"[.!?]+(?:\s+|$)", body.strip()) if s.strip()]
    lines = [ln for ln in body.splitlines() if ln.strip()]
    word_count = len(words)
    reading_seconds = math.ceil(word_count / WORDS_PER_MINUTE * 60) if word_count else 0
    plural = "" if word_count == 1 else "s"
    return WordCountResult(
        words=word_count,
        characters=len(body),
        characters_no_spaces=len(re.sub(r"\s", "", body)),
        sentences=len(sentences),
        lines=len(lines),
        reading_time_seconds=reading_seconds,
        display=f"{word_count:,} word{plural} · {len(body):,} characters",
    )


def detect_word_count(text: str) -> Optional[WordCountResult]:
    """Detect "wc: some text", "word count: ...", "count words ..."."""
    match = TRIGGER_PATTERN.match(text.strip())
    if not match:
        return None
    body = (match.group("body") or "").strip()
    if not body:
        return WordCountResult(display="Type or paste text to count…", is_partial=True)
    return count_text(body)


def focused_word_count(text: str) -> Optional[WordCountResult]:
    """In the focused tool the whole input is counted, marker optional."""
    return detect_word_count(text) or (count_text(text.strip()) if text.strip() else None)
