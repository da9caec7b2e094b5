"""Translator detector - "translate <text> to <language>", "en>fr: <text>"."""
import re
from typing import Dict, Optional

from contour import config
from contour.models.module import TranslatorResult

LANGUAGES: Dict[str, str] = {
    "en": "English", "es": "Spanish", "fr": "French", "de": "German", "it": "Italian",
    "pt": "Portuguese", "nl": "Dutch", "sv": "Swedish", "no": "Norwegian", "da": "Danish",
    "fi": "Finnish", "pl": "Polish", "cs": "Czech", "el": "Greek", "tr": "Turkish",
    "ru": "Russian", "uk": "Ukrainian", "ar": "Arabic", "he": "Hebrew", "hi": "Hindi",
    "bn": "Bengali", "ur": "Urdu", "ta": "Tamil", "zh": "Chinese", "ja": "Japanese",
    "ko": "Korean", "th": "Thai", "vi": "Vietnamese", "id": "Indonesian", "ms": "Malay",
    "tl": "Filipino", "sw": "Swahili", "fa": "Persian", "ro": "Romanian", "hu": "Hungarian",
}

LANGUAGE_ALIASES: Dict[str, str] = {
    "spanish": "es", "espanol": "es", "español": "es", "french": "fr", "francais": "fr",
    "german": "de", "deutsch": "de", "italian": "it", "portuguese": "pt", "dutch": "nl",
    "swedish": "sv", "norwegian": "no", "danish": "da", "finnish": "fi", "polish": "pl",
    "czech": "cs", "greek": "el", "turkish": "tr", "russian": "ru", "ukrainian": "uk",
    "arabic": "ar", "hebrew": "he", "hindi": "hi", "bengali": "bn", "urdu": "ur",
    "tamil": "ta", "chinese": "zh", "mandarin": "zh", "japanese": "ja", "korean": "ko",
    "thai": "th", "vietnamese": "vi", "indonesian": "id", "malay": "ms", "filipino": "tl",
    "tagalog": "tl", "swahili": "sw", "persian": "fa", "farsi": "fa", "romanian": "ro",
    "hungarian": "hu", "english": "en",
}

_TRIGGER = r"(?:translate|tr)"
FULL_PATTERN = re.compile(
    r"^" + _TRIGGER + r"\s+(?P<text>.+?)(?:\s+from\s+(?P<source>[a-zñçéí]+))?\s+(?:to|into|in)\s+(?P<target>[a-zñçéí]+)\s*$",
    re.IGNORECASE | re.DOTALL,
)
PAIR_PATTERN = re.compile(
    r"^(?P<source>[a-z]{2})\s*(?:>|->|→)\s*(?P<target>[a-z]{2})\s*:?\s+(?P<text>.+)$",
    re.IGNORECASE | re.DOTALL,
)
SAY_PATTERN = re.compile(
    r"^how\s+do\s+(?:you|i)\s+say\s+(?P<text>.+?)\s+in\s+(?P<target>[a-zñçéí]+)\s*\??$",
    re.IGNORECASE | re.DOTALL,
)
TRIGGER_ONLY_PATTERN = re.compile(r"^" + _TRIGGER + r"(?:\s+(?P<text>.*))?$", re.IGNORECASE | re.DOTALL)
TRAILING_TARGET_PATTERN = re.compile(r"^(?P<text>.+?)\s+(?:to|into|in)\s+(?P<target>[a-zñçéí]+)\s*$", re.IGNORECASE | re.DOTALL)


def resolve_language(token: Optional[str]) -> Optional[str]:
    if not token:
        return None
    key = token.strip().lower()
    if key in LANGUAGES:
        return key
    return LANGUAGE_ALIASES.get(key)


def language_name(code: str) -> str:
    return LANGUAGES.get(code, "Auto-detect" if code == "auto" else code)


def _request(text: str, target: str, source: str = "auto") -> TranslatorResult:
    return TranslatorResult(
        text=text.strip(),
        source_lang=source,
        target_lang=target,
        display=f"Translating to {language_name(target)}…",
        is_loading=True,
    )


def _unknown_language(text: str, token: str) -> TranslatorResult:
    return TranslatorResult(
        text=text.strip(),
        display=f"Unknown language: {token}",
        is_partial=True,
    )


def detect_translator(text: str) -> Optional[TranslatorResult]:
    """
    Detect an explicit translation request.

    Complete requests come back loading; a trigger without a target
    language is partial.
    """
    s = text.strip()

    match = PAIR_PATTERN.match(s)
    if match and resolve_language(match.group("source")) and resolve_language(match.group("target")):
        return _request(match.group("text"), resolve_language(match.group("target")), resolve_language(match.group("source")))

    match = FULL_PATTERN.match(s) or SAY_PATTERN.match(s)
    if match:
        target = resolve_language(match.group("target"))
        source_token = match.groupdict().get("source")
        if target and source_token and not resolve_language(source_token):
            return _unknown_language(match.group("text"), source_token)
        if target:
            return _request(match.group("text"), target, resolve_language(source_token) or "auto")
        if match.re is SAY_PATTERN:
            return _unknown_language(match.group("text"), match.group("target"))
        # "translate the way to go": the tail is still text, no target yet

    match = TRIGGER_ONLY_PATTERN.match(s)
    if match:
        body = (match.group("text") or "").strip()
        return TranslatorResult(
            text=body,
            display="Translate … to which language?" if body else "Type text to translate…",
            is_partial=True,
        )
    return None


def focused_translator(text: str, default_target: str = config.DEFAULT_TARGET_LANGUAGE) -> Optional[TranslatorResult]:
    """Focused mode: any text is a request; "<text> to <language>" picks the target."""
    body = text.strip()
    if not body:
        return None
    result = detect_translator(body)
    if result is not None and not result.is_partial:
        return result
    if result is not None:
        body = result.text
        if not body:
            return None
    match = TRAILING_TARGET_PATTERN.match(body)
    if match and resolve_language(match.group("target")):
        return _request(match.group("text"), resolve_language(match.group("target")))
    return _request(body, default_target)


def apply_translation(result: TranslatorResult, translated: str) -> TranslatorResult:
    return result.model_copy(update={
        "translated": translated,
        "is_loading": False,
        "error": None,
        "display": translated,
    })
