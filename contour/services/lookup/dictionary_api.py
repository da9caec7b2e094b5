"""Dictionary Service - dictionaryapi.dev"""
import httpx
import logging
from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

from contour import config
from contour.models.module import Meaning
from .errors import LookupNotFound, ResolverError

logger = logging.getLogger(__name__)

MAX_MEANINGS = 5


class DictionaryEntry(BaseModel):
    """Normalized dictionary response"""
    word: str
    phonetic: Optional[str] = None
    meanings: List[Meaning] = Field(default_factory=list)


class DictionaryService:
    """Looks up English word definitions."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_url: str = config.DICTIONARY_API_URL):
        self._client = client
        self._api_url = api_url.rstrip("/")

    async def define(self, word: str) -> DictionaryEntry:
        """
        Raises:
            LookupNotFound: No entry for the word
            ResolverError: Request failed
        """
        url = f"{self._api_url}/{quote(word)}"
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=config.HTTP_TIMEOUT_SECONDS)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, timeout=config.HTTP_TIMEOUT_SECONDS)
            if response.status_code == 404:
                raise LookupNotFound(f"No definition found for “{word}”")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ResolverError(f"Dictionary service unavailable: {e}") from e
        except ValueError as e:
            raise ResolverError("Dictionary service returned invalid data") from e

        if not isinstance(data, list) or not data:
            raise LookupNotFound(f"No definition found for “{word}”")
        return self._parse(word, data)

    @staticmethod
    def _parse(word: str, data: list) -> DictionaryEntry:
        first = data[0]
        phonetic = first.get("phonetic") or next(
            (p.get("text") for p in first.get("phonetics", []) if p.get("text")), None
        )
        meanings: List[Meaning] = []
        for entry in data:
            for meaning in entry.get("meanings", []):
                part = meaning.get("partOfSpeech", "")
                for definition in meaning.get("definitions", [])[:2]:
                    meanings.append(Meaning(
                        part_of_speech=part,
                        definition=definition.get("definition", ""),
                        example=definition.get("example"),
                    ))
                    if len(meanings) >= MAX_MEANINGS:
                        return DictionaryEntry(word=first.get("word", word), phonetic=phonetic, meanings=meanings)
        if not meanings:
            raise LookupNotFound(f"No definition found for “{word}”")
        return DictionaryEntry(word=first.get("word", word), phonetic=phonetic, meanings=meanings)
