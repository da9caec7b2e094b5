"""Translation Service - MyMemory translation API."""
import httpx
import logging
from typing import Optional

from contour import config
from .errors import ResolverError

logger = logging.getLogger(__name__)


class TranslationService:
    """Translates text between two language codes."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_url: str = config.TRANSLATION_API_URL):
        self._client = client
        self._api_url = api_url

    async def translate(self, text: str, source: str, target: str) -> str:
        """
        Translate text.

        Args:
            text: Text to translate
            source: Source language code, or "auto"
            target: Target language code

        Raises:
            ResolverError: Request failed or the service returned an error
        """
        langpair = f"{'autodetect' if source == 'auto' else source}|{target}"
        params = {"q": text, "langpair": langpair}
        try:
            if self._client is not None:
                response = await self._client.get(self._api_url, params=params, timeout=config.HTTP_TIMEOUT_SECONDS)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self._api_url, params=params, timeout=config.HTTP_TIMEOUT_SECONDS)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ResolverError(f"Translation service unavailable: {e}") from e
        except ValueError as e:
            raise ResolverError("Translation service returned invalid data") from e

        status = data.get("responseStatus")
        translated = (data.get("responseData") or {}).get("translatedText")
        if status not in (200, "200") or not translated:
            detail = data.get("responseDetails") or "no translation"
            raise ResolverError(f"Translation failed: {detail}")
        return translated
