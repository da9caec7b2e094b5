"""Translator resolver"""
from typing import Optional

from contour.models.module import ModuleId, TranslatorResult
from contour.services.detectors.translator import apply_translation
from contour.services.lookup.translation import TranslationService
from .base import BaseResolver


class TranslatorResolver(BaseResolver):

    def __init__(self, service: Optional[TranslationService] = None):
        self._service = service or TranslationService()

    @property
    def module_id(self) -> ModuleId:
        return ModuleId.TRANSLATOR

    async def _resolve(self, partial: TranslatorResult) -> TranslatorResult:
        translated = await self._service.translate(partial.text, partial.source_lang, partial.target_lang)
        return apply_translation(partial, translated)
