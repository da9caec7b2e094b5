"""Dictionary resolver"""
from typing import Optional

from contour.models.module import ModuleId, DictionaryResult
from contour.services.detectors.dictionary import apply_definition
from contour.services.lookup.dictionary_api import DictionaryService
from .base import BaseResolver


class DictionaryResolver(BaseResolver):

    def __init__(self, service: Optional[DictionaryService] = None):
        self._service = service or DictionaryService()

    @property
    def module_id(self) -> ModuleId:
        return ModuleId.DICTIONARY

    async def _resolve(self, partial: DictionaryResult) -> DictionaryResult:
        entry = await self._service.define(partial.word)
        return apply_definition(partial, entry.phonetic, entry.meanings)
