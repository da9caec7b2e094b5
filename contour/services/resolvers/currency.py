"""Currency resolver - fills in the live exchange rate."""
from typing import Optional

from contour.models.module import ModuleId, CurrencyResult
from contour.services.detectors.currency import apply_rate
from contour.services.lookup.currency_rates import CurrencyRateService
from .base import BaseResolver

class CurrencyResolver(BaseResolver):

    def __init__(self, service: Optional[CurrencyRateService] = None):
        self._service = service or CurrencyRateService()

    @property
    def module_id(self) -> ModuleId:
        return ModuleId.CURRENCY

    async def _resolve(self, partial: CurrencyResult) -> CurrencyResult:
        rate = await self._service.get_rate(partial.from_currency, partial.to_currency)
        return apply_rate(partial, rate)
