"""External lookup services consumed by the resolvers."""
from .currency_rates import CurrencyRateService
from .translation import TranslationService
from .dictionary_api import DictionaryService, DictionaryEntry
from .errors import ResolverError, LookupNotFound

__all__ = [
    "CurrencyRateService",
    "TranslationService",
    "DictionaryService",
    "DictionaryEntry",
    "ResolverError",
    "LookupNotFound",
]
