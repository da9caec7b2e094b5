import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Character that switches the composer into the command palette
COMMAND_TRIGGER = os.getenv("COMMAND_TRIGGER", "/")

# Currency rates (frankfurter primary, open.er-api fallback)
CURRENCY_API_URL = os.getenv("CURRENCY_API_URL", "https://api.frankfurter.app/latest")
CURRENCY_FALLBACK_API_URL = os.getenv("CURRENCY_FALLBACK_API_URL", "https://open.er-api.com/v6/latest")
RATE_CACHE_TTL_SECONDS = int(os.getenv("RATE_CACHE_TTL_SECONDS", "600"))

# Translation (MyMemory) and dictionary (dictionaryapi.dev)
TRANSLATION_API_URL = os.getenv("TRANSLATION_API_URL", "https://api.mymemory.translated.net/get")
DICTIONARY_API_URL = os.getenv("DICTIONARY_API_URL", "https://api.dictionaryapi.dev/api/v2/entries/en")
DEFAULT_TARGET_LANGUAGE = os.getenv("DEFAULT_TARGET_LANGUAGE", "es")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# Countdown cadence
TIMER_TICK_SECONDS = float(os.getenv("TIMER_TICK_SECONDS", "1"))
