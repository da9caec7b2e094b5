"""Currency converter detector - "<amount> <CODE> to <CODE>". Rates come from the resolver."""
import re
from typing import Dict, List, Optional

from contour.models.module import CurrencyResult
from contour.utils.number_format import format_number, parse_number

CURRENCIES: Dict[str, Dict[str, str]] = {
    "USD": {"name": "US Dollar", "symbol": "$"},
    "EUR": {"name": "Euro", "symbol": "€"},
    "GBP": {"name": "British Pound", "symbol": "£"},
    "JPY": {"name": "Japanese Yen", "symbol": "¥"},
    "INR": {"name": "Indian Rupee", "symbol": "₹"},
    "CNY": {"name": "Chinese Yuan", "symbol": "CN¥"},
    "AUD": {"name": "Australian Dollar", "symbol": "A$"},
    "CAD": {"name": "Canadian Dollar", "symbol": "C$"},
    "CHF": {"name": "Swiss Franc", "symbol": "CHF"},
    "HKD": {"name": "Hong Kong Dollar", "symbol": "HK$"},
    "SGD": {"name": "Singapore Dollar", "symbol": "S$"},
    "NZD": {"name": "New Zealand Dollar", "symbol": "NZ$"},
    "KRW": {"name": "South Korean Won", "symbol": "₩"},
    "SEK": {"name": "Swedish Krona", "symbol": "kr"},
    "NOK": {"name": "Norwegian Krone", "symbol": "kr"},
    "DKK": {"name": "Danish Krone", "symbol": "kr"},
    "PLN": {"name": "Polish Zloty", "symbol": "zł"},
    "CZK": {"name": "Czech Koruna", "symbol": "Kč"},
    "HUF": {"name": "Hungarian Forint", "symbol": "Ft"},
    "TRY": {"name": "Turkish Lira", "symbol": "₺"},
    "MXN": {"name": "Mexican Peso", "symbol": "MX$"},
    "BRL": {"name": "Brazilian Real", "symbol": "R$"},
    "ZAR": {"name": "South African Rand", "symbol": "R"},
    "AED": {"name": "UAE Dirham", "symbol": "AED"},
    "SAR": {"name": "Saudi Riyal", "symbol": "SAR"},
    "THB": {"name": "Thai Baht", "symbol": "฿"},
    "IDR": {"name": "Indonesian Rupiah", "symbol": "Rp"},
    "MYR": {"name": "Malaysian Ringgit", "symbol": "RM"},
    "PHP": {"name": "Philippine Peso", "symbol": "₱"},
    "ILS": {"name": "Israeli Shekel", "symbol": "₪"},
    "RUB": {"name": "Russian Ruble", "symbol": "₽"},
    "PKR": {"name": "Pakistani Rupee", "symbol": "₨"},
    "BDT": {"name": "Bangladeshi Taka", "symbol": "৳"},
    "NGN": {"name": "Nigerian Naira", "symbol": "₦"},
}

POPULAR_CURRENCIES: List[str] = ["USD", "EUR", "GBP", "JPY", "INR", "CAD", "AUD", "CHF"]

# Symbols typed in place of a code ("$50 to eur")
SYMBOL_CODES: Dict[str, str] = {"$": "USD", "€": "EUR", "£": "GBP", "¥": "JPY", "₹": "INR", "₩": "KRW", "₺": "TRY", "₽": "RUB"}

# Common names typed in place of a code
NAME_CODES: Dict[str, str] = {
    "dollar": "USD", "dollars": "USD", "bucks": "USD",
    "euro": "EUR", "euros": "EUR",
    "pound": "GBP", "pounds": "GBP", "quid": "GBP",
    "yen": "JPY", "rupee": "INR", "rupees": "INR",
    "yuan": "CNY", "rmb": "CNY", "franc": "CHF", "francs": "CHF",
    "won": "KRW", "peso": "MXN", "pesos": "MXN", "real": "BRL", "rand": "ZAR",
}

_AMOUNT = r"(?P<amount>\d[\d,]*(?:\.\d+)?k?)"
CURRENCY_PATTERN = re.compile(
    r"^(?P<sym>[$€£¥₹₩₺₽])?\s*" + _AMOUNT + r"\s*(?P<from>[a-z]{3,7})?"
    r"(?:\s+(?P<conn>to|in|into)(?:\s+(?P<to>[a-z$€£¥₹₩₺₽]{1,7}))?)?\s*$",
    re.IGNORECASE,
)


def resolve_code(token: Optional[str]) -> Optional[str]:
    """Map a code, symbol or common name to an ISO 4217 code we know."""
    if not token:
        return None
    token = token.strip()
    if token in SYMBOL_CODES:
        return SYMBOL_CODES[token]
    upper = token.upper()
    if upper in CURRENCIES:
        return upper
    return NAME_CODES.get(token.lower())


def format_currency(value: float, code: str) -> str:
    """"$1,234.56" for symbol-prefixed currencies, "1,234.56 CHF" otherwise."""
    symbol = CURRENCIES.get(code, {}).get("symbol", code)
    decimals = 0 if code in ("JPY", "KRW", "IDR", "HUF") else 2
    amount = f"{value:,.{decimals}f}"
    if symbol == code or symbol.isalpha():
        return f"{amount} {code}"
    return f"{symbol}{amount}"


def get_currency_list() -> List[Dict[str, str]]:
    return [{"code": code, **info} for code, info in CURRENCIES.items()]


def detect_currency(text: str) -> Optional[CurrencyResult]:
    """
    Detect "50 usd to eur", "$20 in gbp", "100 euros to yen".

    Returns a partial result until both currencies are known, and a
    loading result once the pair is complete; the rate is filled in by
    the currency resolver.
    """
    match = CURRENCY_PATTERN.match(text.strip())
    if not match:
        return None

    from_code = resolve_code(match.group("from")) if match.group("from") else resolve_code(match.group("sym"))
    if not from_code or (match.group("from") and match.group("sym") and resolve_code(match.group("sym")) != from_code):
        return None
    if not match.group("conn"):
        # "$50" alone is not a conversion request
        return None

    try:
        amount = parse_number(match.group("amount"))
    except ValueError:
        return None

    to_code = resolve_code(match.group("to"))
    if not to_code:
        hint = f" {match.group('to')}?" if match.group("to") else " ?"
        return CurrencyResult(
            from_value=amount,
            from_currency=from_code,
            display=f"{format_currency(amount, from_code)} →{hint}",
            is_partial=True,
        )

    if to_code == from_code:
        return CurrencyResult(
            from_value=amount,
            from_currency=from_code,
            to_currency=to_code,
            to_value=amount,
            rate=1.0,
            display=f"{format_currency(amount, from_code)} = {format_currency(amount, to_code)}",
        )

    return CurrencyResult(
        from_value=amount,
        from_currency=from_code,
        to_currency=to_code,
        display=f"{format_currency(amount, from_code)} = …",
        is_loading=True,
    )


def apply_rate(result: CurrencyResult, rate: float) -> CurrencyResult:
    """Complete a loading result with a looked-up rate."""
    to_value = result.from_value * rate
    return result.model_copy(update={
        "rate": rate,
        "to_value": to_value,
        "is_loading": False,
        "error": None,
        "display": f"{format_currency(result.from_value, result.from_currency)} = {format_currency(to_value, result.to_currency)}",
    })


def rate_summary(result: CurrencyResult) -> Optional[str]:
    """"1 USD = 0.9200 EUR" subtitle."""
    if result.rate is None or result.to_currency is None:
        return None
    return f"1 {result.from_currency} = {format_number(result.rate, max_decimals=4)} {result.to_currency}"
