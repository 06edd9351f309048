import copy
import functools
import logging
import math
import re
from typing import NamedTuple, Optional

from babel import Locale
from babel.numbers import UnknownCurrencyError, format_currency as _babel_format_currency, validate_currency

from .settings import currency_locale, default_currency


logger = logging.getLogger(__name__)

_CODE_RE = re.compile(r"[A-Z]{2,3}", re.IGNORECASE)
_NOT_NUMERIC_RE = re.compile(r"[^\d,.]")
_LEADING_NUMBER_RE = re.compile(r"\d*\.?\d+")


@functools.lru_cache(maxsize=None)
def _currency_pattern(locale: str):
    # The locale's own layout, with no minimum fraction digits and at most two
    pattern = copy.copy(Locale.parse(locale).currency_formats["standard"])
    pattern.frac_prec = (0, 2)
    return pattern


class ParsedCost(NamedTuple):
    amount: float
    currency_code: str
    recognized: bool = True


def parse_currency(text: Optional[str]) -> ParsedCost:
    """Best-effort parse of a cost string such as "50000 IDR" or "Rp 1.250.000,50".

    Periods are thousands separators and commas are decimal separators, so a
    bare "1.234" reads as 1234. Strings without digits parse as 0 and are
    flagged as not recognized.
    """
    fallback_code = default_currency()
    if not text:
        return ParsedCost(0.0, fallback_code, False)

    m = _CODE_RE.search(text)
    code = m.group(0).upper() if m else fallback_code

    cleaned = _NOT_NUMERIC_RE.sub("", text)
    normalized = cleaned.replace(".", "").replace(",", ".")
    num = _LEADING_NUMBER_RE.match(normalized)
    amount = float(num.group(0)) if num else 0.0
    recognized = any(ch.isdigit() for ch in cleaned)
    return ParsedCost(amount, code, recognized)


def _plain_number(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def format_currency(amount: Optional[float], currency_code: Optional[str] = None) -> str:
    if amount is None:
        return "N/A"
    try:
        if math.isnan(amount):
            return "N/A"
    except TypeError:
        return "N/A"
    code = (currency_code or default_currency()).upper()
    locale = currency_locale()
    try:
        validate_currency(code, locale)
        return _babel_format_currency(
            amount,
            code,
            format=_currency_pattern(locale),
            locale=locale,
            currency_digits=False,
        )
    except (UnknownCurrencyError, ValueError) as e:
        logger.warning("Could not format amount %s with currency %s: %s", amount, code, e)
        return f"{_plain_number(amount)} {code}"
