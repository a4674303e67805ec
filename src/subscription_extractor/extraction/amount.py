"""Monetary amount extraction.

Pattern groups are tried in a fixed order (explicit symbols and codes,
labelled/contextual amounts, currency names, amounts with an interval suffix,
and finally a bare decimal in subscription-flavoured text). The first pattern
that yields a numeric value wins.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

import structlog

from subscription_extractor.extraction.lexicon import (
    CURRENCY_NAMES,
    CURRENCY_SYMBOLS,
    CURRENCY_SYMBOLS_FOLDED,
    ISO_CODES,
    longest_first,
)
from subscription_extractor.models import NormalizedAmount

logger = structlog.get_logger()

DEFAULT_CURRENCY = "USD"

_SYMBOL = "[" + re.escape("$€£¥₹₩₽₺₴₱₦฿") + "]"
_MULTI_SYMBOL = r"R\$|C\$|A\$|NZ\$|HK\$|S\$|ر\.س|د\.إ|kr|Kč|zł|RM"
_NUMBER = r"\d+(?:[.,]\d{1,2})?"
# ISO codes only count when written in capitals ("try 5" is not Turkish lira).
_CODE = "(?-i:" + "|".join(ISO_CODES) + ")"
_LABEL = r"(?:amount|price|cost|fee|charge|payment):"
_CHARGE_OF = r"(?:payment|charge|fee|subscription|bill)[^\n]*?(?:of|for)"
_INTERVAL = r"(?:/|\s+per\s+)(?:month|mo|year|yr|week|wk|day)(?:\s|$)"

_MULTIWORD_NAMES = "|".join(re.escape(n) for n in longest_first(CURRENCY_NAMES) if " " in n)
_SINGLE_NAMES = "|".join(re.escape(n) for n in longest_first(CURRENCY_NAMES) if " " not in n)

_FALLBACK_KEYWORDS = ("subscription", "payment", "charge")
_FALLBACK_RE = re.compile(r"(\d+\.\d{2})(?!\d)")
_FALLBACK_CONFIDENCE = 0.6


class CurrencySource(Enum):
    """Where an amount pattern finds its currency."""

    SYMBOL = "symbol"
    CODE = "code"
    NAME = "name"
    CONTEXT = "context"


@dataclass(frozen=True)
class AmountPattern:
    """A compiled amount regex with the groups holding value and currency."""

    name: str
    pattern: re.Pattern[str]
    confidence: float
    value_group: int
    currency_group: int | None = None
    currency_source: CurrencySource = CurrencySource.CONTEXT


def _amount_pattern(
    name: str,
    pattern: str,
    confidence: float,
    value_group: int,
    currency_group: int | None = None,
    currency_source: CurrencySource = CurrencySource.CONTEXT,
) -> AmountPattern:
    return AmountPattern(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE),
        confidence=confidence,
        value_group=value_group,
        currency_group=currency_group,
        currency_source=currency_source,
    )


EXPLICIT_PATTERNS: tuple[AmountPattern, ...] = (
    _amount_pattern(
        "symbol_before", rf"(?:^|\s)({_SYMBOL})\s*({_NUMBER})", 0.9, 2, 1, CurrencySource.SYMBOL
    ),
    _amount_pattern(
        "symbol_after",
        rf"(?:^|\s)({_NUMBER})\s*({_SYMBOL})(?:\s|$)",
        0.85,
        1,
        2,
        CurrencySource.SYMBOL,
    ),
    _amount_pattern(
        "multi_symbol_before",
        rf"(?:^|\s)({_MULTI_SYMBOL})\s*({_NUMBER})",
        0.85,
        2,
        1,
        CurrencySource.SYMBOL,
    ),
    _amount_pattern(
        "multi_symbol_after",
        rf"(?:^|\s)({_NUMBER})\s*({_MULTI_SYMBOL})(?:\s|$)",
        0.85,
        1,
        2,
        CurrencySource.SYMBOL,
    ),
    _amount_pattern(
        "code_after", rf"(?:^|\s)({_NUMBER})\s*({_CODE})(?:\s|$)", 0.85, 1, 2, CurrencySource.CODE
    ),
    _amount_pattern(
        "code_before", rf"(?:^|\s)({_CODE})\s*({_NUMBER})(?:\s|$)", 0.85, 2, 1, CurrencySource.CODE
    ),
)

CONTEXTUAL_PATTERNS: tuple[AmountPattern, ...] = (
    _amount_pattern(
        "for_of_symbol", rf"(?:for|of)\s+({_SYMBOL})\s*({_NUMBER})", 0.85, 2, 1, CurrencySource.SYMBOL
    ),
    _amount_pattern(
        "for_of_code", rf"(?:for|of)\s+({_NUMBER})\s*({_CODE})", 0.85, 1, 2, CurrencySource.CODE
    ),
    _amount_pattern(
        "label_symbol", rf"{_LABEL}\s*({_SYMBOL})\s*({_NUMBER})", 0.9, 2, 1, CurrencySource.SYMBOL
    ),
    _amount_pattern(
        "label_code", rf"{_LABEL}\s*({_NUMBER})\s*({_CODE})", 0.9, 1, 2, CurrencySource.CODE
    ),
    _amount_pattern(
        "charge_of_symbol",
        rf"{_CHARGE_OF}\s+({_SYMBOL})\s*({_NUMBER})",
        0.9,
        2,
        1,
        CurrencySource.SYMBOL,
    ),
    _amount_pattern(
        "charge_of_code", rf"{_CHARGE_OF}\s+({_NUMBER})\s*({_CODE})", 0.9, 1, 2, CurrencySource.CODE
    ),
)

NATURAL_LANGUAGE_PATTERNS: tuple[AmountPattern, ...] = (
    _amount_pattern(
        "multiword_currency_name",
        rf"({_NUMBER})\s+({_MULTIWORD_NAMES})(?:\s|$)",
        0.85,
        1,
        2,
        CurrencySource.NAME,
    ),
    _amount_pattern(
        "currency_name",
        rf"({_NUMBER})\s+({_SINGLE_NAMES})(?:\s|$)",
        0.8,
        1,
        2,
        CurrencySource.NAME,
    ),
)

INTERVAL_PATTERNS: tuple[AmountPattern, ...] = (
    _amount_pattern("number_per_interval", rf"({_NUMBER})\s*{_INTERVAL}", 0.8, 1),
    _amount_pattern(
        "symbol_per_interval",
        rf"({_SYMBOL})\s*({_NUMBER})\s*{_INTERVAL}",
        0.85,
        2,
        1,
        CurrencySource.SYMBOL,
    ),
)

PATTERN_TIERS: tuple[tuple[AmountPattern, ...], ...] = (
    EXPLICIT_PATTERNS,
    CONTEXTUAL_PATTERNS,
    NATURAL_LANGUAGE_PATTERNS,
    INTERVAL_PATTERNS,
)

_CONTEXT_CODES = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "NZD")

_CONTEXT_NAMES: dict[str, str] = {
    "new zealand dollar": "NZD",
    "australian dollar": "AUD",
    "canadian dollar": "CAD",
    "swiss franc": "CHF",
    "kiwi dollar": "NZD",
    "us dollar": "USD",
    "sterling": "GBP",
    "dollar": "USD",
    "pound": "GBP",
    "rupee": "INR",
    "euro": "EUR",
    "yuan": "CNY",
    "yen": "JPY",
}

_CONTEXT_REGIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\.uk\b|\blondon\b|\bunited kingdom\b"), "GBP"),
    (re.compile(r"\.eu\b|\beurope\b"), "EUR"),
    (re.compile(r"\.ca\b|\bcanada\b"), "CAD"),
    (re.compile(r"\.au\b|\baustralia\b"), "AUD"),
    (re.compile(r"\.nz\b|\bzealand\b"), "NZD"),
    (re.compile(r"\.in\b|\bindia\b"), "INR"),
    (re.compile(r"\.jp\b|\bjapan\b"), "JPY"),
)


def detect_currency_from_context(text: str | None) -> str | None:
    """Guess a currency from codes, currency words or regional hints in the text.

    Args:
        text: Message text.

    Returns:
        ISO currency code, or None if nothing in the text suggests one.
    """
    if not text:
        return None

    lower = text.lower()

    for code in _CONTEXT_CODES:
        if re.search(rf"\b{code.lower()}\b", lower):
            return code

    for name, code in _CONTEXT_NAMES.items():
        if re.search(rf"\b{re.escape(name)}", lower):
            return code

    for pattern, code in _CONTEXT_REGIONS:
        if pattern.search(lower):
            return code

    return None


def _parse_value(raw: str) -> float | None:
    # Every comma becomes a decimal point, so "1,234.56" does not survive as
    # a thousands-grouped value.
    try:
        value = float(raw.replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _resolve_currency(entry: AmountPattern, match: re.Match[str], text: str) -> str:
    token = match.group(entry.currency_group) if entry.currency_group else None

    if token and entry.currency_source is CurrencySource.CODE:
        return token.upper()

    if token and entry.currency_source is CurrencySource.SYMBOL:
        code = CURRENCY_SYMBOLS.get(token) or CURRENCY_SYMBOLS_FOLDED.get(token.casefold())
        if code:
            return code

    if token and entry.currency_source is CurrencySource.NAME:
        code = CURRENCY_NAMES.get(token.lower())
        if code:
            return code

    return detect_currency_from_context(text) or DEFAULT_CURRENCY


def extract_amount(text: str | None) -> NormalizedAmount | None:
    """Extract a monetary amount and its currency from a message.

    Args:
        text: Message text.

    Returns:
        The first amount found by the ordered pattern tiers, or None.
    """
    if not text:
        return None

    for tier in PATTERN_TIERS:
        for entry in tier:
            match = entry.pattern.search(text)
            if not match or not match.group(entry.value_group):
                continue

            value = _parse_value(match.group(entry.value_group))
            if value is None:
                continue

            currency = _resolve_currency(entry, match, text)
            logger.debug("amount_extracted", pattern=entry.name, value=value, currency=currency)
            return NormalizedAmount(
                value=value,
                currency=currency,
                original_text=match.group(0).strip(),
                confidence=entry.confidence,
            )

    lower = text.lower()
    if any(keyword in lower for keyword in _FALLBACK_KEYWORDS):
        match = _FALLBACK_RE.search(text)
        if match:
            value = _parse_value(match.group(1))
            if value is not None:
                return NormalizedAmount(
                    value=value,
                    currency=detect_currency_from_context(text) or DEFAULT_CURRENCY,
                    original_text=match.group(0),
                    confidence=_FALLBACK_CONFIDENCE,
                )

    return None
