"""Billing cycle extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from subscription_extractor.extraction.lexicon import BILLING_CYCLES, longest_first
from subscription_extractor.models import BillingCycle, ExtractedBillingCycle
from subscription_extractor.utils import phrase_pattern

logger = structlog.get_logger()

_DICTIONARY_CONFIDENCE = 0.9
_CUSTOM_PENALTY = 0.05
_FALLBACK_CONFIDENCE = 0.6

_PHRASES_LONGEST_FIRST = longest_first(BILLING_CYCLES)

_MONTH_COUNTS: dict[int, BillingCycle] = {
    1: BillingCycle.MONTHLY,
    3: BillingCycle.QUARTERLY,
    6: BillingCycle.BIANNUAL,
    12: BillingCycle.YEARLY,
}


@dataclass(frozen=True)
class IntervalPattern:
    """An "every N <unit>" style phrase; ``unit_months`` converts N to months."""

    pattern: re.Pattern[str]
    unit_months: int
    confidence: float


# Counts are at most six digits; a longer digit run is not read as a count.
INTERVAL_PATTERNS: tuple[IntervalPattern, ...] = (
    IntervalPattern(re.compile(r"\bbilled\s+every\s+(\d{1,6})\s+months\b"), 1, 0.9),
    IntervalPattern(re.compile(r"\bcharged\s+every\s+(\d{1,6})\s+months\b"), 1, 0.9),
    IntervalPattern(re.compile(r"\bevery\s+(\d{1,6})\s+months\b"), 1, 0.85),
    IntervalPattern(re.compile(r"\bevery\s+(\d{1,6})\s+years\b"), 12, 0.85),
    IntervalPattern(re.compile(r"\b(\d{1,6})[\s-]month"), 1, 0.8),
    IntervalPattern(re.compile(r"\b(\d{1,6})[\s-]year"), 12, 0.8),
)

CONTEXT_PATTERNS: tuple[tuple[re.Pattern[str], BillingCycle], ...] = (
    (re.compile(r"\b(?:monthly|per month|each month|a month)\b"), BillingCycle.MONTHLY),
    (
        re.compile(r"\b(?:annual|annually|yearly|per year|each year|a year)\b"),
        BillingCycle.YEARLY,
    ),
    (re.compile(r"\b(?:weekly|per week|each week|a week)\b"), BillingCycle.WEEKLY),
    (re.compile(r"\b(?:daily|per day|each day|a day)\b"), BillingCycle.DAILY),
    (
        re.compile(r"\b(?:quarterly|per quarter|each quarter|a quarter|three months|3 months)\b"),
        BillingCycle.QUARTERLY,
    ),
    (
        re.compile(r"\b(?:biannual|semi-annual|semi annual|twice a year|six months|6 months)\b"),
        BillingCycle.BIANNUAL,
    ),
)
_CONTEXT_CONFIDENCE = 0.85

_PRICE_INTERVAL_RE = re.compile(r"\d+(?:\.\d{1,2})?(?:/|\s+per\s+)(month|mo|year|yr|week|wk|day)")
_PRICE_INTERVAL_UNITS: dict[str, BillingCycle] = {
    "month": BillingCycle.MONTHLY,
    "mo": BillingCycle.MONTHLY,
    "year": BillingCycle.YEARLY,
    "yr": BillingCycle.YEARLY,
    "week": BillingCycle.WEEKLY,
    "wk": BillingCycle.WEEKLY,
    "day": BillingCycle.DAILY,
}
_PRICE_INTERVAL_CONFIDENCE = 0.8


def _from_interval(months: int, confidence: float) -> ExtractedBillingCycle:
    known = _MONTH_COUNTS.get(months)
    if known is not None:
        return ExtractedBillingCycle(cycle=known, confidence=confidence)
    return ExtractedBillingCycle(
        cycle=BillingCycle.CUSTOM,
        interval_months=months,
        confidence=round(confidence - _CUSTOM_PENALTY, 2),
    )


def extract_billing_cycle(text: str | None) -> ExtractedBillingCycle | None:
    """Extract the billing recurrence described by a message.

    Tries, in order: known cycle phrases, "every N months/years" intervals,
    per-cycle keywords, a price with an interval suffix, and finally a monthly
    default for recurring-payment wording.

    Args:
        text: Message text.

    Returns:
        Extracted billing cycle, or None.
    """
    if not text:
        return None

    lower = text.lower()

    for phrase in _PHRASES_LONGEST_FIRST:
        if phrase_pattern(phrase).search(lower):
            logger.debug("billing_cycle_extracted", source="dictionary", phrase=phrase)
            return ExtractedBillingCycle(
                cycle=BILLING_CYCLES[phrase], confidence=_DICTIONARY_CONFIDENCE
            )

    for entry in INTERVAL_PATTERNS:
        match = entry.pattern.search(lower)
        if not match:
            continue
        count = int(match.group(1))
        if count <= 0:
            continue
        return _from_interval(count * entry.unit_months, entry.confidence)

    for pattern, cycle in CONTEXT_PATTERNS:
        if pattern.search(lower):
            return ExtractedBillingCycle(cycle=cycle, confidence=_CONTEXT_CONFIDENCE)

    match = _PRICE_INTERVAL_RE.search(lower)
    if match:
        return ExtractedBillingCycle(
            cycle=_PRICE_INTERVAL_UNITS[match.group(1)], confidence=_PRICE_INTERVAL_CONFIDENCE
        )

    if ("subscription" in lower or "recurring" in lower) and (
        "payment" in lower or "charge" in lower or "billing" in lower
    ):
        return ExtractedBillingCycle(cycle=BillingCycle.MONTHLY, confidence=_FALLBACK_CONFIDENCE)

    return None
