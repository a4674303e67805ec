"""Subscription message classifier.

Combines the pattern registry (message intent) with the field extractors
(amount, service, date, billing cycle) into a :class:`PatternMatchResult`.
"""

from __future__ import annotations

import datetime as dt
import math

import structlog
from dateutil.relativedelta import relativedelta

from subscription_extractor.extraction import extract_subscription_data
from subscription_extractor.models import (
    BillingCycle,
    ExtractedBillingCycle,
    ExtractedData,
    ExtractionResult,
    PatternMatchResult,
)
from subscription_extractor.patterns.inference import infer_pattern_type
from subscription_extractor.patterns.prefilter import contains_subscription_pattern
from subscription_extractor.patterns.registry import PatternRegistry

logger = structlog.get_logger()

DEFAULT_ACCEPT_THRESHOLD = 0.6
MAX_CONFIDENCE = 100

_CYCLE_STEPS: dict[BillingCycle, relativedelta] = {
    BillingCycle.DAILY: relativedelta(days=1),
    BillingCycle.WEEKLY: relativedelta(weeks=1),
    BillingCycle.MONTHLY: relativedelta(months=1),
    BillingCycle.QUARTERLY: relativedelta(months=3),
    BillingCycle.BIANNUAL: relativedelta(months=6),
    BillingCycle.YEARLY: relativedelta(years=1),
}


def cycle_step(billing_cycle: ExtractedBillingCycle) -> relativedelta | None:
    """Length of one billing period, or None for a custom cycle without an interval."""
    if billing_cycle.cycle is BillingCycle.CUSTOM:
        if billing_cycle.interval_months is None:
            return None
        return relativedelta(months=billing_cycle.interval_months)
    return _CYCLE_STEPS[billing_cycle.cycle]


def next_billing_date(extraction: ExtractionResult, today: dt.date) -> dt.date | None:
    """Upcoming charge date implied by an extraction.

    A date on or after ``today`` is taken as is. A past date is moved forward
    by one billing period when the billing cycle is known.
    """
    if extraction.date is None:
        return None

    found = extraction.date.date
    if found >= today:
        return found

    if extraction.billing_cycle is None:
        return None
    step = cycle_step(extraction.billing_cycle)
    if step is None:
        return None
    try:
        return found + step
    except (ValueError, OverflowError):
        # Interval pushes the date past the last representable year.
        return None


def _extracted_data(extraction: ExtractionResult, today: dt.date) -> ExtractedData:
    return ExtractedData(
        price=extraction.amount.value if extraction.amount else None,
        currency=extraction.amount.currency if extraction.amount else None,
        service_name=extraction.service.normalized_name if extraction.service else None,
        date=extraction.date.date if extraction.date else None,
        billing_cycle=extraction.billing_cycle.cycle if extraction.billing_cycle else None,
        next_billing_date=next_billing_date(extraction, today),
    )


def analyze_subscription_text(
    text: str | None,
    sender: str | None,
    registry: PatternRegistry,
    *,
    today: dt.date | None = None,
    accept_threshold: float = DEFAULT_ACCEPT_THRESHOLD,
) -> PatternMatchResult:
    """Classify a message and extract its subscription fields.

    The highest-scoring registry pattern decides the event type and the
    confidence (0-100). Without a registry match, messages that still look like
    subscription traffic get an inferred event type, and are accepted when the
    extraction's overall confidence exceeds ``accept_threshold``.

    Args:
        text: Message text.
        sender: Sender identifier (phone number, short code or email).
        registry: Patterns to classify against.
        today: Anchor date for date extraction. Defaults to the current date.
        accept_threshold: Overall extraction confidence (0.0-1.0) needed to
            accept a message no registry pattern matched.

    Returns:
        Classification result. Unmatched messages have ``matched=False`` and
        ``confidence=0``.
    """
    if not text:
        return PatternMatchResult()
    today = today or dt.date.today()

    entry = registry.best_match(text)
    extraction = extract_subscription_data(text, sender, today=today)
    data = _extracted_data(extraction, today)

    if entry is not None:
        confidence = min(entry.score, MAX_CONFIDENCE)
        logger.debug(
            "message_classified",
            pattern_type=entry.pattern_type.value,
            confidence=confidence,
            source="registry",
        )
        return PatternMatchResult(
            matched=True,
            confidence=confidence,
            pattern_type=entry.pattern_type,
            extracted_data=data,
            hints=entry.hints,
        )

    result = PatternMatchResult(extracted_data=data)
    if not contains_subscription_pattern(text):
        return result

    if extraction.service is not None:
        result.pattern_type = infer_pattern_type(text)

    if extraction.overall_confidence > accept_threshold:
        result.matched = True
        result.confidence = math.floor(extraction.overall_confidence * 100)
        logger.debug(
            "message_classified",
            pattern_type=result.pattern_type.value if result.pattern_type else None,
            confidence=result.confidence,
            source="extraction",
        )

    return result
