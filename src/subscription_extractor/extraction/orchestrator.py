"""Runs every field extractor over one message and scores the combined result."""

from __future__ import annotations

import datetime as dt

import structlog

from subscription_extractor.extraction.amount import extract_amount
from subscription_extractor.extraction.billing_cycle import extract_billing_cycle
from subscription_extractor.extraction.dates import extract_date
from subscription_extractor.extraction.service import extract_service_name
from subscription_extractor.models import ExtractionResult

logger = structlog.get_logger()

CRITICAL_WEIGHT = 1.5
SUPPORTING_WEIGHT = 1.0

BOTH_CRITICAL_BOOST = 0.1
KEYWORD_BOOST = 0.05
FIELD_COUNT_BOOST = 0.1
SENDER_MATCH_BOOST = 0.05

SUBSCRIPTION_KEYWORDS = ("subscription", "recurring payment", "monthly", "yearly", "membership")


def score_extraction(result: ExtractionResult, text: str, sender: str | None = None) -> float:
    """Compute the overall confidence of an extraction.

    A weighted mean of the field confidences (amount and service weigh 1.5,
    date and billing cycle 1.0) plus additive boosts, capped at 1.0.
    """
    weighted_sum = 0.0
    weight_count = 0.0

    for field, weight in (
        (result.amount, CRITICAL_WEIGHT),
        (result.service, CRITICAL_WEIGHT),
        (result.date, SUPPORTING_WEIGHT),
        (result.billing_cycle, SUPPORTING_WEIGHT),
    ):
        if field is not None:
            weighted_sum += field.confidence * weight
            weight_count += weight

    score = weighted_sum / weight_count if weight_count else 0.0

    if result.amount is not None and result.service is not None:
        score += BOTH_CRITICAL_BOOST

    lower = text.lower()
    if any(keyword in lower for keyword in SUBSCRIPTION_KEYWORDS):
        score += KEYWORD_BOOST

    if result.field_count >= 3:
        score += FIELD_COUNT_BOOST

    if result.service is not None and sender and result.service.raw_name.lower() in sender.lower():
        score += SENDER_MATCH_BOOST

    return min(score, 1.0)


def extract_subscription_data(
    text: str | None,
    sender: str | None = None,
    *,
    today: dt.date | None = None,
) -> ExtractionResult:
    """Extract amount, service, date and billing cycle from one message.

    Args:
        text: Message text.
        sender: Optional sender identifier.
        today: Anchor date for date extraction.

    Returns:
        Extraction result; empty with zero confidence for empty text.
    """
    if not text:
        return ExtractionResult()

    result = ExtractionResult(
        amount=extract_amount(text),
        service=extract_service_name(text, sender),
        date=extract_date(text, today=today),
        billing_cycle=extract_billing_cycle(text),
    )
    result.overall_confidence = score_extraction(result, text, sender)

    logger.debug(
        "subscription_data_extracted",
        fields=result.field_count,
        overall_confidence=result.overall_confidence,
    )
    return result
