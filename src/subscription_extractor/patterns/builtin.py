"""Built-in classification patterns.

Scores stay between 75 and 92 so that a service-specific rule registered at
startup with a higher score takes precedence.
"""

from __future__ import annotations

from subscription_extractor.models import ExtractorHints, PatternType

_PAYMENT_HINTS = ExtractorHints(amount=True, service_name=True, date=True)
_SUBSCRIPTION_HINTS = ExtractorHints(service_name=True)
_TRIAL_HINTS = ExtractorHints(amount=True, service_name=True, date=True)
_RENEWAL_HINTS = ExtractorHints(amount=True, service_name=True, date=True)
_PRICE_HINTS = ExtractorHints(amount=True, service_name=True, date=True)
_CANCELLATION_HINTS = ExtractorHints(service_name=True, date=True)

BUILTIN_PATTERNS: tuple[tuple[str, PatternType, int, ExtractorHints], ...] = (
    # Payment confirmation
    (
        r"payment\s+of\s+.{0,40}?\b(?:has\s+been\s+|was\s+)?(?:processed|successful|received|confirmed)",
        PatternType.PAYMENT_CONFIRMATION,
        85,
        _PAYMENT_HINTS,
    ),
    (r"charged\s+your\s+(?:card|account)", PatternType.PAYMENT_CONFIRMATION, 85, _PAYMENT_HINTS),
    (
        r"payment\s+(?:successful|confirmed|received|processed)",
        PatternType.PAYMENT_CONFIRMATION,
        80,
        _PAYMENT_HINTS,
    ),
    (r"payment\s+confirmation", PatternType.PAYMENT_CONFIRMATION, 80, _PAYMENT_HINTS),
    (r"bill\s+paid", PatternType.PAYMENT_CONFIRMATION, 75, _PAYMENT_HINTS),
    # Subscription confirmation
    (r"welcome\s+to\b", PatternType.SUBSCRIPTION_CONFIRMATION, 85, _SUBSCRIPTION_HINTS),
    (
        r"(?:subscription|membership)\b.{0,40}?\b(?:has\s+been|is\s+now)\s+"
        r"(?:activated|confirmed|started|active)",
        PatternType.SUBSCRIPTION_CONFIRMATION,
        85,
        _SUBSCRIPTION_HINTS,
    ),
    (
        r"(?:subscription|membership)\s+(?:confirmed|activated|started)",
        PatternType.SUBSCRIPTION_CONFIRMATION,
        85,
        _SUBSCRIPTION_HINTS,
    ),
    (
        r"you(?:['’]re|\s+are)\s+now\s+subscribed|you\s+have\s+subscribed",
        PatternType.SUBSCRIPTION_CONFIRMATION,
        90,
        _SUBSCRIPTION_HINTS,
    ),
    (
        r"thanks?\s+(?:you\s+)?for\s+subscribing",
        PatternType.SUBSCRIPTION_CONFIRMATION,
        90,
        _SUBSCRIPTION_HINTS,
    ),
    (r"has\s+been\s+subscribed", PatternType.SUBSCRIPTION_CONFIRMATION, 85, _SUBSCRIPTION_HINTS),
    (
        r"(?:membership|subscription|trial)\s+has\s+(?:started|begun)",
        PatternType.SUBSCRIPTION_CONFIRMATION,
        85,
        _SUBSCRIPTION_HINTS,
    ),
    # Trial ending
    (
        r"trial\s+.{0,40}?(?:will\s+end|ends|ending|expires?|is\s+ending)",
        PatternType.TRIAL_ENDING,
        90,
        _TRIAL_HINTS,
    ),
    # Renewal notice
    (
        r"(?:will|to)\s+(?:automatically\s+|auto-?)?renew",
        PatternType.RENEWAL_NOTICE,
        90,
        _RENEWAL_HINTS,
    ),
    (r"auto-?renew(?:al|s)?", PatternType.RENEWAL_NOTICE, 88, _RENEWAL_HINTS),
    (
        r"(?:subscription|plan|membership)\s+(?:has\s+been\s+)?renewed",
        PatternType.RENEWAL_NOTICE,
        88,
        _RENEWAL_HINTS,
    ),
    (r"renewal\s+(?:notice|reminder|confirmation)", PatternType.RENEWAL_NOTICE, 88, _RENEWAL_HINTS),
    (r"subscription\s+renewal", PatternType.RENEWAL_NOTICE, 88, _RENEWAL_HINTS),
    (r"automatically\s+bill", PatternType.RENEWAL_NOTICE, 88, _RENEWAL_HINTS),
    (r"next\s+billing\s+date\s+is", PatternType.RENEWAL_NOTICE, 85, _RENEWAL_HINTS),
    # Price change
    (
        r"price\s+(?:change|update|increase|adjustment)",
        PatternType.PRICE_CHANGE,
        92,
        _PRICE_HINTS,
    ),
    (
        r"price\s+.{0,40}?will\s+(?:change|increase|be\s+adjusted|go\s+up)",
        PatternType.PRICE_CHANGE,
        92,
        _PRICE_HINTS,
    ),
    (r"updating\s+the\s+price", PatternType.PRICE_CHANGE, 92, _PRICE_HINTS),
    (r"(?:change|increase)\s+from\s+\S+\s+to\s+", PatternType.PRICE_CHANGE, 90, _PRICE_HINTS),
    # Cancellation
    (r"(?:has\s+been|was|been)\s+cancel+ed", PatternType.CANCELLATION, 92, _CANCELLATION_HINTS),
    (
        r"cancellation\s+(?:confirmation|confirmed|request)",
        PatternType.CANCELLATION,
        92,
        _CANCELLATION_HINTS,
    ),
    (r"request\s+to\s+cancel", PatternType.CANCELLATION, 92, _CANCELLATION_HINTS),
    (
        r"(?:subscription|membership)\s+will\s+end",
        PatternType.CANCELLATION,
        90,
        _CANCELLATION_HINTS,
    ),
)
