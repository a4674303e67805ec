"""Cheap checks used before (or instead of) full extraction."""

from __future__ import annotations

import re

from subscription_extractor.extraction.amount import extract_amount
from subscription_extractor.extraction.billing_cycle import extract_billing_cycle
from subscription_extractor.models import BillingCycle

SUBSCRIPTION_PHRASES: tuple[str, ...] = (
    r"has been subscribed",
    r"subscription confirmed",
    r"subscription has been activated",
    r"welcome to your subscription",
    r"recurring payment",
    r"payment of [0-9]+(?:\.[0-9]{2})? (?:USD|EUR|GBP)",
    r"monthly subscription",
    r"annual subscription",
    r"you have subscribed",
    r"subscription started",
    r"trial period",
    r"free trial",
    r"trial has begun",
    r"trial will end",
    r"(?:will|['’]ll)\s+be\s+charged",
    r"you will be billed",
    r"auto-renewal",
    r"renewal confirmation",
    r"plan renewed",
    r"subscription renewed",
    r"has been renewed",
    r"bill paid",
    r"payment successful",
    r"payment confirmation",
    r"subscription fee",
    r"membership",
)

SUBSCRIPTION_SERVICES: tuple[str, ...] = (
    "Netflix",
    "Spotify",
    "Amazon",
    "Prime",
    "Disney+",
    "Disney Plus",
    "HBO",
    "Hulu",
    "YouTube",
    "Apple",
    "Apple Music",
    "iCloud",
    "Google",
    "Microsoft",
    "Office365",
    "Xbox",
    "PlayStation",
    "EA",
    "Adobe",
    "Dropbox",
    "Audible",
    "Kindle",
)

_PHRASE_RE = re.compile("|".join(f"(?:{phrase})" for phrase in SUBSCRIPTION_PHRASES), re.IGNORECASE)
_SERVICE_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(name) for name in SUBSCRIPTION_SERVICES) + r")(?!\w)",
    re.IGNORECASE,
)


def contains_subscription_pattern(text: str | None) -> bool:
    """Whether a message uses subscription wording or names a well-known service."""
    if not text:
        return False
    return bool(_PHRASE_RE.search(text) or _SERVICE_RE.search(text))


def extract_price(text: str | None) -> float | None:
    """Return just the numeric amount of a message, if any."""
    amount = extract_amount(text)
    return amount.value if amount else None


def detect_billing_cycle(text: str | None) -> BillingCycle | None:
    """Return just the billing cycle of a message, if any."""
    cycle = extract_billing_cycle(text)
    return cycle.cycle if cycle else None
