"""Service (merchant) name extraction.

The extractor is a chain of strategies tried in order; the first strategy that
produces a candidate wins, even if a later strategy might have scored higher.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

import structlog

from subscription_extractor.extraction.lexicon import SERVICE_ALIASES, longest_first
from subscription_extractor.models import ExtractedService
from subscription_extractor.utils import phrase_pattern, title_case

logger = structlog.get_logger()

_ALIASES_LONGEST_FIRST = longest_first(SERVICE_ALIASES)

_CAPITALIZED_WORD_RE = re.compile(r"\b([A-Z][A-Za-z0-9]{2,})\b")
_CAPITALIZED_STOPWORDS = frozenset(
    {"this", "your", "please", "thank", "information", "message", "subscription", "payment"}
)

# Words a contextual capture may start with that are not part of a name.
_LEADING_NOISE = frozenset({"your", "the", "this", "our", "my"})

_PHONE_LIKE_RE = re.compile(r"^[\d\s+()\-.]+$")
_SMS_PREFIX_RE = re.compile(r"^(?:sms|txt|info|alert)-")
_SENDER_PREFIX_RE = re.compile(
    r"^(?:sms|txt|info|alert|noreply|no-reply|billing|support|service|notification)[\s\-_:]+",
    re.IGNORECASE,
)

# Keywords match in any case; the captured name must start with a capital.
_NAME = r"([A-Z][A-Za-z0-9+]+(?:\s+[A-Z][A-Za-z0-9+]+){0,2})"
_END = r"(?=\s|:|,|\.|!|$)"


def _clean_alias(alias: str) -> str:
    return re.sub(r"\s+", "", alias).replace("+", "")


# Aliases shorter than three letters once cleaned ("ps+") are too ambiguous to
# look for inside domains and sender names.
_SENDER_ALIASES = [alias for alias in _ALIASES_LONGEST_FIRST if len(_clean_alias(alias)) >= 3]


def _normalize_known(name: str) -> str | None:
    lowered = name.lower()
    for alias, normalized in SERVICE_ALIASES.items():
        if lowered == alias or lowered == normalized.lower():
            return normalized
    return None


def _strip_leading_noise(name: str) -> str:
    words = name.split()
    while words and words[0].lower() in _LEADING_NOISE:
        words = words[1:]
    return " ".join(words)


class ServiceStrategy(ABC):
    """One attempt at finding a service name."""

    name: str = "strategy"

    @abstractmethod
    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        """Return a service candidate, or None to fall through to the next strategy."""


class TextAliasStrategy(ServiceStrategy):
    """A known alias mentioned in the text."""

    name = "text_alias"

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        for alias in _ALIASES_LONGEST_FIRST:
            if phrase_pattern(alias).search(text):
                return ExtractedService(
                    raw_name=alias, normalized_name=SERVICE_ALIASES[alias], confidence=0.95
                )
        return None


class EmailSenderStrategy(ServiceStrategy):
    """Service derived from an email sender's domain."""

    name = "email_sender"

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        if not sender or "@" not in sender:
            return None

        domain = sender.split("@", 1)[1].strip().lower()
        if not domain:
            return None

        for alias in _SENDER_ALIASES:
            if _clean_alias(alias) in domain:
                return ExtractedService(
                    raw_name=domain, normalized_name=SERVICE_ALIASES[alias], confidence=0.9
                )

        labels = domain.split(".")
        if len(labels) < 2:
            return None

        company = labels[0]
        for alias in _ALIASES_LONGEST_FIRST:
            if _clean_alias(alias) == company:
                return ExtractedService(
                    raw_name=company, normalized_name=SERVICE_ALIASES[alias], confidence=0.9
                )

        display = title_case(company)
        if len(display) > 2:
            return ExtractedService(raw_name=company, normalized_name=display, confidence=0.85)
        return None


class PlainSenderStrategy(ServiceStrategy):
    """Service derived from a non-email sender such as an SMS short code name."""

    name = "plain_sender"

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        if not sender or "@" in sender:
            return None

        lowered = sender.lower().strip()
        for alias in _SENDER_ALIASES:
            if _clean_alias(alias) in lowered:
                return ExtractedService(
                    raw_name=sender, normalized_name=SERVICE_ALIASES[alias], confidence=0.9
                )

        if len(lowered) <= 2 or _PHONE_LIKE_RE.match(lowered):
            return None

        cleaned = _SMS_PREFIX_RE.sub("", lowered)
        if not cleaned or _PHONE_LIKE_RE.match(cleaned):
            return None

        return ExtractedService(raw_name=lowered, normalized_name=title_case(cleaned), confidence=0.8)


class ContextPhraseStrategy(ServiceStrategy):
    """Service named by a phrase such as "welcome to X" or "your X plan"."""

    name = "context_phrase"

    PATTERNS: tuple[tuple[re.Pattern[str], float], ...] = (
        (re.compile(rf"(?i:\b(?:from|by))\s+{_NAME}{_END}"), 0.85),
        (re.compile(rf"{_NAME}\s+(?i:subscription|membership|plan|service){_END}"), 0.85),
        (
            re.compile(rf"(?i:\b(?:subscription|membership|payment)\s+(?:to|for|from))\s+{_NAME}{_END}"),
            0.85,
        ),
        (
            re.compile(rf"(?i:\byour)\s+{_NAME}\s+(?i:plan|account|subscription|membership|service){_END}"),
            0.85,
        ),
        (re.compile(rf"{_NAME}\s+(?i:charges|fees|billing){_END}"), 0.8),
        (
            re.compile(
                rf"(?i:thank\s+you\s+for\s+(?:subscribe|subscribing|your\s+subscription)\s+(?:to|with))"
                rf"\s+{_NAME}{_END}"
            ),
            0.9,
        ),
        (re.compile(rf"(?i:\bwelcome\s+to)\s+{_NAME}{_END}"), 0.85),
    )

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        for pattern, confidence in self.PATTERNS:
            match = pattern.search(text)
            if not match:
                continue

            name = _strip_leading_noise(match.group(1).strip())
            if not name:
                continue

            return ExtractedService(
                raw_name=name,
                normalized_name=_normalize_known(name) or name,
                confidence=confidence,
            )
        return None


class CapitalizedWordStrategy(ServiceStrategy):
    """First capitalized word that is not a common sentence opener."""

    name = "capitalized_word"

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        for match in _CAPITALIZED_WORD_RE.finditer(text):
            word = match.group(1)
            if word.lower() not in _CAPITALIZED_STOPWORDS:
                return ExtractedService(raw_name=word, normalized_name=word, confidence=0.7)
        return None


class SenderFallbackStrategy(ServiceStrategy):
    """Cleaned-up sender string as a last resort."""

    name = "sender_fallback"

    def attempt(self, text: str, sender: str | None) -> ExtractedService | None:
        if not sender or len(sender) <= 2:
            return None

        cleaned = re.sub(r"@.*$", "", sender)
        if cleaned.isdigit():
            return None
        cleaned = _SENDER_PREFIX_RE.sub("", cleaned).strip()

        if len(cleaned) <= 2 or _PHONE_LIKE_RE.match(cleaned):
            return None
        return ExtractedService(raw_name=sender, normalized_name=title_case(cleaned), confidence=0.6)


DEFAULT_STRATEGIES: tuple[ServiceStrategy, ...] = (
    TextAliasStrategy(),
    EmailSenderStrategy(),
    PlainSenderStrategy(),
    ContextPhraseStrategy(),
    CapitalizedWordStrategy(),
    SenderFallbackStrategy(),
)


def extract_service_name(
    text: str | None,
    sender: str | None = None,
    strategies: Sequence[ServiceStrategy] = DEFAULT_STRATEGIES,
) -> ExtractedService | None:
    """Extract the service a message is about.

    Args:
        text: Message text.
        sender: Optional sender (email address, short code or name).
        strategies: Ordered strategies; the first candidate found is returned.

    Returns:
        Extracted service, or None when no strategy finds one.
    """
    if not text:
        return None

    for strategy in strategies:
        candidate = strategy.attempt(text, sender)
        if candidate is not None:
            logger.debug(
                "service_extracted",
                strategy=strategy.name,
                service=candidate.normalized_name,
                confidence=candidate.confidence,
            )
            return candidate
    return None
