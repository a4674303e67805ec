"""Keyword rules that guess an event type when no registry pattern matched."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from subscription_extractor.models import PatternType


@dataclass(frozen=True)
class InferenceRule:
    """Matches when the text contains any of ``any_of`` and, if given, any of ``and_any_of``."""

    pattern_type: PatternType
    any_of: tuple[str, ...]
    and_any_of: tuple[str, ...] = ()

    def applies(self, lower_text: str) -> bool:
        if not any(keyword in lower_text for keyword in self.any_of):
            return False
        return not self.and_any_of or any(keyword in lower_text for keyword in self.and_any_of)


INFERENCE_RULES: tuple[InferenceRule, ...] = (
    InferenceRule(PatternType.RENEWAL_NOTICE, ("renew", "next bill")),
    InferenceRule(PatternType.SUBSCRIPTION_CONFIRMATION, ("welcome", "subscribed")),
    InferenceRule(PatternType.TRIAL_ENDING, ("trial",), ("end", "expir")),
    InferenceRule(PatternType.CANCELLATION, ("cancel",)),
    InferenceRule(PatternType.PRICE_CHANGE, ("price",), ("change", "increas")),
)

DEFAULT_PATTERN_TYPE = PatternType.PAYMENT_CONFIRMATION


def infer_pattern_type(
    text: str, rules: Sequence[InferenceRule] = INFERENCE_RULES
) -> PatternType:
    """Return the event type of the first rule that applies, or payment confirmation."""
    lower = text.lower()
    for rule in rules:
        if rule.applies(lower):
            return rule.pattern_type
    return DEFAULT_PATTERN_TYPE
