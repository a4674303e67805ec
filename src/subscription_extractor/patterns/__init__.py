"""Message intent classification.

This package contains the pattern registry, the built-in patterns, and the
classifier that combines them with the field extractors.
"""

from .classifier import analyze_subscription_text, next_billing_date
from .inference import infer_pattern_type
from .loader import PatternRule, load_pattern_rules, read_pattern_rules
from .prefilter import contains_subscription_pattern, detect_billing_cycle, extract_price
from .registry import PatternEntry, PatternRegistry

__all__ = [
    "PatternEntry",
    "PatternRegistry",
    "PatternRule",
    "analyze_subscription_text",
    "contains_subscription_pattern",
    "detect_billing_cycle",
    "extract_price",
    "infer_pattern_type",
    "load_pattern_rules",
    "next_billing_date",
    "read_pattern_rules",
]
