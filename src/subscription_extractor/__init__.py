"""Subscription Message Extractor - structured data from subscription SMS.

This package classifies short notification messages (payment confirmations,
renewals, trial endings, price changes, cancellations) and extracts the
amount, service name, date and billing cycle they mention.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from subscription_extractor.config import Settings, get_settings
from subscription_extractor.extraction import extract_subscription_data
from subscription_extractor.patterns import PatternRegistry, analyze_subscription_text

__all__ = [
    "PatternRegistry",
    "Settings",
    "analyze_subscription_text",
    "extract_subscription_data",
    "get_settings",
    "__version__",
    "__author__",
]
