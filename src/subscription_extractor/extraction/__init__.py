"""Field extractors and the orchestrator that combines them."""

from subscription_extractor.extraction.amount import detect_currency_from_context, extract_amount
from subscription_extractor.extraction.billing_cycle import extract_billing_cycle
from subscription_extractor.extraction.dates import extract_date
from subscription_extractor.extraction.orchestrator import (
    extract_subscription_data,
    score_extraction,
)
from subscription_extractor.extraction.service import (
    DEFAULT_STRATEGIES,
    ServiceStrategy,
    extract_service_name,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "ServiceStrategy",
    "detect_currency_from_context",
    "extract_amount",
    "extract_billing_cycle",
    "extract_date",
    "extract_service_name",
    "extract_subscription_data",
    "score_extraction",
]
