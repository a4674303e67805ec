"""Data models for Subscription Message Extractor.

This module contains Pydantic models for extraction and classification results.
Two confidence scales coexist on purpose: extracted fields and
``ExtractionResult.overall_confidence`` use 0.0-1.0, while the classifier's
``PatternMatchResult.confidence`` is an integer 0-100.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from subscription_extractor.models.message import SmsMessage


class PatternType(str, Enum):
    """Subscription event class enumeration."""

    SUBSCRIPTION_CONFIRMATION = "subscription_confirmation"
    PAYMENT_CONFIRMATION = "payment_confirmation"
    TRIAL_ENDING = "trial_ending"
    RENEWAL_NOTICE = "renewal_notice"
    PRICE_CHANGE = "price_change"
    CANCELLATION = "cancellation"


class BillingCycle(str, Enum):
    """Normalized billing recurrence enumeration."""

    MONTHLY = "monthly"
    YEARLY = "yearly"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    DAILY = "daily"
    CUSTOM = "custom"


class NormalizedAmount(BaseModel):
    """Monetary amount with ISO currency code."""

    value: float = Field(ge=0.0, description="Parsed amount")
    currency: str = Field(min_length=3, max_length=3, description="ISO-4217 currency code")
    original_text: str = Field(description="Matched text the amount was parsed from")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score")


class ExtractedService(BaseModel):
    """Merchant or service name."""

    raw_name: str = Field(description="Name as found in the text or sender")
    normalized_name: str = Field(description="Canonical, display-ready service name")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score")


class ExtractedDate(BaseModel):
    """Calendar date mentioned in a message."""

    date: dt.date = Field(description="Resolved calendar date")
    original_text: str = Field(description="Matched text the date was resolved from")
    is_relative: bool = Field(default=False, description="Whether the text was a relative phrase")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score")


class ExtractedBillingCycle(BaseModel):
    """Billing recurrence mentioned in a message."""

    cycle: BillingCycle = Field(description="Normalized billing cycle")
    interval_months: Optional[int] = Field(
        default=None,
        ge=1,
        description="Interval in months, only set for custom cycles",
    )
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score")


class ExtractionResult(BaseModel):
    """Merged output of all field extractors for one message."""

    amount: Optional[NormalizedAmount] = None
    service: Optional[ExtractedService] = None
    date: Optional[ExtractedDate] = None
    billing_cycle: Optional[ExtractedBillingCycle] = None
    overall_confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def field_count(self) -> int:
        """Number of extracted fields present."""
        return sum(
            value is not None
            for value in (self.amount, self.service, self.date, self.billing_cycle)
        )


class ExtractorHints(BaseModel):
    """Which extracted fields a registry pattern expects its messages to carry."""

    model_config = ConfigDict(frozen=True)

    amount: bool = False
    service_name: bool = False
    date: bool = False


class ExtractedData(BaseModel):
    """Flattened extracted fields reported alongside a classification."""

    price: Optional[float] = None
    currency: Optional[str] = None
    service_name: Optional[str] = None
    date: Optional[dt.date] = None
    billing_cycle: Optional[BillingCycle] = None
    next_billing_date: Optional[dt.date] = None


class PatternMatchResult(BaseModel):
    """Classifier output for one message."""

    matched: bool = Field(default=False, description="Whether this is a subscription message")
    confidence: int = Field(default=0, ge=0, le=100, description="Confidence on a 0-100 scale")
    pattern_type: Optional[PatternType] = Field(default=None, description="Event class")
    extracted_data: ExtractedData = Field(default_factory=ExtractedData)
    hints: Optional[ExtractorHints] = Field(
        default=None,
        description="Extractor hints of the registry pattern that matched, if any",
    )


__all__ = [
    "BillingCycle",
    "ExtractedBillingCycle",
    "ExtractedData",
    "ExtractedDate",
    "ExtractedService",
    "ExtractionResult",
    "ExtractorHints",
    "NormalizedAmount",
    "PatternMatchResult",
    "PatternType",
    "SmsMessage",
]
