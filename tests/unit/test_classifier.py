"""Unit tests for the subscription message classifier."""

from datetime import date

import pytest

from subscription_extractor.models import (
    BillingCycle,
    ExtractedBillingCycle,
    ExtractedDate,
    ExtractionResult,
    ExtractorHints,
    PatternType,
)
from subscription_extractor.patterns import (
    PatternRegistry,
    analyze_subscription_text,
    infer_pattern_type,
    next_billing_date,
)


class TestAnalyzeSubscriptionText:
    """Test suite for analyze_subscription_text."""

    def test_empty_text(self, registry: PatternRegistry, today: date) -> None:
        """Test that empty text yields an unmatched result."""
        result = analyze_subscription_text("", "netflix@example.com", registry, today=today)

        assert result.matched is False
        assert result.confidence == 0
        assert result.pattern_type is None
        assert result.extracted_data.price is None

    def test_registry_match(self, registry: PatternRegistry, today: date) -> None:
        """Test classification and extraction of a mixed message."""
        result = analyze_subscription_text(
            "Welcome to Netflix! Your payment of $9.99 has been processed. "
            "Your subscription is now active.",
            "netflix@example.com",
            registry,
            today=today,
        )

        assert result.matched is True
        assert result.confidence == 85
        assert result.pattern_type == PatternType.PAYMENT_CONFIRMATION
        assert result.extracted_data.service_name == "Netflix"
        assert result.extracted_data.price == pytest.approx(9.99)
        assert result.extracted_data.currency == "USD"
        assert result.hints is not None

    def test_custom_pattern_wins(self, registry: PatternRegistry, today: date) -> None:
        """Test that a higher-scoring custom pattern is preferred."""
        registry.register(
            r"thank\s+you\s+for\s+using\s+custom\s+service",
            PatternType.SUBSCRIPTION_CONFIRMATION,
            95,
            ExtractorHints(service_name=True),
        )

        result = analyze_subscription_text(
            "Thank you for using Custom Service. Your subscription is active.",
            "",
            registry,
            today=today,
        )

        assert result.matched is True
        assert result.confidence == 95
        assert result.pattern_type == PatternType.SUBSCRIPTION_CONFIRMATION
        assert result.hints is not None
        assert result.hints.service_name is True

    def test_extraction_fallback_accepts(self, today: date) -> None:
        """Test that a confident extraction is accepted without a registry match."""
        result = analyze_subscription_text(
            "Your Zorblax membership: $12.99 monthly",
            "",
            PatternRegistry(),
            today=today,
        )

        assert result.matched is True
        assert result.confidence == 100
        assert result.pattern_type == PatternType.PAYMENT_CONFIRMATION
        assert result.extracted_data.service_name == "Zorblax"
        assert result.extracted_data.billing_cycle == BillingCycle.MONTHLY
        assert result.hints is None

    def test_inferred_renewal(self, today: date) -> None:
        """Test that the event type is inferred from the wording."""
        result = analyze_subscription_text(
            "Your membership renews soon", "Zorblax", PatternRegistry(), today=today
        )

        assert result.matched is True
        assert result.confidence >= 89
        assert result.pattern_type == PatternType.RENEWAL_NOTICE

    def test_no_inference_without_service(self, today: date) -> None:
        """Test that no event type is inferred when no service was found."""
        result = analyze_subscription_text(
            "Your membership renews soon", "", PatternRegistry(), today=today
        )

        assert result.matched is False
        assert result.confidence == 0
        assert result.pattern_type is None

    def test_below_threshold_keeps_inferred_type(self, today: date) -> None:
        """Test that a weak extraction is rejected but keeps its inferred type."""
        result = analyze_subscription_text(
            "your trial period renews soon",
            "billing-zorblax@localhost",
            PatternRegistry(),
            today=today,
            accept_threshold=0.7,
        )

        assert result.matched is False
        assert result.confidence == 0
        assert result.pattern_type == PatternType.RENEWAL_NOTICE

    def test_prefilter_rejects(self, today: date) -> None:
        """Test that text without subscription wording is not accepted."""
        result = analyze_subscription_text(
            "Zorblax charged $12.99 monthly", "", PatternRegistry(), today=today
        )

        assert result.matched is False
        assert result.confidence == 0
        assert result.pattern_type is None
        assert result.extracted_data.price == pytest.approx(12.99)

    def test_non_subscription_messages(
        self,
        registry: PatternRegistry,
        non_subscription_messages: list[str],
        today: date,
    ) -> None:
        """Test that everyday messages are not classified."""
        for text in non_subscription_messages:
            result = analyze_subscription_text(text, "", registry, today=today)
            assert result.matched is False, text
            assert result.confidence == 0, text

    def test_overflowing_interval_has_no_next_billing_date(self, registry: PatternRegistry) -> None:
        """Test that an interval reaching past the last representable year is tolerated."""
        result = analyze_subscription_text(
            "Your Netflix subscription renewed on 01/05/2024, billed every 99999 months.",
            "netflix",
            registry,
            today=date(2026, 10, 19),
        )

        assert result.matched is True
        assert result.extracted_data.billing_cycle == BillingCycle.CUSTOM
        assert result.extracted_data.date == date(2024, 1, 5)
        assert result.extracted_data.next_billing_date is None

    def test_score_above_scale_is_capped(self, today: date) -> None:
        """Test that a pattern scored above 100 reports confidence 100."""
        registry = PatternRegistry()
        registry.register("acme", PatternType.PAYMENT_CONFIRMATION, 150)

        result = analyze_subscription_text("Acme receipt", "", registry, today=today)

        assert result.matched is True
        assert result.confidence == 100

    def test_next_billing_date_reported(self, registry: PatternRegistry, today: date) -> None:
        """Test that an upcoming renewal date is reported as next billing date."""
        result = analyze_subscription_text(
            "Your subscription to Spotify will automatically renew on 06/15/2023 "
            "at the price of $9.99.",
            "",
            registry,
            today=today,
        )

        assert result.pattern_type == PatternType.RENEWAL_NOTICE
        assert result.extracted_data.date == date(2023, 6, 15)
        assert result.extracted_data.next_billing_date == date(2023, 6, 15)


class TestNextBillingDate:
    """Test suite for next_billing_date."""

    @staticmethod
    def _extraction(found: date | None, cycle: ExtractedBillingCycle | None) -> ExtractionResult:
        return ExtractionResult(
            date=(
                ExtractedDate(date=found, original_text="x", confidence=0.9)
                if found
                else None
            ),
            billing_cycle=cycle,
        )

    def test_future_date(self, today: date) -> None:
        """Test that a date on or after today is returned as is."""
        extraction = self._extraction(date(2023, 5, 1), None)

        assert next_billing_date(extraction, today) == date(2023, 5, 1)

    def test_past_date_advances_one_cycle(self, today: date) -> None:
        """Test that a past date moves forward by one billing period."""
        cycle = ExtractedBillingCycle(cycle=BillingCycle.MONTHLY, confidence=0.9)
        extraction = self._extraction(date(2023, 4, 15), cycle)

        assert next_billing_date(extraction, today) == date(2023, 5, 15)

    def test_past_date_custom_interval(self, today: date) -> None:
        """Test that custom intervals advance by their month count."""
        cycle = ExtractedBillingCycle(
            cycle=BillingCycle.CUSTOM, interval_months=2, confidence=0.85
        )
        extraction = self._extraction(date(2023, 4, 15), cycle)

        assert next_billing_date(extraction, today) == date(2023, 6, 15)

    def test_past_date_without_cycle(self, today: date) -> None:
        """Test that a past date without a cycle gives no next billing date."""
        extraction = self._extraction(date(2023, 4, 15), None)

        assert next_billing_date(extraction, today) is None

    def test_custom_cycle_without_interval(self, today: date) -> None:
        """Test that a custom cycle without interval cannot be advanced."""
        cycle = ExtractedBillingCycle(cycle=BillingCycle.CUSTOM, confidence=0.85)
        extraction = self._extraction(date(2023, 4, 15), cycle)

        assert next_billing_date(extraction, today) is None

    def test_interval_past_last_year(self) -> None:
        """Test that a step beyond the calendar range gives no next billing date."""
        cycle = ExtractedBillingCycle(
            cycle=BillingCycle.CUSTOM, interval_months=99999, confidence=0.85
        )
        extraction = self._extraction(date(2024, 1, 5), cycle)

        assert next_billing_date(extraction, date(2026, 10, 19)) is None

    def test_no_date(self, today: date) -> None:
        """Test that no date gives no next billing date."""
        cycle = ExtractedBillingCycle(cycle=BillingCycle.MONTHLY, confidence=0.9)

        assert next_billing_date(self._extraction(None, cycle), today) is None


class TestInferPatternType:
    """Test suite for infer_pattern_type."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Your plan renews on Friday", PatternType.RENEWAL_NOTICE),
            ("Your next bill is ready", PatternType.RENEWAL_NOTICE),
            ("Welcome aboard", PatternType.SUBSCRIPTION_CONFIRMATION),
            ("Your trial expires soon", PatternType.TRIAL_ENDING),
            ("We are sorry to see you cancel", PatternType.CANCELLATION),
            ("The price is increasing", PatternType.PRICE_CHANGE),
            ("Thanks, Zorblax", PatternType.PAYMENT_CONFIRMATION),
        ],
    )
    def test_rules(self, text: str, expected: PatternType) -> None:
        """Test that each keyword rule yields its event type."""
        assert infer_pattern_type(text) == expected

    def test_first_rule_wins(self) -> None:
        """Test that rules are applied in order."""
        assert infer_pattern_type("Welcome! Your plan renews monthly") == PatternType.RENEWAL_NOTICE

    def test_trial_needs_end_wording(self) -> None:
        """Test that a trial mention alone is not a trial ending."""
        assert infer_pattern_type("Your trial has started") == PatternType.PAYMENT_CONFIRMATION
