"""Unit tests for service name extraction."""

import pytest

from subscription_extractor.extraction import extract_service_name
from subscription_extractor.extraction.service import (
    CapitalizedWordStrategy,
    ContextPhraseStrategy,
    EmailSenderStrategy,
    PlainSenderStrategy,
    SenderFallbackStrategy,
    TextAliasStrategy,
)


class TestExtractServiceName:
    """Test suite for extract_service_name."""

    @pytest.mark.parametrize(
        ("text", "sender", "expected"),
        [
            ("Your Netflix subscription is active", "updates@netflix.com", "Netflix"),
            ("Payment to Spotify processed", "random@example.com", "Spotify"),
            ("Your Disney+ subscription renews tomorrow", "billing@mail.com", "Disney+"),
            ("Subscription to Paramount+ renewed", "billing@mail.com", "Paramount+"),
            ("Your Hulu plan will renew", "billing@mail.com", "Hulu"),
            ("Payment from Adobe received", "notify@bank.com", "Adobe"),
        ],
    )
    def test_known_services(self, text: str, sender: str, expected: str) -> None:
        """Test extracting well-known services from text and sender."""
        service = extract_service_name(text, sender)

        assert service is not None
        assert service.normalized_name == expected

    def test_alias_in_text(self) -> None:
        """Test that an alias in the text wins with the highest confidence."""
        service = extract_service_name("Your Netflix subscription is active")

        assert service is not None
        assert service.raw_name == "netflix"
        assert service.confidence == 0.95

    def test_longest_alias_wins(self) -> None:
        """Test that longer aliases take precedence over their prefixes."""
        service = extract_service_name("Your Canva Pro trial ends soon")

        assert service is not None
        assert service.normalized_name == "Canva Pro"

    def test_email_domain_alias(self) -> None:
        """Test recognizing a known service from the sender's domain."""
        service = extract_service_name("Your receipt is ready", "receipts@spotify.com")

        assert service is not None
        assert service.normalized_name == "Spotify"
        assert service.raw_name == "spotify.com"
        assert service.confidence == 0.9

    def test_email_domain_company(self) -> None:
        """Test deriving a name from an unknown sender domain."""
        service = extract_service_name("Your receipt is ready", "billing@acmestreaming.com")

        assert service is not None
        assert service.normalized_name == "Acmestreaming"
        assert service.confidence == 0.85

    def test_plain_sender_alias(self) -> None:
        """Test recognizing a known service from an SMS sender name."""
        service = extract_service_name("Your receipt is ready", "NETFLIX")

        assert service is not None
        assert service.normalized_name == "Netflix"
        assert service.confidence == 0.9

    def test_plain_sender_name(self) -> None:
        """Test using an unknown SMS sender name."""
        service = extract_service_name("Your receipt is ready", "AcmeBank")

        assert service is not None
        assert service.normalized_name == "Acmebank"
        assert service.confidence == 0.8

    def test_short_aliases_not_matched_inside_sender(self) -> None:
        """Test that two-letter aliases do not match inside longer sender names."""
        service = extract_service_name("Your order has shipped", "UPS")

        assert service is not None
        assert service.normalized_name != "PlayStation Plus"

    def test_phone_number_sender_is_ignored(self) -> None:
        """Test that phone numbers are not used as service names."""
        assert extract_service_name("Your receipt is ready", "+1 555 0100") is None

    @pytest.mark.parametrize(
        ("text", "expected", "confidence"),
        [
            ("Welcome to Acme Streaming!", "Acme Streaming", 0.85),
            ("Thank you for subscribing to Acme Plus.", "Acme Plus", 0.9),
            ("Your Zorblax plan renews soon", "Zorblax", 0.85),
        ],
    )
    def test_context_phrases(self, text: str, expected: str, confidence: float) -> None:
        """Test names found through contextual phrases."""
        service = extract_service_name(text)

        assert service is not None
        assert service.normalized_name == expected
        assert service.confidence == confidence

    def test_capitalized_word(self) -> None:
        """Test the capitalized word heuristic skips common openers."""
        service = extract_service_name("Please note Zorblax renewed")

        assert service is not None
        assert service.normalized_name == "Zorblax"
        assert service.confidence == 0.7

    def test_sender_fallback(self) -> None:
        """Test the cleaned sender as a last resort."""
        service = extract_service_name("thanks", "billing-zorblax@localhost")

        assert service is not None
        assert service.normalized_name == "Zorblax"
        assert service.confidence == 0.6

    def test_first_strategy_wins(self) -> None:
        """Test that the cascade stops at the first strategy with a candidate."""
        service = extract_service_name("Welcome to Acme Streaming", "updates@netflix.com")

        assert service is not None
        assert service.normalized_name == "Netflix"
        assert service.confidence == 0.9

    def test_custom_strategies(self) -> None:
        """Test running a custom strategy chain."""
        service = extract_service_name(
            "Welcome to Acme Streaming",
            "updates@netflix.com",
            strategies=[CapitalizedWordStrategy()],
        )

        assert service is not None
        assert service.normalized_name == "Welcome"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text: str | None) -> None:
        """Test that empty text yields no service."""
        assert extract_service_name(text, "updates@netflix.com") is None


class TestStrategies:
    """Test suite for individual service strategies."""

    def test_text_alias_strategy_no_match(self) -> None:
        """Test the alias strategy falls through without an alias."""
        assert TextAliasStrategy().attempt("Your receipt is ready", None) is None

    def test_email_strategy_ignores_plain_senders(self) -> None:
        """Test the email strategy only handles email senders."""
        assert EmailSenderStrategy().attempt("hello", "NETFLIX") is None

    def test_plain_strategy_ignores_email_senders(self) -> None:
        """Test the plain sender strategy skips email addresses."""
        assert PlainSenderStrategy().attempt("hello", "a@netflix.com") is None

    def test_plain_strategy_strips_sms_prefix(self) -> None:
        """Test SMS gateway prefixes are removed from sender names."""
        service = PlainSenderStrategy().attempt("hello", "SMS-Zorblax")

        assert service is not None
        assert service.normalized_name == "Zorblax"

    def test_context_strategy_skips_noise_only_capture(self) -> None:
        """Test that a capture made only of filler words is ignored."""
        assert ContextPhraseStrategy().attempt("Your subscription was renewed", None) is None

    def test_sender_fallback_rejects_numbers(self) -> None:
        """Test numeric senders are never used."""
        assert SenderFallbackStrategy().attempt("hello", "12345") is None
