"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest


@pytest.fixture
def mock_settings():
    """Provide mock settings for testing."""
    from subscription_extractor.config import Settings

    return Settings(
        log_level="DEBUG",
        debug=True,
        scan_max_workers=2,
    )


@pytest.fixture
def today() -> date:
    """Fixed anchor date for date extraction."""
    return date(2023, 5, 1)


@pytest.fixture
def registry():
    """Provide a fresh registry seeded with the built-in patterns."""
    from subscription_extractor.patterns import PatternRegistry

    return PatternRegistry.with_builtin_patterns()


@pytest.fixture
def sample_messages() -> dict[str, list[str]]:
    """Provide sample subscription messages grouped by event type."""
    return {
        "payment_confirmation": [
            "Your payment of $9.99 to Netflix has been processed. Thank you for your subscription.",
            "We've charged your card $14.99 for your monthly HBO Max subscription.",
            "Apple: Payment of $4.99 for Apple Music was successful.",
            "Payment of £7.99 to Spotify processed on 05/23/2023. See your receipt at spotify.com/account",
            "Disney+: Your payment of $7.99 was successful. Your subscription is active until 06/15/2023.",
        ],
        "subscription_confirmation": [
            "Welcome to your Netflix subscription! Start streaming today at netflix.com",
            "Your subscription to Audible has been activated. Enjoy your first audiobook!",
            "You're now subscribed to YouTube Premium. Enjoy ad-free videos and background play.",
            "Thanks for subscribing to Dropbox Plus. Your storage has been upgraded to 2TB.",
            "Confirmation: Your Amazon Prime membership has started. "
            "Enjoy free shipping and Prime Video!",
        ],
        "trial_ending": [
            "Your free trial of Adobe Creative Cloud will end on 05/30/2023. "
            "You will be charged $52.99/month unless you cancel.",
            "Reminder: Your trial of Microsoft Office 365 is ending soon. To continue, "
            "we'll charge $9.99/month to your payment method on file.",
            "LinkedIn: Your Premium trial ends in 3 days. After that, you'll be charged "
            "$29.99/month. Cancel anytime at linkedin.com/premium",
            "Your Hulu trial period ends tomorrow. To avoid charges of $7.99/month, "
            "cancel before 11:59 PM on 05/15/2023.",
            "Canva Pro trial ending: Your free trial ends on Monday. "
            "After that, we'll bill you $12.99 monthly.",
        ],
        "renewal_notice": [
            "Your subscription to Spotify will automatically renew on 06/15/2023 "
            "at the price of $9.99.",
            "Apple: Your iCloud subscription (50GB) will renew automatically on 05/28 for $0.99.",
            "Your annual subscription to Amazon Prime will renew on 07/12/2023. "
            "You will be charged $119.",
            "PlayStation Plus: Your membership will auto-renew on 06/03/2023. "
            "We'll charge $59.99 for 12 months of service.",
            "Xbox Game Pass subscription renewal: We'll automatically bill you $14.99 on 06/02/2023.",
        ],
        "price_change": [
            "Important: Netflix price update. Starting with your next billing period, "
            "your subscription price will change from $14.99 to $16.49.",
            "Spotify: We're updating the price of your Premium subscription from $9.99 to "
            "$10.99 per month starting on your next billing date, 06/15/2023.",
            "Price change for your YouTube Premium subscription: Effective 06/01, "
            "your monthly price will increase to $13.99.",
            "Adobe: Your Creative Cloud subscription price will be adjusted from $52.99 to "
            "$54.99 on your next billing date.",
            "Disney+ price update: Your subscription will change from $7.99 to $8.99 "
            "monthly on your next billing cycle.",
        ],
        "cancellation": [
            "Your subscription to HBO Max has been canceled. You'll have access until the end "
            "of your billing period on 05/31/2023.",
            "Cancellation confirmation: Netflix. We've processed your cancellation request. "
            "Your subscription will end on 06/14/2023.",
            "Hulu: We've received your request to cancel your subscription. "
            "You'll have access until 05/30/2023.",
            "Your Audible membership has been canceled as requested. "
            "Your benefits will continue through 06/07/2023.",
            "Cancellation confirmed: Your Amazon Prime membership will end on 07/15/2023. "
            "You won't be charged again.",
        ],
    }


@pytest.fixture
def non_subscription_messages() -> list[str]:
    """Provide messages that are not about subscriptions."""
    return [
        "Your pizza delivery is on the way!",
        "Meeting scheduled for tomorrow at 2pm",
        "Your verification code is 123456",
        "Thank you for your feedback",
    ]
