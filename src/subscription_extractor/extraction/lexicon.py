"""Static lookup tables shared by the field extractors.

Pure data: currency symbols and names, service aliases, billing-cycle phrases,
and month/weekday names.
"""

from __future__ import annotations

from collections.abc import Iterable

from subscription_extractor.models import BillingCycle

CURRENCY_SYMBOLS: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
    "₩": "KRW",
    "R$": "BRL",
    "kr": "SEK",
    "C$": "CAD",
    "A$": "AUD",
    "CHF": "CHF",
    "NZ$": "NZD",
    "HK$": "HKD",
    "S$": "SGD",
    "₽": "RUB",
    "฿": "THB",
    "₺": "TRY",
    "ر.س": "SAR",
    "د.إ": "AED",
    "₴": "UAH",
    "zł": "PLN",
    "Kč": "CZK",
    "RM": "MYR",
    "₱": "PHP",
    "₦": "NGN",
}

# Symbol keys casefolded, for matches like "KR 99" or "rm 10".
CURRENCY_SYMBOLS_FOLDED: dict[str, str] = {
    symbol.casefold(): code for symbol, code in CURRENCY_SYMBOLS.items()
}

ISO_CODES: tuple[str, ...] = (
    "USD", "EUR", "GBP", "JPY", "INR", "KRW", "BRL", "SEK", "CAD", "AUD", "CHF", "NZD",
    "RUB", "THB", "TRY", "SAR", "AED", "UAH", "PLN", "CZK", "MYR", "PHP", "NGN",
)

CURRENCY_NAMES: dict[str, str] = {
    "dollars": "USD",
    "us dollars": "USD",
    "usd": "USD",
    "euros": "EUR",
    "eur": "EUR",
    "pounds": "GBP",
    "gbp": "GBP",
    "yen": "JPY",
    "rupees": "INR",
    "won": "KRW",
    "reais": "BRL",
    "kronor": "SEK",
    "canadian dollars": "CAD",
    "cad": "CAD",
    "australian dollars": "AUD",
    "aud": "AUD",
    "swiss francs": "CHF",
    "francs": "CHF",
    "new zealand dollars": "NZD",
    "nzd": "NZD",
    "rubles": "RUB",
    "rub": "RUB",
    "baht": "THB",
    "lira": "TRY",
    "try": "TRY",
    "riyal": "SAR",
    "dirhams": "AED",
    "hryvnia": "UAH",
    "zloty": "PLN",
    "koruna": "CZK",
    "ringgit": "MYR",
    "peso": "PHP",
    "naira": "NGN",
}

SERVICE_ALIASES: dict[str, str] = {
    "netflix": "Netflix",
    "nflx": "Netflix",
    "spotify": "Spotify",
    "spot": "Spotify",
    "amazon prime": "Amazon Prime",
    "prime video": "Amazon Prime",
    "amazon video": "Amazon Prime",
    "prime": "Amazon Prime",
    "disney+": "Disney+",
    "disney plus": "Disney+",
    "apple music": "Apple Music",
    "itunes": "Apple",
    "icloud": "iCloud",
    "icloud+": "iCloud",
    "apple one": "Apple One",
    "youtube premium": "YouTube Premium",
    "youtube music": "YouTube Music",
    "yt premium": "YouTube Premium",
    "yt music": "YouTube Music",
    "hbo max": "HBO Max",
    "hbo": "HBO",
    "hulu": "Hulu",
    "paramount+": "Paramount+",
    "paramount plus": "Paramount+",
    "xbox game pass": "Xbox Game Pass",
    "xbox live": "Xbox Live",
    "xbox": "Xbox",
    "playstation plus": "PlayStation Plus",
    "ps plus": "PlayStation Plus",
    "ps+": "PlayStation Plus",
    "ea play": "EA Play",
    "office365": "Microsoft 365",
    "office 365": "Microsoft 365",
    "microsoft 365": "Microsoft 365",
    "ms 365": "Microsoft 365",
    "google one": "Google One",
    "google play": "Google Play",
    "play pass": "Google Play Pass",
    "google fi": "Google Fi",
    "google storage": "Google One",
    "stadia": "Google Stadia",
    "crunchyroll": "Crunchyroll",
    "funimation": "Funimation",
    "twitch": "Twitch",
    "twitch prime": "Twitch Prime",
    "amazon music": "Amazon Music",
    "kindle unlimited": "Kindle Unlimited",
    "audible": "Audible",
    "audible plus": "Audible Plus",
    "nintendo switch online": "Nintendo Switch Online",
    "nintendo online": "Nintendo Switch Online",
    "gym membership": "Gym Membership",
    "planet fitness": "Planet Fitness",
    "adobe cc": "Adobe Creative Cloud",
    "adobe creative cloud": "Adobe Creative Cloud",
    "adobe": "Adobe",
    "photoshop": "Adobe Photoshop",
    "lightroom": "Adobe Lightroom",
    "dropbox": "Dropbox",
    "dropbox plus": "Dropbox Plus",
    "zoom": "Zoom",
    "zoom pro": "Zoom Pro",
    "slack": "Slack",
    "notion": "Notion",
    "notion plus": "Notion Plus",
    "notion pro": "Notion Pro",
    "evernote": "Evernote",
    "trello": "Trello",
    "lastpass": "LastPass",
    "1password": "1Password",
    "dashlane": "Dashlane",
    "vpn": "VPN Service",
    "nordvpn": "NordVPN",
    "expressvpn": "ExpressVPN",
    "surfshark": "Surfshark",
    "protonvpn": "ProtonVPN",
    "protonmail": "ProtonMail",
    "mailchimp": "Mailchimp",
    "squarespace": "Squarespace",
    "wix": "Wix",
    "shopify": "Shopify",
    "canva": "Canva",
    "canva pro": "Canva Pro",
}

BILLING_CYCLES: dict[str, BillingCycle] = {
    "monthly": BillingCycle.MONTHLY,
    "per month": BillingCycle.MONTHLY,
    "/month": BillingCycle.MONTHLY,
    "/mo": BillingCycle.MONTHLY,
    "each month": BillingCycle.MONTHLY,
    "a month": BillingCycle.MONTHLY,
    "every month": BillingCycle.MONTHLY,
    "monthly subscription": BillingCycle.MONTHLY,
    "mo": BillingCycle.MONTHLY,
    "yearly": BillingCycle.YEARLY,
    "annual": BillingCycle.YEARLY,
    "annually": BillingCycle.YEARLY,
    "per year": BillingCycle.YEARLY,
    "/year": BillingCycle.YEARLY,
    "/yr": BillingCycle.YEARLY,
    "each year": BillingCycle.YEARLY,
    "a year": BillingCycle.YEARLY,
    "every year": BillingCycle.YEARLY,
    "yr": BillingCycle.YEARLY,
    "weekly": BillingCycle.WEEKLY,
    "per week": BillingCycle.WEEKLY,
    "/week": BillingCycle.WEEKLY,
    "/wk": BillingCycle.WEEKLY,
    "each week": BillingCycle.WEEKLY,
    "a week": BillingCycle.WEEKLY,
    "every week": BillingCycle.WEEKLY,
    "wk": BillingCycle.WEEKLY,
    "quarterly": BillingCycle.QUARTERLY,
    "per quarter": BillingCycle.QUARTERLY,
    "/quarter": BillingCycle.QUARTERLY,
    "each quarter": BillingCycle.QUARTERLY,
    "a quarter": BillingCycle.QUARTERLY,
    "every quarter": BillingCycle.QUARTERLY,
    "every 3 months": BillingCycle.QUARTERLY,
    "3 months": BillingCycle.QUARTERLY,
    "3mo": BillingCycle.QUARTERLY,
    "3-month": BillingCycle.QUARTERLY,
    "biannual": BillingCycle.BIANNUAL,
    "semi-annual": BillingCycle.BIANNUAL,
    "semi annual": BillingCycle.BIANNUAL,
    "twice a year": BillingCycle.BIANNUAL,
    "every 6 months": BillingCycle.BIANNUAL,
    "6 months": BillingCycle.BIANNUAL,
    "6mo": BillingCycle.BIANNUAL,
    "6-month": BillingCycle.BIANNUAL,
    "daily": BillingCycle.DAILY,
    "per day": BillingCycle.DAILY,
    "/day": BillingCycle.DAILY,
    "each day": BillingCycle.DAILY,
    "a day": BillingCycle.DAILY,
    "every day": BillingCycle.DAILY,
}

MONTHS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Values follow date.weekday(): Monday is 0.
WEEKDAYS: dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def longest_first(keys: Iterable[str]) -> list[str]:
    """Return table keys ordered longest first, keeping table order among equals."""
    return sorted(keys, key=len, reverse=True)
