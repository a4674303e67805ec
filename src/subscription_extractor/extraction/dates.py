"""Calendar date extraction.

Three tiers are tried in order: absolute date formats, relative phrases
("tomorrow", "in 3 days", "next friday") and context-anchored phrases such as
"renews on ...". Absolute dates must fall within five years of ``today``;
a candidate outside that window (or not a real calendar date) makes its pattern
count as non-matching and the next pattern is tried.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Callable
from dataclasses import dataclass

import structlog
from dateutil.relativedelta import relativedelta

from subscription_extractor.extraction.lexicon import MONTHS, WEEKDAYS
from subscription_extractor.models import ExtractedDate

logger = structlog.get_logger()

WINDOW = relativedelta(years=5)

_MONTH = (
    r"\b(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_ORDINAL = r"(?:st|nd|rd|th)?"
_WEEKDAY = r"(monday|tuesday|wednesday|thursday|friday|saturday|sunday)"

# Builds a date from a match; returns None for calendar-invalid values.
DateBuilder = Callable[[re.Match[str], dt.date], "dt.date | None"]


def _safe_date(year: int, month: int, day: int) -> dt.date | None:
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def _two_digit_year(raw: str) -> int:
    value = int(raw)
    return 2000 + value if value < 50 else 1900 + value


def _month_index(raw: str) -> int:
    return MONTHS[raw[:3].lower()]


def in_window(candidate: dt.date, today: dt.date) -> bool:
    """Whether a date lies within five years either side of ``today``."""
    return today - WINDOW <= candidate <= today + WINDOW


@dataclass(frozen=True)
class DatePattern:
    """An absolute date format."""

    name: str
    pattern: re.Pattern[str]
    confidence: float
    build: DateBuilder


ABSOLUTE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern(
        "mm_dd_yyyy",
        re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)"),
        0.9,
        lambda m, _: _safe_date(int(m.group(3)), int(m.group(1)), int(m.group(2))),
    ),
    DatePattern(
        "mm_dd_yy",
        re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{2})(?!\d)"),
        0.85,
        lambda m, _: _safe_date(_two_digit_year(m.group(3)), int(m.group(1)), int(m.group(2))),
    ),
    DatePattern(
        "dd_mm_yyyy",
        re.compile(r"(?<!\d)(\d{1,2})[.-](\d{1,2})[.-](\d{4})(?!\d)"),
        0.85,
        lambda m, _: _safe_date(int(m.group(3)), int(m.group(2)), int(m.group(1))),
    ),
    DatePattern(
        "dd_mm_yy",
        re.compile(r"(?<!\d)(\d{1,2})[.-](\d{1,2})[.-](\d{2})(?!\d)"),
        0.8,
        lambda m, _: _safe_date(_two_digit_year(m.group(3)), int(m.group(2)), int(m.group(1))),
    ),
    DatePattern(
        "mon_dd_comma_yyyy",
        re.compile(rf"{_MONTH}\s+(\d{{1,2}}){_ORDINAL},\s*(\d{{4}})(?!\d)", re.IGNORECASE),
        0.9,
        lambda m, _: _safe_date(int(m.group(3)), _month_index(m.group(1)), int(m.group(2))),
    ),
    DatePattern(
        "yyyy_mm_dd",
        re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)"),
        0.95,
        lambda m, _: _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3))),
    ),
    DatePattern(
        "dd_month_yyyy",
        re.compile(rf"(?<!\d)(\d{{1,2}}){_ORDINAL}\s+{_MONTH}\s+(\d{{4}})(?!\d)", re.IGNORECASE),
        0.9,
        lambda m, _: _safe_date(int(m.group(3)), _month_index(m.group(2)), int(m.group(1))),
    ),
    DatePattern(
        "month_dd_yyyy",
        re.compile(rf"{_MONTH}\s+(\d{{1,2}}){_ORDINAL}\s+(\d{{4}})(?!\d)", re.IGNORECASE),
        0.9,
        lambda m, _: _safe_date(int(m.group(3)), _month_index(m.group(1)), int(m.group(2))),
    ),
    DatePattern(
        "month_dd",
        re.compile(rf"{_MONTH}\s+(\d{{1,2}}){_ORDINAL}(?!\d)", re.IGNORECASE),
        0.75,
        lambda m, today: _safe_date(today.year, _month_index(m.group(1)), int(m.group(2))),
    ),
)


def _next_weekday(today: dt.date, weekday: int, *, skip_today: bool) -> dt.date:
    days = (weekday - today.weekday()) % 7
    if days == 0 and skip_today:
        days = 7
    return today + dt.timedelta(days=days)


def _capped(limit: int, delta: Callable[[int], relativedelta | dt.timedelta]) -> DateBuilder:
    def build(match: re.Match[str], today: dt.date) -> dt.date | None:
        count = int(match.group(1))
        if count > limit:
            return None
        return today + delta(count)

    return build


RELATIVE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern(
        "tomorrow",
        re.compile(r"\btomorrow\b", re.IGNORECASE),
        0.9,
        lambda _, today: today + dt.timedelta(days=1),
    ),
    DatePattern(
        "next_week",
        re.compile(r"\bnext\s+week\b", re.IGNORECASE),
        0.85,
        lambda _, today: today + dt.timedelta(days=7),
    ),
    DatePattern(
        "next_month",
        re.compile(r"\bnext\s+month\b", re.IGNORECASE),
        0.85,
        lambda _, today: today + relativedelta(months=1),
    ),
    DatePattern(
        "next_year",
        re.compile(r"\bnext\s+year\b", re.IGNORECASE),
        0.85,
        lambda _, today: today + relativedelta(years=1),
    ),
    DatePattern(
        "next_weekday",
        re.compile(rf"\bnext\s+{_WEEKDAY}\b", re.IGNORECASE),
        0.85,
        lambda m, today: _next_weekday(today, WEEKDAYS[m.group(1).lower()], skip_today=True),
    ),
    DatePattern(
        "in_days",
        re.compile(r"\bin\s+(\d{1,6})\s+days?\b", re.IGNORECASE),
        0.9,
        _capped(365, lambda n: dt.timedelta(days=n)),
    ),
    DatePattern(
        "in_weeks",
        re.compile(r"\bin\s+(\d{1,6})\s+weeks?\b", re.IGNORECASE),
        0.85,
        _capped(52, lambda n: dt.timedelta(weeks=n)),
    ),
    DatePattern(
        "in_months",
        re.compile(r"\bin\s+(\d{1,6})\s+months?\b", re.IGNORECASE),
        0.85,
        _capped(24, lambda n: relativedelta(months=n)),
    ),
    DatePattern(
        "days_from_now",
        re.compile(r"\b(\d{1,6})\s+days?\s+from\s+(?:now|today)\b", re.IGNORECASE),
        0.85,
        _capped(365, lambda n: dt.timedelta(days=n)),
    ),
    DatePattern(
        "on_weekday",
        re.compile(rf"\bon\s+{_WEEKDAY}\b", re.IGNORECASE),
        0.8,
        lambda m, today: _next_weekday(today, WEEKDAYS[m.group(1).lower()], skip_today=False),
    ),
)

_CAPTURE = r"(\w+\s+\d{1,2}(?:st|nd|rd|th)?(?:,?\s+\d{4})?|\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4})"

CONTEXT_PATTERNS: tuple[tuple[re.Pattern[str], float], ...] = (
    (
        re.compile(
            rf"\b(?:ends|renews|expires|starts|begins|processes|scheduled)(?:\s+(?:on|for))?\s+{_CAPTURE}",
            re.IGNORECASE,
        ),
        0.85,
    ),
    (re.compile(rf"\bon\s+{_CAPTURE}", re.IGNORECASE), 0.8),
    (re.compile(rf"{_CAPTURE}(?:\s+is|,\s+your|\s+we)", re.IGNORECASE), 0.75),
)

_LOOSE_MONTH_RE = re.compile(r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*", re.IGNORECASE)
_LOOSE_DAY_RE = re.compile(r"\d{1,2}")
_LOOSE_YEAR_RE = re.compile(r"\d{4}")
_LOOSE_CONFIDENCE = 0.7


def _match_absolute(text: str, today: dt.date) -> tuple[DatePattern, re.Match[str], dt.date] | None:
    for entry in ABSOLUTE_PATTERNS:
        match = entry.pattern.search(text)
        if not match:
            continue
        candidate = entry.build(match, today)
        if candidate is not None and in_window(candidate, today):
            return entry, match, candidate
    return None


def _loose_month_day(fragment: str, today: dt.date) -> dt.date | None:
    month = _LOOSE_MONTH_RE.search(fragment)
    day = _LOOSE_DAY_RE.search(fragment)
    if not month or not day:
        return None

    year = _LOOSE_YEAR_RE.search(fragment)
    candidate = _safe_date(
        int(year.group(0)) if year else today.year,
        _month_index(month.group(1)),
        int(day.group(0)),
    )
    if candidate is None or not in_window(candidate, today):
        return None
    return candidate


def extract_date(text: str | None, today: dt.date | None = None) -> ExtractedDate | None:
    """Extract a calendar date from a message.

    Args:
        text: Message text.
        today: Anchor for relative phrases and the five-year window.
            Defaults to the current local date.

    Returns:
        The first date found by the ordered tiers, or None.
    """
    if not text:
        return None
    today = today or dt.date.today()

    found = _match_absolute(text, today)
    if found:
        entry, match, candidate = found
        logger.debug("date_extracted", pattern=entry.name, date=candidate.isoformat())
        return ExtractedDate(
            date=candidate, original_text=match.group(0), is_relative=False, confidence=entry.confidence
        )

    for entry in RELATIVE_PATTERNS:
        match = entry.pattern.search(text)
        if not match:
            continue
        candidate = entry.build(match, today)
        if candidate is None:
            continue
        logger.debug("date_extracted", pattern=entry.name, date=candidate.isoformat())
        return ExtractedDate(
            date=candidate, original_text=match.group(0), is_relative=True, confidence=entry.confidence
        )

    for pattern, confidence in CONTEXT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        fragment = match.group(1)
        found = _match_absolute(fragment, today)
        candidate = found[2] if found else None
        if candidate is not None:
            return ExtractedDate(
                date=candidate, original_text=match.group(0), is_relative=False, confidence=confidence
            )

        candidate = _loose_month_day(fragment, today)
        if candidate is not None:
            return ExtractedDate(
                date=candidate,
                original_text=match.group(0),
                is_relative=False,
                confidence=_LOOSE_CONFIDENCE,
            )

    return None
