"""Utility functions for Subscription Message Extractor."""

import re
from functools import lru_cache

_SPLIT_WORDS_RE = re.compile(r"[\s_\-]+")


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


@lru_cache(maxsize=1024)
def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Compile a case-insensitive matcher for a literal phrase.

    Word boundaries are only asserted on ends of the phrase that are word
    characters, so ``"/month"`` still matches ``"9.99/month"`` and
    ``"disney+"`` matches ``"Disney+ subscription"``.

    Args:
        phrase: Literal phrase to match.

    Returns:
        Compiled pattern.
    """
    body = re.escape(phrase)
    if phrase and _is_word_char(phrase[0]):
        body = r"\b" + body
    if phrase and _is_word_char(phrase[-1]):
        body = body + r"\b"
    return re.compile(body, re.IGNORECASE)


def title_case(value: str) -> str:
    """Capitalize the first letter of each part, joining parts with spaces.

    Parts are split on whitespace, underscores and hyphens; the rest of each
    part keeps its case.
    """
    parts = [part for part in _SPLIT_WORDS_RE.split(value) if part]
    return " ".join(part[:1].upper() + part[1:] for part in parts)
