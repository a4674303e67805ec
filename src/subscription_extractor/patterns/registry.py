"""Pattern registry used to classify message intent.

The registry is an ordinary object: build one with
:meth:`PatternRegistry.with_builtin_patterns`, register extra patterns during
startup, and pass it (or a frozen :meth:`PatternRegistry.snapshot`) to the
classifier.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import structlog

from subscription_extractor.exceptions import RegistryFrozenError
from subscription_extractor.models import ExtractorHints, PatternType
from subscription_extractor.patterns.builtin import BUILTIN_PATTERNS

logger = structlog.get_logger()


@dataclass(frozen=True)
class PatternEntry:
    """A registered pattern with the event type and score it implies."""

    pattern: re.Pattern[str]
    pattern_type: PatternType
    score: int
    hints: ExtractorHints


class PatternRegistry:
    """Append-only, ordered table of :class:`PatternEntry` objects.

    Registration order matters: when two entries match with the same score the
    one registered first wins.
    """

    def __init__(self, entries: Iterable[PatternEntry] = (), *, frozen: bool = False) -> None:
        self._entries: list[PatternEntry] = list(entries)
        self._frozen = frozen
        self._lock = threading.Lock()

    @classmethod
    def with_builtin_patterns(cls) -> PatternRegistry:
        """Create a registry seeded with the built-in patterns."""
        registry = cls()
        for pattern, pattern_type, score, hints in BUILTIN_PATTERNS:
            registry.register(pattern, pattern_type, score, hints)
        return registry

    @property
    def frozen(self) -> bool:
        """Whether this registry rejects further registrations."""
        return self._frozen

    def register(
        self,
        pattern: str | re.Pattern[str],
        pattern_type: PatternType,
        score: int,
        hints: ExtractorHints | None = None,
    ) -> PatternEntry:
        """Append a pattern.

        No deduplication or validation of the score is performed. Scores are
        meant to be on the 0-100 scale; a winning entry scored above 100 is
        reported with confidence 100. String patterns are compiled
        case-insensitively.

        Args:
            pattern: Regular expression, as a string or compiled pattern.
            pattern_type: Event type implied by a match.
            score: Confidence on the 0-100 scale reported when this entry wins.
            hints: Which extracted fields messages of this kind usually carry.

        Returns:
            The registered entry.

        Raises:
            RegistryFrozenError: If the registry is a frozen snapshot.
            re.error: If a string pattern is not a valid regular expression.
        """
        if self._frozen:
            raise RegistryFrozenError("Cannot register patterns on a frozen registry")

        compiled = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
        entry = PatternEntry(
            pattern=compiled,
            pattern_type=PatternType(pattern_type),
            score=score,
            hints=hints or ExtractorHints(),
        )

        with self._lock:
            self._entries.append(entry)

        logger.debug(
            "pattern_registered",
            pattern=compiled.pattern,
            pattern_type=entry.pattern_type.value,
            score=score,
        )
        return entry

    def entries(self) -> tuple[PatternEntry, ...]:
        """Return the registered entries in registration order."""
        with self._lock:
            return tuple(self._entries)

    def snapshot(self) -> PatternRegistry:
        """Return a frozen copy safe to share between worker threads."""
        return PatternRegistry(self.entries(), frozen=True)

    def best_match(self, text: str) -> PatternEntry | None:
        """Return the highest-scoring entry whose pattern matches ``text``.

        Only a strictly greater score replaces the current best, so among
        equal scores the earliest registered entry wins.
        """
        best: PatternEntry | None = None
        best_score = 0
        for entry in self.entries():
            if entry.score > best_score and entry.pattern.search(text):
                best = entry
                best_score = entry.score
        return best

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[PatternEntry]:
        return iter(self.entries())
