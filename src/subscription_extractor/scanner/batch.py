"""Batch scanning of message backlogs.

Messages are classified independently, so a batch is spread over a thread
pool. Every worker reads the same frozen registry snapshot taken when the scan
starts; patterns registered afterwards only affect later scans.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from subscription_extractor.config import Settings
from subscription_extractor.models import PatternMatchResult, SmsMessage
from subscription_extractor.patterns import PatternRegistry, analyze_subscription_text

logger = structlog.get_logger()


@dataclass(frozen=True)
class ScanResult:
    """Classification of one scanned message."""

    message: SmsMessage
    result: PatternMatchResult
    accepted: bool


class SubscriptionScanner:
    """Classifies batches of messages against a pattern registry."""

    def __init__(
        self,
        registry: PatternRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            registry: Patterns to classify against. If None, uses the built-in patterns.
            settings: Application settings. If None, uses default settings.
        """
        from subscription_extractor.config import get_settings

        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else PatternRegistry.with_builtin_patterns()
        logger.info(
            "subscription_scanner_initialized",
            patterns=len(self.registry),
            max_workers=self.settings.scan_max_workers,
        )

    def _classify(
        self, registry: PatternRegistry, message: SmsMessage, today: dt.date
    ) -> ScanResult:
        result = analyze_subscription_text(
            message.text,
            message.sender,
            registry,
            today=today,
            accept_threshold=self.settings.fallback_accept_threshold,
        )
        accepted = result.matched and result.confidence >= self.settings.accept_confidence
        return ScanResult(message=message, result=result, accepted=accepted)

    def scan(
        self, messages: Sequence[SmsMessage], *, today: dt.date | None = None
    ) -> list[ScanResult]:
        """Classify a batch of messages.

        Args:
            messages: Messages to classify.
            today: Anchor date for date extraction. Defaults to the current date.

        Returns:
            One result per message, in input order.
        """
        if not messages:
            return []

        today = today or dt.date.today()
        snapshot = self.registry.snapshot()
        workers = min(len(messages), self.settings.scan_max_workers)

        logger.info("scan_started", messages=len(messages), workers=workers)
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(
                executor.map(lambda message: self._classify(snapshot, message, today), messages)
            )

        logger.info(
            "scan_completed",
            messages=len(results),
            matched=sum(1 for r in results if r.result.matched),
            accepted=sum(1 for r in results if r.accepted),
        )
        return results

    async def scan_async(
        self, messages: Sequence[SmsMessage], *, today: dt.date | None = None
    ) -> list[ScanResult]:
        """Classify a batch of messages without blocking the event loop."""
        return await asyncio.to_thread(self.scan, messages, today=today)
