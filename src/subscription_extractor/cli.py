"""Command-line interface for Subscription Message Extractor.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

import structlog
from pydantic import ValidationError

from subscription_extractor import __version__
from subscription_extractor.config import Settings, get_settings
from subscription_extractor.exceptions import InvalidMessageError, SubscriptionExtractorError
from subscription_extractor.extraction import extract_subscription_data
from subscription_extractor.models import SmsMessage
from subscription_extractor.patterns import (
    PatternRegistry,
    analyze_subscription_text,
    load_pattern_rules,
)
from subscription_extractor.scanner import SubscriptionScanner

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subscription-extractor",
        description="Subscription Message Extractor",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Classify one message and print the match result as JSON",
    )
    analyze_parser.add_argument("text", help="Message text")
    analyze_parser.add_argument("--sender", default="", help="Sender identifier")
    analyze_parser.add_argument(
        "--patterns",
        type=Path,
        default=None,
        help="Extra JSON pattern rules file (default: settings patterns_path)",
    )
    analyze_parser.add_argument(
        "--today",
        type=dt.date.fromisoformat,
        default=None,
        help="Anchor date for relative dates, YYYY-MM-DD (default: today)",
    )

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract amount, service, date and billing cycle from one message",
    )
    extract_parser.add_argument("text", help="Message text")
    extract_parser.add_argument("--sender", default="", help="Sender identifier")
    extract_parser.add_argument(
        "--today",
        type=dt.date.fromisoformat,
        default=None,
        help="Anchor date for relative dates, YYYY-MM-DD (default: today)",
    )

    scan_parser = subparsers.add_parser(
        "scan",
        help="Classify a JSON Lines file of messages ({\"text\": ..., \"sender\": ...} per line)",
    )
    scan_parser.add_argument("input", help="JSON Lines file, or - for stdin")
    scan_parser.add_argument(
        "--patterns",
        type=Path,
        default=None,
        help="Extra JSON pattern rules file (default: settings patterns_path)",
    )
    scan_parser.add_argument(
        "--min-confidence",
        type=int,
        default=None,
        help="Minimum confidence (0-100) to accept a message (default: settings accept_confidence)",
    )
    scan_parser.add_argument(
        "--accepted-only",
        action="store_true",
        help="Only print accepted messages",
    )
    scan_parser.add_argument(
        "--today",
        type=dt.date.fromisoformat,
        default=None,
        help="Anchor date for relative dates, YYYY-MM-DD (default: today)",
    )

    return parser


def build_registry(settings: Settings, patterns_path: Path | None = None) -> PatternRegistry:
    """Create the built-in registry, extended by a rules file when one is configured."""
    registry = PatternRegistry.with_builtin_patterns()
    path = patterns_path or settings.patterns_path
    if path is not None:
        load_pattern_rules(path, registry)
    return registry


def read_messages(lines: Iterable[str]) -> Iterator[SmsMessage]:
    """Parse JSON Lines input into messages, skipping blank lines.

    Raises:
        InvalidMessageError: If a line is not a valid message object.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield SmsMessage.model_validate_json(line)
        except ValidationError as exc:
            raise InvalidMessageError(f"Invalid message on line {line_number}: {exc}") from exc


def _open_input(name: str) -> TextIO:
    if name == "-":
        return sys.stdin
    try:
        return open(name, encoding="utf-8")
    except OSError as exc:
        raise InvalidMessageError(f"Could not open input file {name}: {exc}") from exc


def _cmd_analyze(args: argparse.Namespace) -> int:
    settings = get_settings()
    registry = build_registry(settings, args.patterns)

    result = analyze_subscription_text(
        args.text,
        args.sender,
        registry,
        today=args.today,
        accept_threshold=settings.fallback_accept_threshold,
    )
    print(result.model_dump_json(indent=2))
    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    result = extract_subscription_data(args.text, args.sender, today=args.today)
    print(result.model_dump_json(indent=2))
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.min_confidence is not None:
        settings = settings.model_copy(update={"accept_confidence": args.min_confidence})

    registry = build_registry(settings, args.patterns)

    stream = _open_input(args.input)
    try:
        messages = list(read_messages(stream))
    finally:
        if stream is not sys.stdin:
            stream.close()

    scanner = SubscriptionScanner(registry, settings)
    for scanned in scanner.scan(messages, today=args.today):
        if args.accepted_only and not scanned.accepted:
            continue
        record = {
            "message_id": scanned.message.message_id,
            "sender": scanned.message.sender,
            "accepted": scanned.accepted,
            "result": scanned.result.model_dump(mode="json"),
        }
        print(json.dumps(record))

    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Subscription Message Extractor CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Logs go to stderr so stdout stays machine-readable JSON.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    logger.info("subscription_extractor_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    try:
        if parsed.command == "analyze":
            return _cmd_analyze(parsed)
        if parsed.command == "extract":
            return _cmd_extract(parsed)
        if parsed.command == "scan":
            return _cmd_scan(parsed)
    except SubscriptionExtractorError as exc:
        logger.error("command_failed", command=parsed.command, error=str(exc))
        return 1

    logger.error("unknown_command", command=parsed.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
