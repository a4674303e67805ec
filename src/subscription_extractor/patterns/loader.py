"""Load extra classification patterns from a JSON rules file.

File format::

    {
      "patterns": [
        {
          "pattern": "thank\\\\s+you\\\\s+for\\\\s+using\\\\s+acme",
          "type": "subscription_confirmation",
          "score": 95,
          "hints": {"service_name": true}
        }
      ]
    }

Registered patterns are not persisted anywhere else, so the file has to be
loaded on every process start.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

from subscription_extractor.exceptions import ConfigurationError
from subscription_extractor.models import ExtractorHints, PatternType
from subscription_extractor.patterns.registry import PatternEntry, PatternRegistry

logger = structlog.get_logger()


class PatternRule(BaseModel):
    """One rule as written in a rules file."""

    pattern: str = Field(min_length=1, description="Regular expression, matched case-insensitively")
    type: PatternType = Field(description="Event type implied by a match")
    score: int = Field(ge=0, le=100, description="Confidence (0-100) reported when this rule wins")
    hints: ExtractorHints = Field(default_factory=ExtractorHints)

    @field_validator("pattern")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression: {exc}") from exc
        return value


class PatternRuleFile(BaseModel):
    """Top-level structure of a rules file."""

    patterns: list[PatternRule] = Field(default_factory=list)


def read_pattern_rules(path: Path) -> list[PatternRule]:
    """Parse and validate a rules file.

    Args:
        path: Path to the JSON rules file.

    Returns:
        Rules in file order.

    Raises:
        ConfigurationError: If the file is missing, is not JSON or fails validation.
    """
    if not path.exists():
        raise ConfigurationError(f"Pattern rules file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read pattern rules file {path}: {exc}") from exc

    try:
        return PatternRuleFile.model_validate(raw).patterns
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pattern rules file {path}: {exc}") from exc


def load_pattern_rules(path: Path, registry: PatternRegistry) -> list[PatternEntry]:
    """Register every rule of a rules file, in file order.

    Args:
        path: Path to the JSON rules file.
        registry: Registry to extend.

    Returns:
        The registered entries.

    Raises:
        ConfigurationError: If the file is invalid.
        RegistryFrozenError: If ``registry`` is a frozen snapshot.
    """
    rules = read_pattern_rules(path)
    entries = [
        registry.register(rule.pattern, rule.type, rule.score, rule.hints) for rule in rules
    ]
    logger.info("pattern_rules_loaded", path=str(path), count=len(entries))
    return entries
