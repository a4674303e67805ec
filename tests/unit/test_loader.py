"""Unit tests for the JSON pattern rules loader."""

import json
from pathlib import Path

import pytest

from subscription_extractor.exceptions import ConfigurationError, RegistryFrozenError
from subscription_extractor.models import PatternType
from subscription_extractor.patterns import PatternRegistry, load_pattern_rules, read_pattern_rules


def _write_rules(path: Path, patterns: list[dict]) -> Path:
    path.write_text(json.dumps({"patterns": patterns}), encoding="utf-8")
    return path


class TestReadPatternRules:
    """Test suite for read_pattern_rules."""

    def test_valid_file(self, tmp_path: Path) -> None:
        """Test reading a valid rules file."""
        path = _write_rules(
            tmp_path / "rules.json",
            [
                {
                    "pattern": r"thank\s+you\s+for\s+using\s+acme",
                    "type": "subscription_confirmation",
                    "score": 95,
                    "hints": {"service_name": True},
                },
                {"pattern": "acme invoice", "type": "payment_confirmation", "score": 70},
            ],
        )

        rules = read_pattern_rules(path)

        assert len(rules) == 2
        assert rules[0].type == PatternType.SUBSCRIPTION_CONFIRMATION
        assert rules[0].hints.service_name is True
        assert rules[1].hints.amount is False

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            read_pattern_rules(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that malformed JSON is a configuration error."""
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            read_pattern_rules(path)

    @pytest.mark.parametrize(
        "rule",
        [
            {"pattern": "acme(", "type": "payment_confirmation", "score": 80},
            {"pattern": "acme", "type": "payment_confirmation", "score": 150},
            {"pattern": "acme", "type": "refund", "score": 80},
            {"pattern": "", "type": "payment_confirmation", "score": 80},
        ],
    )
    def test_invalid_rule(self, tmp_path: Path, rule: dict) -> None:
        """Test that invalid rules are rejected."""
        path = _write_rules(tmp_path / "rules.json", [rule])

        with pytest.raises(ConfigurationError, match="Invalid pattern rules file"):
            read_pattern_rules(path)


class TestLoadPatternRules:
    """Test suite for load_pattern_rules."""

    def test_registers_in_file_order(self, tmp_path: Path) -> None:
        """Test that rules are appended to the registry in file order."""
        path = _write_rules(
            tmp_path / "rules.json",
            [
                {"pattern": "acme", "type": "cancellation", "score": 80},
                {"pattern": "acme plan", "type": "price_change", "score": 80},
            ],
        )
        registry = PatternRegistry()

        entries = load_pattern_rules(path, registry)

        assert registry.entries() == tuple(entries)
        best = registry.best_match("Your ACME plan")
        assert best is not None
        assert best.pattern_type == PatternType.CANCELLATION

    def test_frozen_registry(self, tmp_path: Path) -> None:
        """Test that a frozen registry cannot be extended from a file."""
        path = _write_rules(
            tmp_path / "rules.json",
            [{"pattern": "acme", "type": "cancellation", "score": 80}],
        )
        snapshot = PatternRegistry().snapshot()

        with pytest.raises(RegistryFrozenError):
            load_pattern_rules(path, snapshot)
