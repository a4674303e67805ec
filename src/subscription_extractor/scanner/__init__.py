"""Batch scanning of message backlogs."""

from .batch import ScanResult, SubscriptionScanner

__all__ = ["ScanResult", "SubscriptionScanner"]
