"""Errors raised while reading sources and aggregating staked asset views."""

from __future__ import annotations


class AggregationError(Exception):
    """Base class for all aggregation failures."""


class SourceUnavailable(AggregationError):
    """An external read could not complete (or returned an unusable value)."""

    def __init__(self, source: str, field: str, reason: str | None = None) -> None:
        self.source = source
        self.field = field
        self.reason = reason
        message = f"Read of {field!r} from {source!r} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidConfiguration(AggregationError):
    """Unknown staked asset, unsupported asset kind or missing feed mapping."""


class ArithmeticOverflow(AggregationError):
    """A derived value left the uint256 domain. Always a defect, never retried."""
