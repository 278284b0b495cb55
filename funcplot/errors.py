from __future__ import annotations


class ChartError(Exception):
    """Base class for errors raised by funcplot."""


class SampleDataError(ChartError, ValueError):
    """Sample input has the wrong shape or contains non-numeric entries."""


class ChartConfigError(ChartError, ValueError):
    """Chart configuration is malformed or out of range."""
