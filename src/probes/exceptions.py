"""Exception hierarchy for resource probes."""

from __future__ import annotations


class ProbeError(Exception):
    """Base exception for all probe errors."""


class ProbeTimeoutError(ProbeError):
    """The underlying OS query did not finish within the probe timeout."""


class ProbeCommandError(ProbeError):
    """The underlying OS query exited with a non-zero status."""


class ProbeParseError(ProbeError):
    """The OS query output could not be parsed into a reading."""
