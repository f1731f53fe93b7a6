"""Pure text parsers for OS introspection output.

Each parser takes the raw stdout of its source command and returns a
normalised reading, raising :class:`ProbeParseError` when the text does not
have the expected shape.
"""

from __future__ import annotations

import re

from src.probes.exceptions import ProbeParseError

_IDLE_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*%?\s*id")


def parse_top_cpu(text: str) -> float:
    """Busy CPU percentage from a ``top -bn1`` ``Cpu(s)`` summary line.

    Example input::

        %Cpu(s):  3.1 us,  1.0 sy,  0.0 ni, 95.4 id,  0.3 wa,  0.0 hi,  0.2 si,  0.0 st
    """
    match = _IDLE_RE.search(text)
    if match is None:
        raise ProbeParseError(f"no idle field in cpu summary: {text.strip()[:80]!r}")
    # Some locales print a decimal comma.
    idle = float(match.group(1).replace(",", "."))
    return round(100 - idle, 2)


def parse_df_used(text: str) -> str:
    """Used space (human readable, e.g. ``2.0G``) from ``df -hP /`` output."""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        raise ProbeParseError("df output has no filesystem row")
    parts = lines[1].split()
    if len(parts) < 3:
        raise ProbeParseError(f"unexpected df row: {lines[1]!r}")
    return parts[2]


def parse_free_ram(text: str) -> int:
    """Used RAM percentage from ``free -m`` output."""
    for line in text.splitlines():
        if not line.strip().lower().startswith("mem"):
            continue
        parts = line.split()
        try:
            total = float(parts[1])
            used = float(parts[2])
        except (IndexError, ValueError) as exc:
            raise ProbeParseError(f"unexpected free row: {line!r}") from exc
        if total <= 0:
            raise ProbeParseError("free reports zero total memory")
        return round(used / total * 100)
    raise ProbeParseError("no Mem row in free output")


def parse_net_dev(text: str) -> str:
    """Total received + transmitted megabytes across interfaces in /proc/net/dev.

    Counters are cumulative since the interfaces came up, so the value grows
    monotonically over the process lifetime rather than describing the
    current interval.
    """
    lines = text.splitlines()
    if len(lines) < 2:
        raise ProbeParseError("net/dev output is missing its header")

    total = 0
    for line in lines[2:]:
        iface, sep, counters = line.partition(":")
        if not sep or not iface.strip():
            continue
        fields = counters.split()
        if len(fields) < 9:
            continue
        try:
            total += int(fields[0]) + int(fields[8])
        except ValueError as exc:
            raise ProbeParseError(f"bad counters for {iface.strip()!r}") from exc
    return f"{total / 1024 / 1024:.1f}MB"
