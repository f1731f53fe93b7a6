"""Host probes for CPU, disk, RAM and network usage."""

from __future__ import annotations

from src.core.types import Resource
from src.probes.base import CommandProbe, ResourceProbe
from src.probes.parsers import parse_df_used, parse_free_ram, parse_net_dev, parse_top_cpu


class CpuProbe(CommandProbe):
    """Busy CPU percentage (100 - idle), two decimals."""

    name = Resource.CPU.value
    command = "top -bn1 | grep 'Cpu(s)'"

    def parse(self, output: str) -> float:
        return parse_top_cpu(output)


class DiskProbe(CommandProbe):
    """Used space on the root filesystem as a size string."""

    name = Resource.DISK.value
    # -P keeps each filesystem on one line even with long device names.
    command = "df -hP /"

    def parse(self, output: str) -> str:
        return parse_df_used(output)


class RamProbe(CommandProbe):
    """Used memory percentage, rounded to an integer."""

    name = Resource.RAM.value
    command = "free -m"

    def parse(self, output: str) -> int:
        return parse_free_ram(output)


class NetworkProbe(CommandProbe):
    """Cumulative rx+tx megabytes across all interfaces."""

    name = Resource.NETWORK.value
    command = "cat /proc/net/dev"

    def parse(self, output: str) -> str:
        return parse_net_dev(output)


def default_probes(timeout: float = 10.0) -> dict[str, ResourceProbe]:
    """Registry of the built-in probes keyed by resource name."""
    probes: list[ResourceProbe] = [
        CpuProbe(timeout),
        DiskProbe(timeout),
        RamProbe(timeout),
        NetworkProbe(timeout),
    ]
    return {p.name: p for p in probes}
