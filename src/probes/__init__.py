"""Resource probes — OS introspection behind a small sampling interface."""

from src.probes.base import CommandProbe, ResourceProbe
from src.probes.exceptions import (
    ProbeCommandError,
    ProbeError,
    ProbeParseError,
    ProbeTimeoutError,
)
from src.probes.system import CpuProbe, DiskProbe, NetworkProbe, RamProbe, default_probes

__all__ = [
    "CommandProbe",
    "CpuProbe",
    "DiskProbe",
    "NetworkProbe",
    "ProbeCommandError",
    "ProbeError",
    "ProbeParseError",
    "ProbeTimeoutError",
    "RamProbe",
    "ResourceProbe",
    "default_probes",
]
