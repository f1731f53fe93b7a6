"""Abstract resource probe and the shell-command probe built on it."""

from __future__ import annotations

import abc
import asyncio
import os

import structlog

from src.core.types import ReadingValue
from src.probes.exceptions import ProbeCommandError, ProbeTimeoutError

logger = structlog.get_logger(__name__)


def _command_env() -> dict[str, str]:
    # C locale keeps decimal points and column headers stable for the parsers.
    return {**os.environ, "LC_ALL": "C"}


class ResourceProbe(abc.ABC):
    """Produces one normalised reading for a single resource.

    Implementations raise :class:`~src.probes.exceptions.ProbeError`
    subclasses on failure; the caller decides how to report them.
    """

    name: str = ""

    @abc.abstractmethod
    async def sample(self) -> ReadingValue:
        """Take a reading."""


class CommandProbe(ResourceProbe):
    """Runs a shell command and hands its stdout to :meth:`parse`.

    Subclasses set ``name`` and ``command`` and implement ``parse``.
    """

    command: str = ""

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    @abc.abstractmethod
    def parse(self, output: str) -> ReadingValue:
        """Turn raw command output into a reading."""

    async def sample(self) -> ReadingValue:
        output = await self.run_command()
        return self.parse(output)

    async def run_command(self) -> str:
        """Run ``command`` bounded by the probe timeout and return stdout."""
        proc = await asyncio.create_subprocess_shell(
            self.command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_command_env(),
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
            raise ProbeTimeoutError(
                f"{self.command!r} timed out after {self._timeout}s"
            ) from exc

        if proc.returncode != 0:
            err = stderr.decode(errors="replace").strip()
            logger.debug(
                "probe_command_failed",
                probe=self.name,
                returncode=proc.returncode,
                stderr=err[:200],
            )
            raise ProbeCommandError(
                f"{self.command!r} exited with {proc.returncode}: {err[:200]}"
            )
        return stdout.decode(errors="replace")
