"""External command execution."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import Protocol, Sequence

from tfmhook.utils.logging import get_logger

log = get_logger(__name__)

_DEFAULT_TIMEOUT = 300.0
_MAX_OUTPUT = 4000


@dataclass(frozen=True)
class CommandResult:
    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class Runner(Protocol):
    async def run(
        self, args: Sequence[str], cwd: str | None = None
    ) -> CommandResult: ...


def _truncate(text: str) -> str:
    if len(text) > _MAX_OUTPUT:
        return text[:_MAX_OUTPUT] + f"\n... (truncated, {len(text)} total chars)"
    return text


class CommandRunner:
    """Runs a command as a subprocess and captures its exit status and output.

    Commands are exec'd directly from an argument list, never through a
    shell, so branch and service names from configuration are not
    interpolated. A command that outlives *timeout* seconds is killed and
    reported with ``timed_out=True``.
    """

    def __init__(self, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    async def run(self, args: Sequence[str], cwd: str | None = None) -> CommandResult:
        log.debug("command_exec", args=list(args), cwd=cwd, timeout=self._timeout)

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
            return CommandResult(exit_code=None, stderr=str(e))

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            log.warning("command_timeout", args=list(args), timeout=self._timeout)
            return CommandResult(
                exit_code=None,
                stderr=f"Command timed out after {self._timeout}s",
                timed_out=True,
            )

        return CommandResult(
            exit_code=proc.returncode,
            stdout=_truncate(stdout.decode("utf-8", errors="replace").strip()),
            stderr=_truncate(stderr.decode("utf-8", errors="replace").strip()),
        )
