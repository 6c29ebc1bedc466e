"""Thin async wrapper around the ``kubectl`` binary.

Every call spawns one process scoped to the configured namespace. Arguments
are passed as an argv list, never through a shell.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass
from typing import AsyncIterator, Sequence

from ..util.log import Log

log = Log.create({"service": "kube.kubectl"})

# Seconds a follow process gets to exit after SIGTERM before it is killed.
TERMINATE_GRACE = 3.0


class KubectlError(Exception):
    """A kubectl invocation could not be started or exited non-zero."""

    def __init__(self, argv: Sequence[str], message: str, returncode: int | None = None):
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(message)


@dataclass(frozen=True)
class CommandResult:
    args: list[str]
    returncode: int
    stdout: str
    stderr: str


class Kubectl:
    """Runs kubectl commands against one namespace."""

    def __init__(self, binary: str = "kubectl", namespace: str = "default") -> None:
        self.binary = binary
        self.namespace = namespace

    def argv(self, *args: str) -> list[str]:
        return [self.binary, "-n", self.namespace, *args]

    async def _spawn(self, argv: list[str], *, stderr: int) -> asyncio.subprocess.Process:
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=stderr,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise KubectlError(argv, f"cannot execute {self.binary}: {e}") from e

    async def run(self, *args: str, merge_stderr: bool = False) -> CommandResult:
        """Run to completion; raise :class:`KubectlError` on a non-zero exit.

        With ``merge_stderr`` the child's stderr is written into the stdout
        pipe, so ``stdout`` holds both streams in arrival order.
        """
        argv = self.argv(*args)
        log.debug("kubectl run", {"argv": argv, "merge_stderr": merge_stderr or None})
        proc = await self._spawn(argv, stderr=asyncio.subprocess.STDOUT if merge_stderr else asyncio.subprocess.PIPE)
        stdout, stderr = await proc.communicate()
        result = CommandResult(
            args=argv,
            returncode=int(proc.returncode or 0),
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=(stderr or b"").decode("utf-8", errors="replace"),
        )
        if result.returncode != 0:
            message = (result.stderr or result.stdout).strip() or f"{' '.join(argv)} exited with code {result.returncode}"
            log.warn("kubectl failed", {"argv": argv, "returncode": result.returncode, "error": message})
            raise KubectlError(argv, message, result.returncode)
        return result

    @asynccontextmanager
    async def follow(self, *args: str) -> AsyncIterator[asyncio.subprocess.Process]:
        """Spawn a long-running command with stderr merged into stdout.

        The process is terminated when the context exits, whichever way it
        exits.
        """
        argv = self.argv(*args)
        log.debug("kubectl follow", {"argv": argv})
        proc = await self._spawn(argv, stderr=asyncio.subprocess.STDOUT)
        try:
            yield proc
        finally:
            # Reaping must finish even when the caller is being cancelled.
            await asyncio.shield(terminate(proc))


async def terminate(proc: asyncio.subprocess.Process, grace: float = TERMINATE_GRACE) -> None:
    """SIGTERM, wait up to ``grace`` seconds, then SIGKILL; always reaps."""
    if proc.returncode is not None:
        return
    with suppress(ProcessLookupError):
        proc.terminate()
    try:
        await asyncio.wait_for(proc.wait(), timeout=grace)
    except asyncio.TimeoutError:
        log.warn("process ignored SIGTERM, killing", {"pid": proc.pid})
        with suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
