"""Runtime helpers for invoking external scanners."""

from __future__ import annotations

import asyncio
import logging
import shlex
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO

logger = logging.getLogger(__name__)

# Scanner output can contain very long JSON lines.
STREAM_LIMIT = 4 * 1024 * 1024
KILL_GRACE_SECONDS = 3.0


@dataclass
class CommandResult:
    """Captured subprocess result."""

    command: list[str]
    returncode: int | None
    elapsed: float
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and self.error is None


# Values following these flags are credentials and never reach the log.
SECRET_FLAGS = frozenset({"--client-id", "--client-secret"})
REDACTED = "****"


def redact_command(command: list[str]) -> list[str]:
    redacted = list(command)
    for i, part in enumerate(command[:-1]):
        if part in SECRET_FLAGS:
            redacted[i + 1] = REDACTED
    return redacted


def format_command(command: list[str]) -> str:
    return " ".join(shlex.quote(part) for part in redact_command(command))


async def _pump(
    stream: asyncio.StreamReader,
    sink: IO[str] | None,
    echo: Callable[[str], None] | None,
) -> None:
    while True:
        raw = await stream.readline()
        if not raw:
            break
        line = raw.decode(errors="replace")
        if sink is not None:
            sink.write(line)
            sink.flush()
        if echo is not None:
            echo(line.rstrip("\r\n"))


async def _stop(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(process.wait(), timeout=KILL_GRACE_SECONDS)
    except TimeoutError:
        process.kill()
        await process.wait()


async def run_tool(
    command: list[str],
    *,
    label: str,
    log_path: Path | None = None,
    cwd: Path | None = None,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
    append: bool = False,
    echo: Callable[[str], None] | None = None,
) -> CommandResult:
    """Run *command*, tee combined stdout/stderr to *log_path* and *echo*.

    Never raises for process-level failures: a missing binary, a non-zero
    exit or a timeout is reported through the returned :class:`CommandResult`.
    """
    started = time.perf_counter()
    logger.debug("[%s] running: %s", label, format_command(command))

    sink: IO[str] | None = None
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        sink = open(log_path, "a" if append else "w", encoding="utf-8")

    try:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                cwd=str(cwd) if cwd is not None else None,
                env=dict(env) if env is not None else None,
                limit=STREAM_LIMIT,
            )
        except OSError as exc:
            message = f"cannot execute {command[0]}: {exc.strerror or exc}"
            logger.debug("[%s] %s", label, message)
            if sink is not None:
                sink.write(message + "\n")
            return CommandResult(
                command=list(command),
                returncode=None,
                elapsed=time.perf_counter() - started,
                error=message,
            )

        assert process.stdout is not None
        try:
            await asyncio.wait_for(
                asyncio.gather(_pump(process.stdout, sink, echo), process.wait()),
                timeout=timeout,
            )
        except asyncio.CancelledError:
            logger.debug("[%s] cancelled, stopping pid %s", label, process.pid)
            await asyncio.shield(_stop(process))
            raise
        except TimeoutError:
            await _stop(process)
            elapsed = time.perf_counter() - started
            logger.warning("[%s] timed out after %.0fs: %s", label, elapsed, format_command(command))
            if sink is not None:
                sink.write(f"\n[cloudaudit] timed out after {elapsed:.0f}s\n")
            return CommandResult(
                command=list(command),
                returncode=process.returncode,
                elapsed=elapsed,
                timed_out=True,
            )
    finally:
        if sink is not None:
            sink.close()

    elapsed = time.perf_counter() - started
    logger.debug("[%s] done (%.2fs): exit=%s", label, elapsed, process.returncode)
    return CommandResult(
        command=list(command),
        returncode=process.returncode,
        elapsed=elapsed,
    )
