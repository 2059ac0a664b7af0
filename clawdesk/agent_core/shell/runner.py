"""Pass-through process runner for external CLI programs.

``run_command`` never raises for spawn or timeout failures: callers only care
whether a named operation succeeded, so every failure is folded into a
``CommandResult`` with ``success=False``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one CLI invocation."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    exit_code: int = -1


async def run_command(program: str, args: Sequence[str] = (), *, timeout: Optional[float] = None) -> CommandResult:
    """Run ``program`` with ``args`` and capture its output.

    Args:
        program: Executable name, resolved through ``PATH``.
        args: Command-line arguments.
        timeout: Seconds to wait for the process; ``None`` waits indefinitely.

    Returns:
        CommandResult with the exit code and decoded output streams.
    """
    start_time = time.time()
    logger.info(f"Executing command: {program} {' '.join(args)}")
    try:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.warning(f"Could not start {program}: {e}")
        return CommandResult(success=False, stderr=str(e))

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning(f"Command timed out after {timeout}s: {program}")
        return CommandResult(success=False, stderr=f"timed out after {timeout}s")

    stdout = stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode("utf-8", errors="replace") if stderr_bytes else ""
    exit_code = process.returncode if process.returncode is not None else -1

    logger.info(
        f"Command completed with exit code {exit_code} "
        f"(duration: {time.time() - start_time:.2f}s, stdout: {len(stdout)} chars, stderr: {len(stderr)} chars)"
    )
    return CommandResult(success=exit_code == 0, stdout=stdout, stderr=stderr, exit_code=exit_code)


async def spawn_detached(program: str, args: Sequence[str] = ()) -> CommandResult:
    """Start a long-running background process without waiting for it."""
    try:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
    except OSError as e:
        logger.warning(f"Could not start {program}: {e}")
        return CommandResult(success=False, stderr=str(e))
    logger.info(f"Spawned {program} (pid={process.pid})")
    return CommandResult(success=True, stdout=f"pid={process.pid}", exit_code=0)
