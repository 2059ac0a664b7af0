"""Named OpenClaw CLI operations.

The core only depends on the boolean outcome of these operations; stdout is
passed through for display (``doctor``) but never parsed for decisions.
"""

from __future__ import annotations

import platform
from typing import Awaitable, Callable, Optional, Sequence

from .runner import CommandResult, run_command, spawn_detached

CommandRunner = Callable[..., Awaitable[CommandResult]]

DEFAULT_GATEWAY_PORT = 18789


def detect_os() -> str:
    """Return ``windows``, ``macos``, ``linux`` or ``unknown``."""
    system = platform.system().lower()
    if system.startswith("win"):
        return "windows"
    if system == "darwin":
        return "macos"
    if system == "linux":
        return "linux"
    return "unknown"


class OpenClawCli:
    """Thin wrapper around the ``openclaw``, ``npm`` and ``node`` executables."""

    def __init__(
        self,
        *,
        runner: CommandRunner = run_command,
        spawner: CommandRunner = spawn_detached,
        timeout: Optional[float] = None,
    ) -> None:
        self._runner = runner
        self._spawner = spawner
        self._timeout = timeout

    async def _run(self, program: str, args: Sequence[str]) -> CommandResult:
        return await self._runner(program, list(args), timeout=self._timeout)

    def detect_os(self) -> str:
        return detect_os()

    async def check_node_installed(self) -> bool:
        return (await self._run("node", ["--version"])).success

    async def check_installed(self) -> bool:
        return (await self._run("openclaw", ["--version"])).success

    async def install(self) -> CommandResult:
        return await self._run("npm", ["install", "-g", "openclaw@latest"])

    async def onboard(self) -> CommandResult:
        return await self._run("openclaw", ["onboard", "--non-interactive"])

    async def doctor(self) -> CommandResult:
        return await self._run("openclaw", ["doctor"])

    async def start_gateway(self, port: int = DEFAULT_GATEWAY_PORT) -> CommandResult:
        return await self._spawner("openclaw", ["gateway", "--port", str(port)])
