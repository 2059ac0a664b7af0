from __future__ import annotations

import pytest

from clawdesk.agent_core.shell import openclaw
from clawdesk.agent_core.shell.openclaw import OpenClawCli

pytestmark = pytest.mark.asyncio


async def test_named_operations_map_to_commands(cli: OpenClawCli, runner) -> None:
    assert await cli.check_node_installed() is True
    assert await cli.check_installed() is True
    await cli.install()
    await cli.onboard()
    await cli.doctor()
    await cli.start_gateway(19001)

    assert runner.calls == [
        ("node", ["--version"]),
        ("openclaw", ["--version"]),
        ("npm", ["install", "-g", "openclaw@latest"]),
        ("openclaw", ["onboard", "--non-interactive"]),
        ("openclaw", ["doctor"]),
        ("openclaw", ["gateway", "--port", "19001"]),
    ]


async def test_failed_check_returns_false(runner) -> None:
    failing = type(runner)(success=False, stderr="not found")
    cli = OpenClawCli(runner=failing, spawner=failing)
    assert await cli.check_installed() is False


async def test_timeout_is_passed_to_runner() -> None:
    seen = []

    async def _runner(program, args, timeout=None):
        seen.append(timeout)
        return openclaw.CommandResult(success=True, exit_code=0)

    await OpenClawCli(runner=_runner, timeout=12.5).doctor()
    assert seen == [12.5]


@pytest.mark.parametrize(
    "system, expected",
    [("Windows", "windows"), ("Darwin", "macos"), ("Linux", "linux"), ("SunOS", "unknown")],
)
async def test_detect_os(monkeypatch: pytest.MonkeyPatch, system: str, expected: str) -> None:
    monkeypatch.setattr(openclaw.platform, "system", lambda: system)
    assert OpenClawCli().detect_os() == expected
