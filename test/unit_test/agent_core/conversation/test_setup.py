from __future__ import annotations

import logging

import pytest

from clawdesk.agent_core.conversation.setup import SetupSequence
from clawdesk.agent_core.schemas.domain import LogStatus
from clawdesk.agent_core.shell.openclaw import OpenClawCli
from clawdesk.core.config import SetupConfig

pytestmark = pytest.mark.asyncio


async def test_setup_writes_five_success_logs_in_order(setup_sequence: SetupSequence, gateway) -> None:
    report = await setup_sequence.run()

    assert gateway.logs.actions() == [
        "Setup — system check passed",
        "OpenClaw v2.1.0 installed",
        "OpenClaw onboarding complete",
        "Gateway started (port 18789)",
        "Setup completed successfully",
    ]
    assert all(e.status is LogStatus.success and e.agent_id == "system" for e in gateway.logs.entries)
    assert "Step 1: System Check" in report
    assert "Step 4: Starting Gateway" in report
    assert "Setup Complete!" in report


async def test_setup_invokes_cli_operations(setup_sequence: SetupSequence, runner) -> None:
    await setup_sequence.run()
    assert runner.calls == [
        ("node", ["--version"]),
        ("npm", ["install", "-g", "openclaw@latest"]),
        ("openclaw", ["onboard", "--non-interactive"]),
        ("openclaw", ["gateway", "--port", "18789"]),
    ]


async def test_setup_waits_configured_delays(setup_sequence: SetupSequence, sleeps) -> None:
    await setup_sequence.run()
    assert sleeps == [1.5, 1.2, 0.8]


async def test_setup_reports_success_when_commands_fail(gateway, runner, caplog: pytest.LogCaptureFixture) -> None:
    failing = type(runner)(success=False, stdout="", stderr="npm: command not found")

    async def _no_sleep(_: float) -> None:
        return None

    sequence = SetupSequence(
        logs=gateway.logs,
        cli=OpenClawCli(runner=failing, spawner=failing),
        config=SetupConfig(gateway_port=19000),
        sleep=_no_sleep,
    )

    with caplog.at_level(logging.WARNING, logger="clawdesk.agent_core.conversation.setup"):
        report = await sequence.run()

    assert "installed successfully" in report
    assert "v20.11.0 (bundled)" in report
    assert "Gateway started on port 19000" in report
    assert len(gateway.logs.entries) == 5
    assert "Gateway started (port 19000)" in gateway.logs.actions()
    assert any("npm: command not found" in r.getMessage() for r in caplog.records)


async def test_setup_survives_cli_exceptions(gateway) -> None:
    async def _boom(program, args, timeout=None):
        raise OSError("no shell")

    async def _no_sleep(_: float) -> None:
        return None

    sequence = SetupSequence(logs=gateway.logs, cli=OpenClawCli(runner=_boom, spawner=_boom), sleep=_no_sleep)

    report = await sequence.run()

    assert "Setup Complete!" in report
    assert len(gateway.logs.entries) == 5
