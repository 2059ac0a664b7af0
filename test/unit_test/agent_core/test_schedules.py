from __future__ import annotations

import pytest

from clawdesk.agent_core.schedules import PRESET_SCHEDULES, cron_to_text, is_valid_cron, next_run_hint


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("0 9 * * *", "Daily at 9am"),
        ("  */5 * * * *  ", "Every 5 minutes"),
        ("0 9 * * 1-5", "Weekdays at 9am"),
        ("15 3 * * 2", "15 3 * * 2"),
        ("", "Manual"),
        (None, "Manual"),
    ],
)
def test_cron_to_text(expression, expected) -> None:
    assert cron_to_text(expression) == expected


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("0 9 * * *", "Tomorrow at 9:00 AM"),
        ("0 */1 * * *", "Next hour"),
        ("*/30 * * * *", "In 30 minutes"),
        ("* * * * *", "In 1 minute"),
        ("0 8 * * 1", "Cron: 0 8 * * 1"),
        ("every day", "Invalid cron"),
        ("", "Manual"),
    ],
)
def test_next_run_hint(expression, expected) -> None:
    assert next_run_hint(expression) == expected


def test_presets_are_valid_and_unique() -> None:
    crons = [p.cron for p in PRESET_SCHEDULES]
    assert len(crons) == len(set(crons)) == 9
    assert all(is_valid_cron(c) for c in crons)
