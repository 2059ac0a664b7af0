"""Human-readable descriptions of agent schedules.

Schedules are descriptive cron strings only; nothing here runs a scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchedulePreset:
    label: str
    cron: str


PRESET_SCHEDULES = (
    SchedulePreset("Every minute", "* * * * *"),
    SchedulePreset("Every 5 minutes", "*/5 * * * *"),
    SchedulePreset("Every 30 minutes", "*/30 * * * *"),
    SchedulePreset("Every hour", "0 */1 * * *"),
    SchedulePreset("Every 6 hours", "0 */6 * * *"),
    SchedulePreset("Daily at 9am", "0 9 * * *"),
    SchedulePreset("Daily at midnight", "0 0 * * *"),
    SchedulePreset("Monday at 8am", "0 8 * * 1"),
    SchedulePreset("Weekdays at 9am", "0 9 * * 1-5"),
)

NEXT_RUN_HINTS = {
    "0 9 * * *": "Tomorrow at 9:00 AM",
    "0 */1 * * *": "Next hour",
    "*/30 * * * *": "In 30 minutes",
    "* * * * *": "In 1 minute",
}

MANUAL = "Manual"


def is_valid_cron(expression: str) -> bool:
    return len(expression.split()) == 5


def cron_to_text(expression: Optional[str]) -> str:
    """Return the preset label for ``expression``, or the raw expression."""
    expression = (expression or "").strip()
    if not expression:
        return MANUAL
    preset = next((p for p in PRESET_SCHEDULES if p.cron == expression), None)
    return preset.label if preset else expression


def next_run_hint(expression: Optional[str]) -> str:
    """Estimate the next run in words for well-known expressions."""
    expression = (expression or "").strip()
    if not expression:
        return MANUAL
    if not is_valid_cron(expression):
        return "Invalid cron"
    return NEXT_RUN_HINTS.get(expression, f"Cron: {expression}")
