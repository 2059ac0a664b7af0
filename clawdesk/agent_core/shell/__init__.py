"""External CLI collaborator: process runner and named OpenClaw operations."""

from .openclaw import OpenClawCli, detect_os
from .runner import CommandResult, run_command, spawn_detached

__all__ = ["CommandResult", "OpenClawCli", "detect_os", "run_command", "spawn_detached"]
