"""Command runner."""

from .runner import (
    CommandRunner,
    check_success,
    ensure_parent_dir,
    run_command,
    run_command_expect_success,
)

__all__ = [
    "CommandRunner",
    "run_command",
    "run_command_expect_success",
    "check_success",
    "ensure_parent_dir",
]
