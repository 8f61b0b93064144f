"""Subprocess invocation data models."""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _quote_if_needed(part: str) -> str:
    if " " in part or "\t" in part:
        return f'"{part}"'
    return part


@dataclass
class CommandSpec:
    """A program, its ordered arguments and an optional working directory."""

    program: Path
    args: list[str] = field(default_factory=list)
    cwd: Path | None = None

    def with_args(self, *args: "str | os.PathLike[str]") -> "CommandSpec":
        """Return a copy with extra arguments appended."""
        return CommandSpec(
            program=self.program,
            args=[*self.args, *(os.fspath(a) for a in args)],
            cwd=self.cwd,
        )

    def argv(self) -> list[str]:
        return [os.fspath(self.program), *self.args]

    def display_command_line(self) -> str:
        """Human-readable command line, for logs and error messages."""
        return " ".join(_quote_if_needed(part) for part in self.argv())


@dataclass
class CommandOutput:
    """Captured result of a completed process."""

    status: int
    stdout: str
    stderr: str
