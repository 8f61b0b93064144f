"""Synchronous subprocess execution."""

import os
import subprocess
from pathlib import Path
from typing import Callable

from ..errors import NoExitCode, NonZeroExit, SpawnFailed
from ..logging_config import get_logger
from ..models import CommandOutput, CommandSpec

logger = get_logger(__name__)

CommandRunner = Callable[[CommandSpec], CommandOutput]


def _describe(spec: CommandSpec) -> dict:
    return {
        "program": os.fspath(spec.program),
        "args": list(spec.args),
        "cwd": os.fspath(spec.cwd) if spec.cwd is not None else None,
    }


def _decode(data: bytes | None) -> str:
    # Tool output is not guaranteed to be UTF-8; never fail on it.
    return (data or b"").decode("utf-8", errors="replace")


def run_command(spec: CommandSpec) -> CommandOutput:
    """Run the command to completion and capture its output.

    Raises SpawnFailed if the process cannot start and NoExitCode if it was
    terminated by a signal. A non-zero exit code is returned, not raised.
    """
    logger.debug("Running %s", spec.display_command_line(), extra={"context": _describe(spec)})
    try:
        completed = subprocess.run(
            spec.argv(),
            cwd=spec.cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        raise SpawnFailed(source=e, **_describe(spec)) from e

    stdout = _decode(completed.stdout)
    stderr = _decode(completed.stderr)

    # On POSIX a negative return code means the child was killed by a signal.
    if completed.returncode < 0 and os.name != "nt":
        raise NoExitCode(
            stdout=stdout,
            stderr=stderr,
            signal=-completed.returncode,
            **_describe(spec),
        )

    return CommandOutput(status=completed.returncode, stdout=stdout, stderr=stderr)


def run_command_expect_success(spec: CommandSpec) -> CommandOutput:
    """Like run_command, but any non-zero exit code raises NonZeroExit."""
    return check_success(spec, run_command(spec))


def check_success(spec: CommandSpec, output: CommandOutput) -> CommandOutput:
    """Raise NonZeroExit unless output has status 0."""
    if output.status != 0:
        logger.warning(
            "%s exited with status %d",
            spec.display_command_line(),
            output.status,
        )
        raise NonZeroExit(
            status=output.status,
            stdout=output.stdout,
            stderr=output.stderr,
            **_describe(spec),
        )
    return output


def ensure_parent_dir(path: Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
