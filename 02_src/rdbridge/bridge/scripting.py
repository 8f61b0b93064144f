"""Scripting bridge to qrenderdoc's embedded Python interpreter.

Each call gets its own run directory holding `<stem>.request.json` and, once
the interpreter exits, `<stem>.response.json`. Failures come back on two
channels: the interpreter's exit code (InfrastructureError) and the response
envelope (DomainError / CaptureTimeoutError). Anything in between is a
ProtocolError.
"""

import itertools
import json
import os
import time
import uuid
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, Sequence, TypeVar

from .. import remote
from ..command import CommandRunner, run_command_expect_success
from ..errors import ProtocolError, ScriptNotFoundError
from ..logging_config import get_logger
from ..models import CommandOutput, CommandSpec, Envelope
from ..remote.protocol import REQUEST_SUFFIX, RESPONSE_SUFFIX

logger = get_logger(__name__)

T = TypeVar("T")

RUNS_DIR_NAME = "runs"


class IScriptingBridge(Protocol):
    """Delegates one unit of work to the external interpreter per call."""

    def call(
        self,
        script: str,
        request: Mapping[str, Any],
        parse: Callable[[Any], T],
    ) -> T:
        """Run a bundled script against request and return parse(result)."""
        ...


def write_script_file(path: Path, content: str) -> None:
    """Write via a temporary file so concurrent readers never see a partial script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    os.replace(tmp_path, path)


def remove_if_exists(path: Path) -> None:
    path.unlink(missing_ok=True)


def read_envelope(path: Path) -> Envelope:
    """Read and parse a response envelope. Missing or invalid JSON is a ProtocolError."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise ProtocolError(f"response file missing after successful run: {path}") from e
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ProtocolError(f"failed to parse response JSON {path}: {e}") from e
    return Envelope.from_dict(data)


class ScriptingBridge:
    """Runs bundled scripts through `qrenderdoc --python`.

    Concurrent calls are isolated purely by run directory naming
    (wall-clock ns, pid, per-instance sequence number). A name that is
    already taken is retried, never shared.
    """

    def __init__(
        self,
        interpreter: Path,
        scripts_dir: Path,
        *,
        interpreter_args: Sequence[str] = ("--python",),
        runner: CommandRunner = run_command_expect_success,
    ):
        self._interpreter = Path(interpreter)
        self._scripts_dir = Path(scripts_dir)
        self._interpreter_args = list(interpreter_args)
        self._runner = runner
        # next() on itertools.count is atomic under the GIL
        self._sequence = itertools.count()
        self._scripts_installed = False

    @property
    def scripts_dir(self) -> Path:
        return self._scripts_dir

    def install_scripts(self) -> None:
        """Copy the bundled remote modules into the scripts directory."""
        package = resources.files(remote)
        for name in (*remote.SUPPORT_MODULES, *remote.ENTRY_SCRIPTS):
            content = package.joinpath(name).read_text(encoding="utf-8")
            write_script_file(self._scripts_dir / name, content)
        self._scripts_installed = True
        logger.info("Installed bridge scripts", extra={"context": {"scripts_dir": str(self._scripts_dir)}})

    def create_run_dir(self, prefix: str) -> Path:
        """Create a run directory that no other call, in any process, shares.

        Bridges sharing a scripts directory in one process each count from
        zero, so a name already taken is skipped with the next sequence number.
        """
        runs_dir = self._scripts_dir / RUNS_DIR_NAME
        runs_dir.mkdir(parents=True, exist_ok=True)
        while True:
            run_dir = runs_dir / f"{prefix}-{time.time_ns()}-{os.getpid()}-{next(self._sequence)}"
            try:
                run_dir.mkdir()
            except FileExistsError:
                continue
            return run_dir

    def run_python(
        self,
        script_path: Path,
        args: Sequence[str] = (),
        working_dir: Path | None = None,
    ) -> CommandOutput:
        """Run a script in the interpreter. Any non-zero exit raises."""
        script_path = Path(script_path)
        if not script_path.is_file():
            raise ScriptNotFoundError(script_path)
        spec = CommandSpec(
            program=self._interpreter,
            args=[*self._interpreter_args, os.fspath(script_path), *args],
            cwd=working_dir,
        )
        return self._runner(spec)

    def call(
        self,
        script: str,
        request: Mapping[str, Any],
        parse: Callable[[Any], T],
        *,
        prefix: str | None = None,
    ) -> T:
        if not self._scripts_installed:
            self.install_scripts()

        stem = Path(script).stem
        run_dir = self.create_run_dir(prefix or stem)
        request_path = run_dir / f"{stem}{REQUEST_SUFFIX}"
        response_path = run_dir / f"{stem}{RESPONSE_SUFFIX}"

        request_path.write_text(json.dumps(dict(request)), encoding="utf-8")
        remove_if_exists(response_path)

        logger.info(
            "Running bridge script %s",
            script,
            extra={"context": {"run_dir": str(run_dir)}},
        )
        self.run_python(self._scripts_dir / script, working_dir=run_dir)

        envelope = read_envelope(response_path)
        if not envelope.ok:
            logger.warning(
                "Bridge script %s reported an error: %s",
                script,
                envelope.error,
                extra={"context": {"run_dir": str(run_dir), "error_kind": envelope.error_kind}},
            )
        result = envelope.unwrap()
        try:
            return parse(result)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProtocolError(f"malformed {stem} result: {e!r}") from e
