"""Error taxonomy.

Three fault classes let callers tell apart "the tooling failed"
(InfrastructureError), "the tooling broke its contract" (ProtocolError) and
"the tooling ran but the requested analysis failed" (DomainError).
"""

from pathlib import Path


class RenderdogError(Exception):
    """Base class for every error raised by rdbridge."""


class InfrastructureError(RenderdogError):
    """A process could not be run, or ran and failed."""


class CommandError(InfrastructureError):
    """A subprocess invocation failed."""

    def __init__(
        self,
        message: str,
        *,
        program: str,
        args: list[str],
        cwd: str | None,
    ):
        super().__init__(message)
        self.program = program
        self.argv = args
        self.cwd = cwd


class SpawnFailed(CommandError):
    """The process could not be started. The OSError is chained as __cause__."""

    def __init__(self, *, program: str, args: list[str], cwd: str | None, source: OSError):
        super().__init__(
            f"failed to spawn `{program}`\nargs: {args!r}\ncwd: {cwd!r}\nsource: {source}",
            program=program,
            args=args,
            cwd=cwd,
        )
        self.source = source


class NoExitCode(CommandError):
    """The process terminated without an exit code (killed by a signal)."""

    def __init__(
        self,
        *,
        program: str,
        args: list[str],
        cwd: str | None,
        stdout: str,
        stderr: str,
        signal: int | None = None,
    ):
        super().__init__(
            f"`{program}` exited without a status code\nargs: {args!r}\ncwd: {cwd!r}\n"
            f"stdout:\n{stdout}\nstderr:\n{stderr}",
            program=program,
            args=args,
            cwd=cwd,
        )
        self.stdout = stdout
        self.stderr = stderr
        self.signal = signal


class NonZeroExit(CommandError):
    """The process completed with a non-zero exit code."""

    def __init__(
        self,
        *,
        program: str,
        args: list[str],
        cwd: str | None,
        status: int,
        stdout: str,
        stderr: str,
    ):
        super().__init__(
            f"`{program}` exited with status {status}\nargs: {args!r}\ncwd: {cwd!r}\n"
            f"stdout:\n{stdout}\nstderr:\n{stderr}",
            program=program,
            args=args,
            cwd=cwd,
        )
        self.status = status
        self.stdout = stdout
        self.stderr = stderr


class ScriptNotFoundError(InfrastructureError):
    """The bridge script to run does not exist."""

    def __init__(self, script_path: Path):
        super().__init__(f"script not found: {script_path}")
        self.script_path = script_path


class InvalidTargetIdentError(InfrastructureError):
    """renderdoccmd capture returned an exit code that is not a target ident."""

    def __init__(self, code: int):
        super().__init__(f"renderdoccmd returned invalid target ident: {code}")
        self.code = code


class InstallationNotFoundError(InfrastructureError):
    """RenderDoc executables could not be located."""


class ProtocolError(RenderdogError):
    """The bridge response was missing, unparseable or incomplete."""


class DomainError(RenderdogError):
    """The bridge ran but reported a failure of the requested analysis."""


class CaptureTimeoutError(RenderdogError, TimeoutError):
    """No capture arrived before the trigger deadline. Retry with a larger budget."""
