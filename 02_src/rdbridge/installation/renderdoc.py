"""Locating RenderDoc and running renderdoccmd sub-commands."""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from ..bridge import ScriptingBridge
from ..command import CommandRunner, check_success, ensure_parent_dir, run_command
from ..config import RENDERDOC_DIR_ENV
from ..errors import InstallationNotFoundError, InvalidTargetIdentError
from ..logging_config import get_logger
from ..models import CaptureLaunchRequest, CaptureLaunchResult, CommandOutput, CommandSpec

logger = get_logger(__name__)

# Largest value renderdoccmd can hand back as a target ident (u32).
MAX_TARGET_IDENT = 0xFFFFFFFF


def _exe_name(stem: str) -> str:
    return f"{stem}.exe" if os.name == "nt" else stem


def _default_roots() -> list[Path]:
    if os.name == "nt":
        roots = []
        for env_name in ("ProgramFiles", "ProgramW6432"):
            value = os.environ.get(env_name)
            if value:
                roots.append(Path(value) / "RenderDoc")
        roots.append(Path(r"C:\Program Files\RenderDoc"))
        return roots
    return [Path("/opt/renderdoc"), Path("/usr/local/renderdoc")]


def _find_exe(root_dir: Path, stem: str) -> Path | None:
    name = _exe_name(stem)
    for candidate in (root_dir / name, root_dir / "bin" / name):
        if candidate.is_file():
            return candidate
    return None


@dataclass
class RenderDocInstallation:
    """The two RenderDoc executables and the directory they live in."""

    root_dir: Path
    qrenderdoc_exe: Path
    renderdoccmd_exe: Path
    runner: CommandRunner = field(default=run_command, repr=False, compare=False)

    @classmethod
    def from_root_dir(cls, root_dir: Path, runner: CommandRunner = run_command) -> "RenderDocInstallation":
        root_dir = Path(root_dir)
        qrenderdoc = _find_exe(root_dir, "qrenderdoc")
        renderdoccmd = _find_exe(root_dir, "renderdoccmd")
        missing = [name for name, exe in (("qrenderdoc", qrenderdoc), ("renderdoccmd", renderdoccmd)) if exe is None]
        if missing:
            raise InstallationNotFoundError(f"{', '.join(missing)} not found under {root_dir}")
        return cls(root_dir=root_dir, qrenderdoc_exe=qrenderdoc, renderdoccmd_exe=renderdoccmd, runner=runner)

    @classmethod
    def detect(
        cls,
        env: Mapping[str, str] | None = None,
        runner: CommandRunner = run_command,
    ) -> "RenderDocInstallation":
        """Find RenderDoc: RENDERDOG_RENDERDOC_DIR, then PATH, then default install dirs."""
        env = os.environ if env is None else env

        explicit = env.get(RENDERDOC_DIR_ENV)
        if explicit:
            return cls.from_root_dir(Path(explicit), runner=runner)

        on_path = shutil.which("renderdoccmd")
        if on_path:
            renderdoccmd = Path(on_path).resolve()
            qrenderdoc = _find_exe(renderdoccmd.parent, "qrenderdoc")
            if qrenderdoc is None:
                found = shutil.which("qrenderdoc")
                qrenderdoc = Path(found).resolve() if found else None
            if qrenderdoc is not None:
                return cls(
                    root_dir=renderdoccmd.parent,
                    qrenderdoc_exe=qrenderdoc,
                    renderdoccmd_exe=renderdoccmd,
                    runner=runner,
                )

        for root in _default_roots():
            if root.is_dir():
                try:
                    return cls.from_root_dir(root, runner=runner)
                except InstallationNotFoundError:
                    continue

        raise InstallationNotFoundError(
            f"RenderDoc not found; set {RENDERDOC_DIR_ENV} to the install directory"
        )

    def _renderdoccmd(self, *args: "str | os.PathLike[str]") -> CommandSpec:
        return CommandSpec(program=self.renderdoccmd_exe).with_args(*args)

    def version(self) -> str:
        """`renderdoccmd version`, trimmed."""
        output = self.runner(self._renderdoccmd("version"))
        return output.stdout.strip()

    def launch_capture(self, request: CaptureLaunchRequest) -> CaptureLaunchResult:
        """Start an executable under `renderdoccmd capture`.

        renderdoccmd reports the target ident for target control as its
        exit code, so a non-zero status is expected here.
        """
        args: list[str] = ["capture"]
        if request.working_dir:
            args += ["-d", request.working_dir]
        if request.capture_file_template:
            args += ["-c", request.capture_file_template]
        args.append(request.executable)
        args.extend(request.args)

        output = self.runner(self._renderdoccmd(*args))
        if output.status < 0 or output.status > MAX_TARGET_IDENT:
            raise InvalidTargetIdentError(output.status)

        logger.info(
            "Launched %s under renderdoccmd",
            request.executable,
            extra={"context": {"target_ident": output.status}},
        )
        return CaptureLaunchResult(target_ident=output.status, stdout=output.stdout, stderr=output.stderr)

    def save_thumbnail(self, capture_path: Path, output_path: Path) -> None:
        ensure_parent_dir(output_path)
        spec = self._renderdoccmd("thumb", "-o", output_path, capture_path)
        check_success(spec, self.runner(spec))

    def explain_vulkan_layer(self) -> CommandOutput:
        """Raw output of `renderdoccmd vulkanlayer --explain`; any exit status."""
        return self.runner(self._renderdoccmd("vulkanlayer", "--explain"))

    def create_bridge(self, scripts_dir: Path) -> ScriptingBridge:
        return ScriptingBridge(self.qrenderdoc_exe, scripts_dir)
