"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "rdbridge.log"

RENDERDOC_DIR_ENV = "RENDERDOG_RENDERDOC_DIR"
ARTIFACTS_DIR_ENV = "RENDERDOG_ARTIFACTS_DIR"

DEFAULT_HOST = "localhost"
DEFAULT_NUM_FRAMES = 1
DEFAULT_TIMEOUT_S = 60
DEFAULT_MAX_RESULTS = 200


PathLike = Union[str, Path]


def resolve_path_from_base(base: PathLike, value: PathLike) -> Path:
    """Resolve a possibly relative path against a base directory."""
    candidate = Path(value)
    return candidate if candidate.is_absolute() else Path(base) / candidate


def default_artifacts_dir(cwd: PathLike) -> Path:
    """Directory for captures, scripts and exports."""
    env_value = os.getenv(ARTIFACTS_DIR_ENV)
    if env_value:
        return resolve_path_from_base(cwd, env_value)
    return Path(cwd) / "artifacts" / "renderdoc"


def default_scripts_dir(cwd: PathLike) -> Path:
    return default_artifacts_dir(cwd) / "scripts"


def default_exports_dir(cwd: PathLike) -> Path:
    return default_artifacts_dir(cwd) / "exports"
