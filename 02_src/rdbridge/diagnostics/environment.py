"""Environment diagnosis for a RenderDoc installation."""

import os
import platform
import sys
from pathlib import Path
from typing import Mapping

from ..errors import RenderdogError
from ..installation import RenderDocInstallation
from ..logging_config import get_logger
from ..models import EnvironmentDiagnosis, EnvironmentVarInfo, VulkanLayerDiagnosis
from .vulkan_layer import LAYER_NAME, classify_vulkan_layer_output, find_vulkan_layer_manifests

logger = get_logger(__name__)

WATCHED_ENV_VARS = (
    "VK_INSTANCE_LAYERS",
    "VK_LAYER_PATH",
    "VK_LOADER_DEBUG",
    "ENABLE_VULKAN_RENDERDOC_CAPTURE",
    "RENDERDOC_HOOK_EGL",
    "RENDERDOC_DEBUG_LOG_FILE",
)

_ARCH_ALIASES = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
}


def current_platform() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "macos"
    if sys.platform in ("win32", "cygwin"):
        return "windows"
    return sys.platform


def current_arch() -> str:
    machine = platform.machine()
    return _ARCH_ALIASES.get(machine.lower(), machine.lower())


def is_process_elevated() -> bool | None:
    """Whether this process runs as administrator. Only known on Windows."""
    if os.name != "nt":
        return None
    import ctypes

    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except OSError:
        return None


def diagnose_vulkan_layer(installation: RenderDocInstallation) -> VulkanLayerDiagnosis:
    output = installation.explain_vulkan_layer()
    return classify_vulkan_layer_output(output.stdout, output.stderr, installation.renderdoccmd_exe)


def _probe_version(installation: RenderDocInstallation) -> str | None:
    try:
        return installation.version()
    except RenderdogError as e:
        logger.warning("renderdoccmd version probe failed: %s", e)
        return None


def _probe_vulkan_layer(installation: RenderDocInstallation) -> VulkanLayerDiagnosis | None:
    try:
        return diagnose_vulkan_layer(installation)
    except RenderdogError as e:
        logger.warning("renderdoccmd vulkanlayer probe failed: %s", e)
        return None


def diagnose_environment(
    installation: RenderDocInstallation,
    env: Mapping[str, str] | None = None,
    *,
    platform_name: str | None = None,
    arch: str | None = None,
) -> EnvironmentDiagnosis:
    """Collect platform, Vulkan layer and env var state plus warnings.

    The version and layer probes are best-effort and degrade to None.
    Warnings and suggestions are appended in a fixed order.
    """
    env = os.environ if env is None else env
    platform_name = platform_name or current_platform()
    arch = arch or current_arch()

    version = _probe_version(installation)
    vulkan_layer = _probe_vulkan_layer(installation)
    manifests = find_vulkan_layer_manifests(installation.root_dir)
    is_elevated = is_process_elevated()
    env_vars = [EnvironmentVarInfo(name=name, value=env.get(name)) for name in WATCHED_ENV_VARS]
    renderdoccmd = os.fspath(installation.renderdoccmd_exe)
    root_dir = os.fspath(installation.root_dir)

    warnings: list[str] = []
    suggested: list[str] = []

    if platform_name == "macos":
        warnings.append(
            "RenderDoc on macOS is experimental and not officially supported for debugging; "
            "capture/replay may be unreliable."
        )
    if platform_name == "linux" and arch != "x86_64":
        warnings.append(
            f"RenderDoc officially supports only x86_64 Linux; current arch is `{arch}` "
            "(ARM/32-bit targets are not supported)."
        )
    if platform_name == "windows" and arch != "x86_64":
        warnings.append(
            f"RenderDoc Windows support is primarily x86_64; current arch is `{arch}` and may not work."
        )

    if vulkan_layer is not None:
        if not vulkan_layer.supported or vulkan_layer.unfixable:
            warnings.append(vulkan_layer.summary)
        elif vulkan_layer.needs_attention:
            warnings.append(vulkan_layer.summary)
            suggested.extend(vulkan_layer.suggested_commands)
            suggested.append(
                f'"{renderdoccmd}" capture <your_exe> [args...] (fallback: injection-based capture)'
            )

        if is_elevated is False and vulkan_layer.need_elevation and vulkan_layer.needs_attention:
            warnings.append(
                "Vulkan layer registration may require administrator privileges. "
                "Re-run the registration command as administrator."
            )

    instance_layers = env.get("VK_INSTANCE_LAYERS") or ""
    if instance_layers and LAYER_NAME not in instance_layers:
        warnings.append(
            f"VK_INSTANCE_LAYERS is set but does not include {LAYER_NAME}; "
            "this can prevent RenderDoc's layer from being enabled."
        )
        suggested.append(
            f"Set VK_INSTANCE_LAYERS to include {LAYER_NAME}, "
            "or clear it if it is forcing a different layer set."
        )

    layer_path = env.get("VK_LAYER_PATH") or ""
    if layer_path and root_dir not in layer_path:
        warnings.append(
            "VK_LAYER_PATH is set; if Vulkan capture fails, ensure it includes the RenderDoc "
            "layer JSON location or unregister conflicting installs."
        )

    manifest_dirs = sorted({str(Path(p).parent) for p in manifests})
    if manifest_dirs and layer_path and not any(d in layer_path for d in manifest_dirs):
        warnings.append(
            "VK_LAYER_PATH is set but does not appear to include the RenderDoc Vulkan layer "
            f"manifest directory. Detected manifest dirs: {' | '.join(manifest_dirs)}"
        )
        suggested.append(
            f"Update VK_LAYER_PATH to include the detected directories (separator `{os.pathsep}`), "
            "or unset VK_LAYER_PATH if it is causing conflicts."
        )

    logger.info(
        "Diagnosed environment",
        extra={"context": {"platform": platform_name, "arch": arch, "warnings": len(warnings)}},
    )
    return EnvironmentDiagnosis(
        root_dir=root_dir,
        qrenderdoc_exe=os.fspath(installation.qrenderdoc_exe),
        renderdoccmd_exe=renderdoccmd,
        platform=platform_name,
        arch=arch,
        is_elevated=is_elevated,
        renderdoccmd_version=version,
        vulkan_layer=vulkan_layer,
        vulkan_layer_manifests=manifests,
        env=env_vars,
        warnings=warnings,
        suggested_commands=suggested,
    )
