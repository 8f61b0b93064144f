"""Classifying `renderdoccmd vulkanlayer --explain` output."""

import os
from pathlib import Path

from ..logging_config import get_logger
from ..models import VulkanLayerDiagnosis

logger = get_logger(__name__)

LAYER_NAME = "VK_LAYER_RENDERDOC_Capture"
MANIFEST_SCAN_MAX_DEPTH = 6

UNSUPPORTED_PHRASES = (
    "is not a valid command",
    "not a valid command",
    "unknown command",
    "unrecognized command",
)
ELEVATION_PHRASES = ("administrator", "admin privileges", "elevation")

SUMMARY_UNSUPPORTED = "renderdoccmd does not support the `vulkanlayer` command (too old?)"
SUMMARY_OK = "RenderDoc Vulkan layer is correctly registered"
SUMMARY_UNFIXABLE = "RenderDoc Vulkan layer configuration has an unfixable problem"
SUMMARY_NOT_REGISTERED = "RenderDoc Vulkan layer is not correctly registered"
SUMMARY_UNKNOWN = "RenderDoc Vulkan layer status is unknown"


def extract_manifest_paths(text: str) -> list[str]:
    """Lines that look like a layer manifest path, trimmed, sorted and unique."""
    found = set()
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        lower = trimmed.lower()
        if lower.endswith(".json") or ".json " in lower or ".json\t" in lower:
            found.add(trimmed)
    return sorted(found)


def classify_vulkan_layer_output(
    stdout: str,
    stderr: str,
    renderdoccmd_exe: "str | os.PathLike[str]",
) -> VulkanLayerDiagnosis:
    combined = f"{stderr}\n{stdout}"
    lower = combined.lower()

    if any(phrase in lower for phrase in UNSUPPORTED_PHRASES):
        return VulkanLayerDiagnosis(
            supported=False,
            needs_attention=False,
            unfixable=False,
            need_elevation=False,
            this_install_registered=None,
            other_installs_registered=None,
            conflicting_manifests=[],
            summary=SUMMARY_UNSUPPORTED,
            stdout=stdout,
            stderr=stderr,
        )

    ok = "appears to be correctly registered" in lower
    unfixable = "unfixable problem" in lower
    needs_attention = not ok and ("vulkan layer" in lower or unfixable)
    need_elevation = any(phrase in lower for phrase in ELEVATION_PHRASES)

    if "this build's renderdoc layer is not registered" in lower:
        this_install_registered = False
    elif ok:
        this_install_registered = True
    else:
        this_install_registered = None

    other_installs_registered = None
    if "non-matching renderdoc layer" in lower or "other installs registered" in lower:
        other_installs_registered = True

    suggested_commands = []
    if needs_attention:
        exe = os.fspath(renderdoccmd_exe)
        suggested_commands = [
            f'"{exe}" vulkanlayer --register --user',
            f'"{exe}" vulkanlayer --register --system',
        ]

    if ok:
        summary = SUMMARY_OK
    elif unfixable:
        summary = SUMMARY_UNFIXABLE
    elif needs_attention:
        summary = SUMMARY_NOT_REGISTERED
    else:
        summary = SUMMARY_UNKNOWN

    return VulkanLayerDiagnosis(
        supported=True,
        needs_attention=needs_attention,
        unfixable=unfixable,
        need_elevation=need_elevation,
        this_install_registered=this_install_registered,
        other_installs_registered=other_installs_registered,
        conflicting_manifests=extract_manifest_paths(combined),
        summary=summary,
        stdout=stdout,
        stderr=stderr,
        suggested_commands=suggested_commands,
    )


def find_vulkan_layer_manifests(root_dir: Path, max_depth: int = MANIFEST_SCAN_MAX_DEPTH) -> list[str]:
    """Find `.json` files under root_dir that mention the RenderDoc capture layer.

    Unreadable directories and files are skipped.
    """
    hits = set()
    stack = [(Path(root_dir), 0)]
    while stack:
        directory, depth = stack.pop()
        if depth > max_depth:
            continue
        try:
            entries = list(directory.iterdir())
        except OSError:
            continue
        for path in entries:
            if path.is_dir():
                stack.append((path, depth + 1))
                continue
            if path.suffix != ".json":
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            if LAYER_NAME in content:
                hits.add(str(path))

    logger.debug("Found %d Vulkan layer manifests under %s", len(hits), root_dir)
    return sorted(hits)
