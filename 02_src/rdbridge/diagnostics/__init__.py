"""Environment and Vulkan layer diagnosis."""

from .environment import (
    WATCHED_ENV_VARS,
    current_arch,
    current_platform,
    diagnose_environment,
    diagnose_vulkan_layer,
    is_process_elevated,
)
from .vulkan_layer import (
    classify_vulkan_layer_output,
    extract_manifest_paths,
    find_vulkan_layer_manifests,
)

__all__ = [
    "WATCHED_ENV_VARS",
    "classify_vulkan_layer_output",
    "current_arch",
    "current_platform",
    "diagnose_environment",
    "diagnose_vulkan_layer",
    "extract_manifest_paths",
    "find_vulkan_layer_manifests",
    "is_process_elevated",
]
