"""Environment and Vulkan layer diagnosis data models."""

from dataclasses import dataclass, field


@dataclass
class VulkanLayerDiagnosis:
    """Classification of `renderdoccmd vulkanlayer --explain` output.

    Registration flags are tri-state: None means the output did not say.
    """

    supported: bool
    needs_attention: bool
    unfixable: bool
    need_elevation: bool
    this_install_registered: bool | None
    other_installs_registered: bool | None
    conflicting_manifests: list[str]
    summary: str
    stdout: str
    stderr: str
    suggested_commands: list[str] = field(default_factory=list)


@dataclass
class EnvironmentVarInfo:
    name: str
    value: str | None


@dataclass
class EnvironmentDiagnosis:
    """Composite environment report. Warnings keep their append order."""

    root_dir: str
    qrenderdoc_exe: str
    renderdoccmd_exe: str
    platform: str
    arch: str
    is_elevated: bool | None
    renderdoccmd_version: str | None
    vulkan_layer: VulkanLayerDiagnosis | None
    vulkan_layer_manifests: list[str]
    env: list[EnvironmentVarInfo]
    warnings: list[str] = field(default_factory=list)
    suggested_commands: list[str] = field(default_factory=list)
