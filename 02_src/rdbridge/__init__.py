"""RenderDoc automation: command runner, qrenderdoc scripting bridge, diagnostics."""

from .app import Application, IApplication
from .bridge import IScriptingBridge, ScriptingBridge
from .errors import (
    CaptureTimeoutError,
    CommandError,
    DomainError,
    InfrastructureError,
    InstallationNotFoundError,
    InvalidTargetIdentError,
    NoExitCode,
    NonZeroExit,
    ProtocolError,
    RenderdogError,
    ScriptNotFoundError,
    SpawnFailed,
)
from .installation import RenderDocInstallation
from .models import (
    CaptureAndExportRequest,
    CaptureAndExportResult,
    CaptureLaunchRequest,
    CaptureLaunchResult,
    CommandOutput,
    CommandSpec,
    EnvironmentDiagnosis,
    ExportActionsRequest,
    ExportActionsResponse,
    FindEventsRequest,
    FindEventsResponse,
    FoundEvent,
    QueryFilter,
    TriggerCaptureRequest,
    TriggerCaptureResponse,
    VulkanLayerDiagnosis,
)

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Components
    "IScriptingBridge",
    "ScriptingBridge",
    "RenderDocInstallation",
    # Errors
    "RenderdogError",
    "InfrastructureError",
    "CommandError",
    "SpawnFailed",
    "NoExitCode",
    "NonZeroExit",
    "ScriptNotFoundError",
    "InvalidTargetIdentError",
    "InstallationNotFoundError",
    "ProtocolError",
    "DomainError",
    "CaptureTimeoutError",
    # Models
    "CommandSpec",
    "CommandOutput",
    "QueryFilter",
    "FindEventsRequest",
    "FindEventsResponse",
    "FoundEvent",
    "ExportActionsRequest",
    "ExportActionsResponse",
    "CaptureLaunchRequest",
    "CaptureLaunchResult",
    "TriggerCaptureRequest",
    "TriggerCaptureResponse",
    "CaptureAndExportRequest",
    "CaptureAndExportResult",
    "VulkanLayerDiagnosis",
    "EnvironmentDiagnosis",
]
