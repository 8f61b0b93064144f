"""Core data models for rdbridge."""

from .actions import (
    ExportActionsRequest,
    ExportActionsResponse,
    FindEventsRequest,
    FindEventsResponse,
    FoundEvent,
    QueryFilter,
)
from .capture import (
    CaptureLaunchRequest,
    CaptureLaunchResult,
    TriggerCaptureRequest,
    TriggerCaptureResponse,
)
from .command import CommandOutput, CommandSpec
from .diagnostics import EnvironmentDiagnosis, EnvironmentVarInfo, VulkanLayerDiagnosis
from .envelope import Envelope
from .workflows import CaptureAndExportRequest, CaptureAndExportResult

__all__ = [
    # Commands
    "CommandSpec",
    "CommandOutput",
    # Bridge
    "Envelope",
    # Actions
    "QueryFilter",
    "FindEventsRequest",
    "FindEventsResponse",
    "FoundEvent",
    "ExportActionsRequest",
    "ExportActionsResponse",
    # Capture
    "CaptureLaunchRequest",
    "CaptureLaunchResult",
    "TriggerCaptureRequest",
    "TriggerCaptureResponse",
    # Diagnostics
    "VulkanLayerDiagnosis",
    "EnvironmentVarInfo",
    "EnvironmentDiagnosis",
    # Workflows
    "CaptureAndExportRequest",
    "CaptureAndExportResult",
]
