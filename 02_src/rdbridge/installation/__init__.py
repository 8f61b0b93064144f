"""RenderDoc installation."""

from .renderdoc import RenderDocInstallation

__all__ = ["RenderDocInstallation"]
