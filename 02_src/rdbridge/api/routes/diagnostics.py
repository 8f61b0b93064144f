"""Installation and diagnostics API routes."""

import os

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import IApplication
from ...errors import RenderdogError
from ...models import EnvironmentDiagnosis, VulkanLayerDiagnosis
from ..errors import to_http_exception


class InstallationResponse(BaseModel):
    """Response model for the detected installation."""

    root_dir: str
    qrenderdoc_exe: str
    renderdoccmd_exe: str
    version: str | None = None


def create_diagnostics_router(app: IApplication) -> APIRouter:
    """Create diagnostics router."""
    router = APIRouter(prefix="/api", tags=["diagnostics"])

    @router.get("/installation", response_model=InstallationResponse)
    def get_installation() -> dict:
        """Detect RenderDoc and report its version."""
        try:
            installation = app.installation
        except RenderdogError as e:
            raise to_http_exception(e)
        try:
            version = installation.version()
        except RenderdogError:
            version = None
        return {
            "root_dir": os.fspath(installation.root_dir),
            "qrenderdoc_exe": os.fspath(installation.qrenderdoc_exe),
            "renderdoccmd_exe": os.fspath(installation.renderdoccmd_exe),
            "version": version,
        }

    @router.get("/diagnostics/vulkan-layer", response_model=VulkanLayerDiagnosis)
    def get_vulkan_layer() -> VulkanLayerDiagnosis:
        try:
            return app.diagnose_vulkan_layer()
        except RenderdogError as e:
            raise to_http_exception(e)

    @router.get("/diagnostics/environment", response_model=EnvironmentDiagnosis)
    def get_environment() -> EnvironmentDiagnosis:
        """Full environment report with warnings and suggested commands."""
        try:
            return app.diagnose_environment()
        except RenderdogError as e:
            raise to_http_exception(e)

    return router
