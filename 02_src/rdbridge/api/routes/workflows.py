"""One-shot workflow API routes."""

from pydantic import BaseModel, Field
from fastapi import APIRouter

from ...app import IApplication
from ...config import DEFAULT_HOST, DEFAULT_NUM_FRAMES, DEFAULT_TIMEOUT_S
from ...errors import RenderdogError
from ...models import CaptureAndExportRequest, CaptureAndExportResult
from ..errors import to_http_exception
from .actions import ActionFilterModel


class CaptureAndExportModel(ActionFilterModel):
    """Request model for launch, trigger and export in one call."""

    executable: str
    args: list[str] = Field(default_factory=list)
    working_dir: str | None = None
    capture_template_name: str | None = None
    host: str = DEFAULT_HOST
    num_frames: int = Field(DEFAULT_NUM_FRAMES, ge=1)
    timeout_s: int = Field(DEFAULT_TIMEOUT_S, ge=0)
    output_dir: str | None = None
    basename: str | None = None


def create_workflows_router(app: IApplication) -> APIRouter:
    """Create workflows router."""
    router = APIRouter(prefix="/api/workflows", tags=["workflows"])

    @router.post("/capture-and-export", response_model=CaptureAndExportResult)
    def capture_and_export(request: CaptureAndExportModel) -> CaptureAndExportResult:
        """Launch the target, trigger a capture and export its actions."""
        data = request.model_dump()
        template_name = data.pop("capture_template_name")
        data["output_dir"] = data["output_dir"] or ""
        try:
            if template_name:
                data["capture_file_template"] = app.capture_template(template_name)
            return app.capture_and_export_actions(CaptureAndExportRequest(**data))
        except RenderdogError as e:
            raise to_http_exception(e)

    return router
