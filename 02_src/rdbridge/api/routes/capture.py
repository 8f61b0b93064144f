"""Capture API routes."""

import os

from pydantic import BaseModel, Field
from fastapi import APIRouter

from ...app import IApplication
from ...config import DEFAULT_HOST, DEFAULT_NUM_FRAMES, DEFAULT_TIMEOUT_S
from ...errors import RenderdogError
from ...models import CaptureLaunchRequest, TriggerCaptureRequest, TriggerCaptureResponse
from ..errors import to_http_exception


class LaunchCaptureRequest(BaseModel):
    """Request model for launching a target under renderdoccmd."""

    executable: str
    args: list[str] = Field(default_factory=list)
    working_dir: str | None = None
    capture_template_name: str | None = None


class LaunchCaptureResponse(BaseModel):
    """Response model for a launched target."""

    target_ident: int
    capture_file_template: str | None
    stdout: str
    stderr: str


class TriggerRequest(BaseModel):
    """Request model for triggering a capture."""

    target_ident: int = Field(ge=0)
    host: str = DEFAULT_HOST
    num_frames: int = Field(DEFAULT_NUM_FRAMES, ge=1)
    timeout_s: int = Field(DEFAULT_TIMEOUT_S, ge=0)


class ThumbnailRequest(BaseModel):
    capture_path: str
    output_path: str


class ThumbnailResponse(BaseModel):
    output_path: str


def create_capture_router(app: IApplication) -> APIRouter:
    """Create capture router."""
    router = APIRouter(prefix="/api/capture", tags=["capture"])

    @router.post("/launch", response_model=LaunchCaptureResponse)
    def launch_capture(request: LaunchCaptureRequest) -> dict:
        """Launch an executable with RenderDoc injected; returns its target ident."""
        try:
            template = None
            if request.capture_template_name:
                template = app.capture_template(request.capture_template_name)
            result = app.launch_capture(
                CaptureLaunchRequest(
                    executable=request.executable,
                    args=request.args,
                    working_dir=request.working_dir,
                    capture_file_template=template,
                )
            )
        except RenderdogError as e:
            raise to_http_exception(e)
        return {
            "target_ident": result.target_ident,
            "capture_file_template": template,
            "stdout": result.stdout,
            "stderr": result.stderr,
        }

    @router.post("/trigger", response_model=TriggerCaptureResponse)
    def trigger_capture(request: TriggerRequest) -> TriggerCaptureResponse:
        """Trigger a capture on a running target and wait for its file."""
        try:
            return app.trigger_capture(TriggerCaptureRequest(**request.model_dump()))
        except RenderdogError as e:
            raise to_http_exception(e)

    @router.post("/thumbnail", response_model=ThumbnailResponse)
    def save_thumbnail(request: ThumbnailRequest) -> dict:
        try:
            output_path = app.save_thumbnail(request.capture_path, request.output_path)
        except RenderdogError as e:
            raise to_http_exception(e)
        return {"output_path": os.fspath(output_path)}

    return router
