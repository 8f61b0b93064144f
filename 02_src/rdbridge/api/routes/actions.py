"""Action tree API routes."""

from dataclasses import asdict

from pydantic import BaseModel, Field
from fastapi import APIRouter

from ...app import IApplication
from ...config import DEFAULT_MAX_RESULTS
from ...errors import RenderdogError
from ...models import ExportActionsRequest, ExportActionsResponse, FindEventsRequest
from ..errors import to_http_exception


class ActionFilterModel(BaseModel):
    """Filter fields shared by find and export."""

    only_drawcalls: bool = False
    marker_prefix: str | None = None
    event_id_min: int | None = Field(None, ge=0)
    event_id_max: int | None = Field(None, ge=0)
    name_contains: str | None = None
    marker_contains: str | None = None
    case_sensitive: bool = False


class FindRequest(ActionFilterModel):
    capture_path: str
    max_results: int | None = Field(DEFAULT_MAX_RESULTS, ge=0)


class FoundEventModel(BaseModel):
    event_id: int
    parent_event_id: int | None
    depth: int
    name: str
    flags: int
    flags_names: list[str]
    marker_path: list[str]
    marker_path_joined: str
    num_children: int


class FindResponse(BaseModel):
    """Response model for find; totals cover the whole traversal."""

    capture_path: str
    total_matches: int
    truncated: bool
    first_event_id: int | None
    last_event_id: int | None
    matches: list[FoundEventModel]


class ExportRequest(ActionFilterModel):
    capture_path: str
    output_dir: str | None = None
    basename: str | None = None


def create_actions_router(app: IApplication) -> APIRouter:
    """Create actions router."""
    router = APIRouter(prefix="/api/actions", tags=["actions"])

    @router.post("/find", response_model=FindResponse)
    def find_events(request: FindRequest) -> dict:
        """Find matching actions (event id plus marker path) in a capture."""
        try:
            response = app.find_events(FindEventsRequest(**request.model_dump()))
        except RenderdogError as e:
            raise to_http_exception(e)
        return asdict(response)

    @router.post("/export", response_model=ExportActionsResponse)
    def export_actions(request: ExportRequest) -> ExportActionsResponse:
        """Export matching actions to JSONL plus a summary file."""
        data = request.model_dump()
        data["output_dir"] = data["output_dir"] or ""
        data["basename"] = data["basename"] or ""
        try:
            return app.export_actions_jsonl(ExportActionsRequest(**data))
        except RenderdogError as e:
            raise to_http_exception(e)

    return router
