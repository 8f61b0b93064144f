"""Action tree query and export data models."""

from dataclasses import dataclass, field


@dataclass
class QueryFilter:
    """Predicates shared by find and export requests."""

    only_drawcalls: bool = False
    marker_prefix: str | None = None
    event_id_min: int | None = None
    event_id_max: int | None = None
    name_contains: str | None = None
    marker_contains: str | None = None
    case_sensitive: bool = False


@dataclass
class FindEventsRequest(QueryFilter):
    """Find matching actions in a capture, materializing at most max_results."""

    capture_path: str = ""
    max_results: int | None = None


@dataclass
class ExportActionsRequest(QueryFilter):
    """Export matching actions of a capture to JSONL plus a summary file.

    An empty basename means the stem of the capture file.
    """

    capture_path: str = ""
    output_dir: str = ""
    basename: str = ""


@dataclass
class FoundEvent:
    """One emitted action. marker_path is the container path of the action."""

    event_id: int
    parent_event_id: int | None
    depth: int
    name: str
    flags: int
    flags_names: list[str] = field(default_factory=list)
    marker_path: list[str] = field(default_factory=list)
    marker_path_joined: str = ""
    num_children: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "FoundEvent":
        marker_path = [str(m) for m in data.get("marker_path") or []]
        return cls(
            event_id=int(data["event_id"]),
            parent_event_id=data.get("parent_event_id"),
            depth=int(data.get("depth", 0)),
            name=str(data.get("name", "")),
            flags=int(data.get("flags", 0)),
            flags_names=[str(n) for n in data.get("flags_names") or []],
            marker_path=marker_path,
            marker_path_joined=str(data.get("marker_path_joined", "/".join(marker_path))),
            num_children=int(data.get("num_children", 0)),
        )


@dataclass
class FindEventsResponse:
    """Matches plus totals computed over the whole traversal."""

    capture_path: str
    total_matches: int
    truncated: bool
    first_event_id: int | None
    last_event_id: int | None
    matches: list[FoundEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "FindEventsResponse":
        return cls(
            capture_path=str(data["capture_path"]),
            total_matches=int(data["total_matches"]),
            truncated=bool(data["truncated"]),
            first_event_id=data.get("first_event_id"),
            last_event_id=data.get("last_event_id"),
            matches=[FoundEvent.from_dict(m) for m in data.get("matches") or []],
        )


@dataclass
class ExportActionsResponse:
    """Export summary: capture identity, aggregate counts, output paths."""

    capture_path: str
    actions_jsonl_path: str
    summary_json_path: str
    total_actions: int
    drawcall_actions: int

    @classmethod
    def from_dict(cls, data: dict) -> "ExportActionsResponse":
        return cls(
            capture_path=str(data["capture_path"]),
            actions_jsonl_path=str(data["actions_jsonl_path"]),
            summary_json_path=str(data["summary_json_path"]),
            total_actions=int(data["total_actions"]),
            drawcall_actions=int(data["drawcall_actions"]),
        )
