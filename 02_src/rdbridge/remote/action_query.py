"""Action tree query and export engine.

Runs inside qrenderdoc against a capture that is already open there, and
in-process in tests. Standard library only; no annotations so it also loads
on the older interpreters bundled with RenderDoc.

The traversal is preorder over an explicit worklist, so marker nesting depth
is bounded by memory rather than by the recursion limit.
"""

import json
import os

# RenderDoc ActionFlags, in the order flag names are reported.
ACTION_FLAGS = (
    ("Clear", 0x0001),
    ("Drawcall", 0x0002),
    ("Dispatch", 0x0004),
    ("MeshDispatch", 0x0008),
    ("CmdList", 0x0010),
    ("SetMarker", 0x0020),
    ("PushMarker", 0x0040),
    ("PopMarker", 0x0080),
    ("Present", 0x0100),
    ("MultiAction", 0x0200),
    ("Copy", 0x0400),
    ("Resolve", 0x0800),
    ("GenMips", 0x1000),
    ("PassBoundary", 0x2000),
    ("DispatchRay", 0x4000),
    ("BuildAccStruct", 0x8000),
    ("Indexed", 0x10000),
    ("Instanced", 0x20000),
    ("Auto", 0x40000),
    ("Indirect", 0x80000),
    ("ClearColor", 0x100000),
    ("ClearDepthStencil", 0x200000),
    ("BeginPass", 0x400000),
    ("EndPass", 0x800000),
    ("CommandBufferBoundary", 0x1000000),
)
FLAG_BITS = dict(ACTION_FLAGS)

PUSH_MARKER = FLAG_BITS["PushMarker"]
DRAWCALL_LIKE = (
    FLAG_BITS["Drawcall"] | FLAG_BITS["Dispatch"] | FLAG_BITS["MeshDispatch"] | FLAG_BITS["DispatchRay"]
)

MARKER_SEPARATOR = "/"


class ActionNode(object):
    """One action of the capture trace. Children are ordered."""

    __slots__ = ("event_id", "name", "flags", "children")

    def __init__(self, event_id, name, flags=0, children=None):
        self.event_id = event_id
        self.name = name
        self.flags = flags
        self.children = list(children) if children else []

    def __repr__(self):
        return "ActionNode(%d, %r, 0x%x, %d children)" % (
            self.event_id,
            self.name,
            self.flags,
            len(self.children),
        )


def decode_flags(flags):
    return [name for name, bit in ACTION_FLAGS if flags & bit]


def is_drawcall_like(flags):
    return bool(flags & DRAWCALL_LIKE)


def build_tree(root_actions, name_of):
    """Materialize RenderDoc ActionDescription objects as ActionNode trees.

    name_of(action) returns the display name, usually
    `lambda a: a.GetName(structured_file)`.
    """
    roots = []
    stack = [(action, roots) for action in reversed(list(root_actions))]
    while stack:
        action, siblings = stack.pop()
        node = ActionNode(int(action.eventId), str(name_of(action)), int(action.flags))
        siblings.append(node)
        for child in reversed(list(action.children)):
            stack.append((child, node.children))
    return roots


def _optional_int(value):
    return None if value is None else int(value)


class ActionQuery(object):
    """Scope and emission predicates over the action tree."""

    def __init__(
        self,
        only_drawcalls=False,
        marker_prefix=None,
        event_id_min=None,
        event_id_max=None,
        name_contains=None,
        marker_contains=None,
        case_sensitive=False,
    ):
        if marker_prefix is not None:
            marker_prefix = marker_prefix.strip(MARKER_SEPARATOR) or None
        self.only_drawcalls = bool(only_drawcalls)
        self.marker_prefix = marker_prefix
        self.event_id_min = _optional_int(event_id_min)
        self.event_id_max = _optional_int(event_id_max)
        self.case_sensitive = bool(case_sensitive)
        self.name_contains = None if name_contains is None else self.fold(name_contains)
        self.marker_contains = None if marker_contains is None else self.fold(marker_contains)

    @classmethod
    def from_request(cls, request):
        return cls(
            only_drawcalls=request.get("only_drawcalls", False),
            marker_prefix=request.get("marker_prefix"),
            event_id_min=request.get("event_id_min"),
            event_id_max=request.get("event_id_max"),
            name_contains=request.get("name_contains"),
            marker_contains=request.get("marker_contains"),
            case_sensitive=request.get("case_sensitive", False),
        )

    def fold(self, text):
        return text if self.case_sensitive else text.lower()

    def in_scope(self, effective_path):
        if self.marker_prefix is None:
            return True
        joined = MARKER_SEPARATOR.join(effective_path)
        return joined == self.marker_prefix or joined.startswith(self.marker_prefix + MARKER_SEPARATOR)

    def accepts(self, node, marker_path):
        if self.only_drawcalls and not is_drawcall_like(node.flags):
            return False
        if self.event_id_min is not None and node.event_id < self.event_id_min:
            return False
        if self.event_id_max is not None and node.event_id > self.event_id_max:
            return False
        if self.name_contains is not None and self.name_contains not in self.fold(node.name):
            return False
        if self.marker_contains is not None:
            if self.marker_contains not in self.fold(MARKER_SEPARATOR.join(marker_path)):
                return False
        return True


def iter_actions(roots):
    """Yield (node, depth, parent_event_id, marker_path) in preorder.

    marker_path is the tuple of push-marker names enclosing the node and
    never includes the node's own name.
    """
    stack = [(node, 0, None, ()) for node in reversed(roots)]
    while stack:
        node, depth, parent_event_id, marker_path = stack.pop()
        yield node, depth, parent_event_id, marker_path

        child_path = marker_path
        if node.flags & PUSH_MARKER:
            child_path = marker_path + (node.name,)
        for child in reversed(node.children):
            stack.append((child, depth + 1, node.event_id, child_path))


def make_record(node, depth, parent_event_id, marker_path):
    return {
        "event_id": node.event_id,
        "parent_event_id": parent_event_id,
        "depth": depth,
        "name": node.name,
        "flags": node.flags,
        "flags_names": decode_flags(node.flags),
        "marker_path": list(marker_path),
        "num_children": len(node.children),
    }


def iter_matches(roots, query):
    """Yield a record for every action accepted by query, in traversal order."""
    for node, depth, parent_event_id, marker_path in iter_actions(roots):
        effective_path = marker_path
        if node.flags & PUSH_MARKER:
            effective_path = marker_path + (node.name,)
        if not query.in_scope(effective_path):
            continue
        if query.accepts(node, marker_path):
            yield make_record(node, depth, parent_event_id, marker_path)


def find_events(roots, query, max_results=None):
    """Collect up to max_results matches.

    The scan always runs to completion so that total_matches and the
    first/last event ids describe every match, not only the kept ones.
    """
    if max_results is not None:
        max_results = max(0, int(max_results))

    matches = []
    total = 0
    first_event_id = None
    last_event_id = None
    for record in iter_matches(roots, query):
        total += 1
        event_id = record["event_id"]
        first_event_id = event_id if first_event_id is None else min(first_event_id, event_id)
        last_event_id = event_id if last_event_id is None else max(last_event_id, event_id)
        if max_results is None or len(matches) < max_results:
            record["marker_path_joined"] = MARKER_SEPARATOR.join(record["marker_path"])
            matches.append(record)

    return {
        "total_matches": total,
        "truncated": len(matches) < total,
        "first_event_id": first_event_id,
        "last_event_id": last_event_id,
        "matches": matches,
    }


def export_actions_jsonl(roots, query, output_dir, basename, capture_path, api):
    """Stream every match to <basename>.actions.jsonl and write the summary."""
    os.makedirs(output_dir, exist_ok=True)

    actions_path = os.path.join(output_dir, basename + ".actions.jsonl")
    summary_path = os.path.join(output_dir, basename + ".summary.json")

    total_actions = 0
    drawcall_actions = 0
    with open(actions_path, "w", encoding="utf-8", newline="\n") as f:
        for record in iter_matches(roots, query):
            f.write(json.dumps(record, ensure_ascii=False))
            f.write("\n")
            total_actions += 1
            if is_drawcall_like(record["flags"]):
                drawcall_actions += 1

    summary = {
        "capture_path": capture_path,
        "api": api,
        "total_actions": total_actions,
        "drawcall_actions": drawcall_actions,
        "actions_jsonl_path": actions_path,
    }
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False)

    return {
        "capture_path": capture_path,
        "actions_jsonl_path": actions_path,
        "summary_json_path": summary_path,
        "total_actions": total_actions,
        "drawcall_actions": drawcall_actions,
    }
