"""qrenderdoc entry script: find actions matching a query."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(globals().get("__file__") or sys.argv[0])))

import renderdoc as rd  # noqa: E402

from action_query import ActionQuery, build_tree, find_events  # noqa: E402
from capture_session import CaptureSession  # noqa: E402
from protocol import run_script  # noqa: E402

STEM = "find_events_json"


def handle(request):
    capture_path = request["capture_path"]
    query = ActionQuery.from_request(request)
    with CaptureSession(rd, capture_path) as session:
        roots = build_tree(*session.root_actions())
    result = find_events(roots, query, request.get("max_results"))
    result["capture_path"] = capture_path
    return result


run_script(STEM, handle)
