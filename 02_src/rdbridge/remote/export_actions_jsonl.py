"""qrenderdoc entry script: export matching actions to JSONL plus a summary."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(globals().get("__file__") or sys.argv[0])))

import renderdoc as rd  # noqa: E402

from action_query import ActionQuery, build_tree, export_actions_jsonl  # noqa: E402
from capture_session import CaptureSession  # noqa: E402
from protocol import run_script  # noqa: E402

STEM = "export_actions_jsonl"


def handle(request):
    capture_path = request["capture_path"]
    query = ActionQuery.from_request(request)
    with CaptureSession(rd, capture_path) as session:
        roots = build_tree(*session.root_actions())
        api = session.api_name()
    return export_actions_jsonl(
        roots,
        query,
        output_dir=request["output_dir"],
        basename=request["basename"],
        capture_path=capture_path,
        api=api,
    )


run_script(STEM, handle)
