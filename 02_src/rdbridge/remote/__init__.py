"""Modules executed inside qrenderdoc's embedded interpreter.

Everything here is standard library only. The bridge copies these files into
its scripts directory, where they import each other as top-level modules.
"""

SUPPORT_MODULES = (
    "protocol.py",
    "action_query.py",
    "capture_trigger.py",
    "capture_session.py",
)

FIND_EVENTS_SCRIPT = "find_events_json.py"
EXPORT_ACTIONS_SCRIPT = "export_actions_jsonl.py"
TRIGGER_CAPTURE_SCRIPT = "trigger_capture.py"

ENTRY_SCRIPTS = (FIND_EVENTS_SCRIPT, EXPORT_ACTIONS_SCRIPT, TRIGGER_CAPTURE_SCRIPT)
