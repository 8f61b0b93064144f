"""Request/response file protocol for scripts run inside qrenderdoc.

This module is copied next to the bridge scripts and imported by them, so it
must only depend on the standard library.
"""

import json
import os
import traceback

REQUEST_SUFFIX = ".request.json"
RESPONSE_SUFFIX = ".response.json"


def request_path(stem, run_dir="."):
    return os.path.join(run_dir, stem + REQUEST_SUFFIX)


def response_path(stem, run_dir="."):
    return os.path.join(run_dir, stem + RESPONSE_SUFFIX)


def read_request(stem, run_dir="."):
    with open(request_path(stem, run_dir), "r", encoding="utf-8") as f:
        return json.load(f)


def write_response(stem, envelope, run_dir="."):
    """Write the envelope so that readers never observe a partial file."""
    final_path = response_path(stem, run_dir)
    tmp_path = final_path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(envelope, f)
    os.replace(tmp_path, final_path)


def ok_envelope(result):
    return {"ok": True, "result": result, "error": None}


def error_envelope(message, kind=None):
    envelope = {"ok": False, "result": None, "error": message or "unknown error"}
    if kind:
        envelope["error_kind"] = kind
    return envelope


def run_script(stem, handler, run_dir="."):
    """Read the request, call handler(request) and write the envelope.

    Any exception raised by the handler becomes an ok=false envelope; an
    `error_kind` attribute on the exception is forwarded to the host.
    """
    try:
        request = read_request(stem, run_dir)
        envelope = ok_envelope(handler(request))
    except Exception as e:
        traceback.print_exc()
        envelope = error_envelope(str(e) or type(e).__name__, getattr(e, "error_kind", None))
    write_response(stem, envelope, run_dir)
    return envelope
