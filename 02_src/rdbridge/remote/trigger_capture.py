"""qrenderdoc entry script: trigger a capture on a running target."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(globals().get("__file__") or sys.argv[0])))

import renderdoc as rd  # noqa: E402

from capture_trigger import CaptureTrigger  # noqa: E402
from protocol import run_script  # noqa: E402

STEM = "trigger_capture"
CLIENT_NAME = "rdbridge"


def connect(host, target_ident):
    return rd.CreateTargetControl(host, target_ident, CLIENT_NAME, True)


def handle(request):
    trigger = CaptureTrigger(
        connect,
        new_capture_type=rd.TargetControlMessageType.NewCapture,
        disconnected_type=rd.TargetControlMessageType.Disconnected,
    )
    return trigger.run(
        host=request.get("host") or "localhost",
        target_ident=request["target_ident"],
        num_frames=request.get("num_frames", 1),
        timeout_s=request.get("timeout_s", 60),
    )


run_script(STEM, handle)
