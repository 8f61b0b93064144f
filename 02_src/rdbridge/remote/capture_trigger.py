"""Capture trigger state machine over a RenderDoc target-control channel.

Standard library only: copied next to the bridge scripts and run inside
qrenderdoc.
"""

import enum
import time


class TriggerState(enum.Enum):
    CONNECTING = "connecting"
    WAITING_FOR_CAPTURE = "waiting_for_capture"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class TargetConnectionError(Exception):
    error_kind = "connection"


class CaptureTimeout(Exception):
    error_kind = "timeout"


class CaptureTrigger(object):
    """Trigger an N-frame capture and wait for the resulting file.

    connect(host, target_ident) returns a target-control object exposing
    TriggerCapture(n), ReceiveMessage(progress), Connected() and Shutdown(),
    or None when the target cannot be reached. The channel is shut down
    exactly once on every exit path.
    """

    def __init__(
        self,
        connect,
        new_capture_type,
        disconnected_type=None,
        clock=time.monotonic,
        sleep=time.sleep,
        poll_interval=0.1,
    ):
        self._connect = connect
        self._new_capture_type = new_capture_type
        self._disconnected_type = disconnected_type
        self._clock = clock
        self._sleep = sleep
        self._poll_interval = poll_interval
        self.state = TriggerState.CONNECTING

    def run(self, host, target_ident, num_frames, timeout_s):
        self.state = TriggerState.CONNECTING
        deadline = self._clock() + float(timeout_s)

        try:
            control = self._connect(host, int(target_ident))
        except Exception as e:
            self.state = TriggerState.FAILED
            raise TargetConnectionError("failed to connect to target %s:%s: %s" % (host, target_ident, e)) from e
        if control is None:
            self.state = TriggerState.FAILED
            raise TargetConnectionError("failed to connect to target %s:%s" % (host, target_ident))

        try:
            return self._wait_for_capture(control, host, target_ident, int(num_frames), deadline, timeout_s)
        finally:
            control.Shutdown()

    def _wait_for_capture(self, control, host, target_ident, num_frames, deadline, timeout_s):
        try:
            control.TriggerCapture(num_frames)
            self.state = TriggerState.WAITING_FOR_CAPTURE

            while True:
                if not control.Connected():
                    raise TargetConnectionError("target %s:%s disconnected" % (host, target_ident))

                message = control.ReceiveMessage(None)
                kind = getattr(message, "type", None)
                if kind == self._new_capture_type:
                    capture = message.newCapture
                    self.state = TriggerState.COMPLETED
                    return {
                        "capture_path": str(capture.path),
                        "frame_number": int(capture.frameNumber),
                        "api": str(capture.api),
                    }
                if self._disconnected_type is not None and kind == self._disconnected_type:
                    raise TargetConnectionError("target %s:%s disconnected" % (host, target_ident))

                if self._clock() >= deadline:
                    self.state = TriggerState.TIMED_OUT
                    raise CaptureTimeout("timed out after %ss waiting for a new capture" % timeout_s)
                self._sleep(self._poll_interval)
        except CaptureTimeout:
            raise
        except TargetConnectionError:
            self.state = TriggerState.FAILED
            raise
        except Exception as e:
            self.state = TriggerState.FAILED
            raise TargetConnectionError("target control error: %s" % e) from e
