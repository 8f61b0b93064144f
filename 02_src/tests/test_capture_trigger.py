"""Tests for the capture trigger state machine."""

from types import SimpleNamespace

import pytest

from rdbridge.remote.capture_trigger import (
    CaptureTimeout,
    CaptureTrigger,
    TargetConnectionError,
    TriggerState,
)

NEW_CAPTURE = "NewCapture"
DISCONNECTED = "Disconnected"
NOOP = "Noop"


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeTargetControl:
    """Target-control channel replaying a scripted message sequence."""

    def __init__(self, messages=(), connected=True):
        self.messages = list(messages)
        self.connected = connected
        self.triggered = []
        self.shutdown_calls = 0

    def TriggerCapture(self, num_frames):
        self.triggered.append(num_frames)

    def ReceiveMessage(self, progress):
        if self.messages:
            return self.messages.pop(0)
        return SimpleNamespace(type=NOOP)

    def Connected(self):
        return self.connected

    def Shutdown(self):
        self.shutdown_calls += 1


def new_capture(path="/captures/frame_0001.rdc", frame=42, api="Vulkan"):
    return SimpleNamespace(
        type=NEW_CAPTURE,
        newCapture=SimpleNamespace(path=path, frameNumber=frame, api=api),
    )


def make_trigger(control, clock):
    def connect(host, ident):
        connect.calls.append((host, ident))
        return control

    connect.calls = []
    trigger = CaptureTrigger(
        connect,
        new_capture_type=NEW_CAPTURE,
        disconnected_type=DISCONNECTED,
        clock=clock,
        sleep=clock.sleep,
        poll_interval=0.1,
    )
    return trigger, connect


class TestCaptureTrigger:
    """Tests for CaptureTrigger.run()."""

    def test_completes_on_new_capture(self):
        """Test that the first new-capture message ends the wait."""
        clock = FakeClock()
        control = FakeTargetControl([SimpleNamespace(type=NOOP), new_capture()])
        trigger, connect = make_trigger(control, clock)

        result = trigger.run("localhost", 38920, num_frames=2, timeout_s=5)

        assert result == {"capture_path": "/captures/frame_0001.rdc", "frame_number": 42, "api": "Vulkan"}
        assert trigger.state is TriggerState.COMPLETED
        assert connect.calls == [("localhost", 38920)]
        assert control.triggered == [2]
        assert control.shutdown_calls == 1

    def test_times_out_without_capture(self):
        """Test a 1 second deadline with no capture ever arriving."""
        clock = FakeClock()
        control = FakeTargetControl()
        trigger, _ = make_trigger(control, clock)

        with pytest.raises(CaptureTimeout) as exc_info:
            trigger.run("localhost", 38920, num_frames=1, timeout_s=1)

        assert exc_info.value.error_kind == "timeout"
        assert trigger.state is TriggerState.TIMED_OUT
        assert control.shutdown_calls == 1
        assert clock.now >= 1.0

    def test_connect_returns_none(self):
        clock = FakeClock()
        trigger, _ = make_trigger(None, clock)

        with pytest.raises(TargetConnectionError):
            trigger.run("localhost", 1, num_frames=1, timeout_s=1)

        assert trigger.state is TriggerState.FAILED

    def test_connect_raises(self):
        def connect(host, ident):
            raise RuntimeError("refused")

        trigger = CaptureTrigger(connect, new_capture_type=NEW_CAPTURE)

        with pytest.raises(TargetConnectionError, match="refused"):
            trigger.run("remote", 1, num_frames=1, timeout_s=1)

        assert trigger.state is TriggerState.FAILED

    def test_channel_drop_fails(self):
        """Test that a dropped channel fails immediately and still shuts down."""
        clock = FakeClock()
        control = FakeTargetControl(connected=False)
        trigger, _ = make_trigger(control, clock)

        with pytest.raises(TargetConnectionError, match="disconnected"):
            trigger.run("localhost", 1, num_frames=1, timeout_s=10)

        assert trigger.state is TriggerState.FAILED
        assert control.shutdown_calls == 1
        assert clock.sleeps == []

    def test_disconnected_message_fails(self):
        clock = FakeClock()
        control = FakeTargetControl([SimpleNamespace(type=DISCONNECTED)])
        trigger, _ = make_trigger(control, clock)

        with pytest.raises(TargetConnectionError):
            trigger.run("localhost", 1, num_frames=1, timeout_s=10)

        assert control.shutdown_calls == 1

    def test_channel_error_is_wrapped(self):
        clock = FakeClock()
        control = FakeTargetControl()

        def broken(progress):
            raise ValueError("bad message")

        control.ReceiveMessage = broken
        trigger, _ = make_trigger(control, clock)

        with pytest.raises(TargetConnectionError, match="bad message"):
            trigger.run("localhost", 1, num_frames=1, timeout_s=10)

        assert trigger.state is TriggerState.FAILED
        assert control.shutdown_calls == 1
