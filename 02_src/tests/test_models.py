"""Tests for data models."""

import pytest

from rdbridge.errors import CaptureTimeoutError, DomainError, ProtocolError
from rdbridge.models import (
    Envelope,
    ExportActionsResponse,
    FindEventsResponse,
    FoundEvent,
    TriggerCaptureResponse,
)


class TestEnvelope:
    """Tests for the response envelope."""

    def test_ok_envelope_unwraps_result(self):
        envelope = Envelope.from_dict({"ok": True, "result": {"x": 1}, "error": None})
        assert envelope.unwrap() == {"x": 1}

    def test_ok_without_result_is_protocol_error(self):
        """Test that ok=true with a null result is a broken contract."""
        envelope = Envelope.from_dict({"ok": True, "result": None, "error": None})

        with pytest.raises(ProtocolError, match="missing result"):
            envelope.unwrap()

    def test_error_message_is_verbatim(self):
        envelope = Envelope.from_dict({"ok": False, "result": None, "error": "couldn't open capture"})

        with pytest.raises(DomainError) as exc_info:
            envelope.unwrap()

        assert str(exc_info.value) == "couldn't open capture"

    def test_error_without_message(self):
        envelope = Envelope.from_dict({"ok": False})

        with pytest.raises(DomainError, match="unknown error"):
            envelope.unwrap()

    def test_timeout_kind_raises_timeout(self):
        """Test that error_kind=timeout maps to CaptureTimeoutError."""
        envelope = Envelope.from_dict(
            {"ok": False, "result": None, "error": "timed out", "error_kind": "timeout"}
        )

        with pytest.raises(CaptureTimeoutError):
            envelope.unwrap()

        with pytest.raises(TimeoutError):
            envelope.unwrap()

    @pytest.mark.parametrize("data", [[], "ok", {"result": 1}, {"ok": "yes"}])
    def test_malformed_shape(self, data):
        with pytest.raises(ProtocolError):
            Envelope.from_dict(data)


class TestResultParsing:
    """Tests for parsing bridge results into typed responses."""

    def test_found_event_joins_marker_path_when_absent(self):
        event = FoundEvent.from_dict(
            {
                "event_id": 4,
                "parent_event_id": 3,
                "depth": 2,
                "name": "Draw D",
                "flags": 2,
                "flags_names": ["Drawcall"],
                "marker_path": ["Pass1", "Sub"],
                "num_children": 0,
            }
        )

        assert event.marker_path_joined == "Pass1/Sub"
        assert event.parent_event_id == 3

    def test_find_events_response(self):
        response = FindEventsResponse.from_dict(
            {
                "capture_path": "/tmp/a.rdc",
                "total_matches": 3,
                "truncated": True,
                "first_event_id": 2,
                "last_event_id": 9,
                "matches": [{"event_id": 2, "name": "Draw", "flags": 2}],
            }
        )

        assert response.truncated is True
        assert [m.event_id for m in response.matches] == [2]
        assert response.matches[0].marker_path == []

    def test_find_events_response_requires_totals(self):
        with pytest.raises(KeyError):
            FindEventsResponse.from_dict({"capture_path": "/tmp/a.rdc"})

    def test_export_and_trigger_responses(self):
        export = ExportActionsResponse.from_dict(
            {
                "capture_path": "a.rdc",
                "actions_jsonl_path": "out/a.actions.jsonl",
                "summary_json_path": "out/a.summary.json",
                "total_actions": 10,
                "drawcall_actions": 4,
            }
        )
        trigger = TriggerCaptureResponse.from_dict(
            {"capture_path": "/c/frame.rdc", "frame_number": "12", "api": "Vulkan"}
        )

        assert export.drawcall_actions == 4
        assert trigger.frame_number == 12
