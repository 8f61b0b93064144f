"""Tests for JSON logging."""

import json
import logging
import sys

import pytest

from rdbridge.logging_config import JSONFormatter, setup_logging


def make_record(msg="Running bridge script %s", args=("find_events_json.py",), exc_info=None, **extra):
    record = logging.LogRecord("rdbridge.bridge.scripting", logging.INFO, __file__, 10, msg, args, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_run_fields_are_top_level(self):
        record = make_record(context={"run_dir": "/s/runs/x-1-2-0", "error_kind": "timeout", "scripts_dir": "/s"})

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Running bridge script find_events_json.py"
        assert data["run_dir"] == "/s/runs/x-1-2-0"
        assert data["error_kind"] == "timeout"
        assert data["context"] == {"scripts_dir": "/s"}

    def test_context_of_only_run_fields_is_dropped(self):
        record = make_record(context={"program": "/rd/renderdoccmd", "target_ident": 38920})

        data = json.loads(JSONFormatter().format(record))

        assert data["program"] == "/rd/renderdoccmd"
        assert data["target_ident"] == 38920
        assert "context" not in data

    def test_caller_context_is_not_mutated(self):
        context = {"run_dir": "/r", "platform": "linux"}
        JSONFormatter().format(make_record(context=context))
        assert context == {"run_dir": "/r", "platform": "linux"}

    def test_no_context(self):
        data = json.loads(JSONFormatter().format(make_record()))
        assert "context" not in data
        assert "run_dir" not in data

    def test_exception_type(self):
        try:
            raise FileNotFoundError("qrenderdoc")
        except FileNotFoundError:
            record = make_record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert data["error_type"] == "FileNotFoundError"
        assert "qrenderdoc" in data["exception"]

    def test_non_json_values_are_stringified(self, tmp_path):
        data = json.loads(JSONFormatter().format(make_record(context={"cwd": tmp_path})))
        assert data["context"]["cwd"] == str(tmp_path)


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_log_file_from_env(self, tmp_path, monkeypatch):
        log_file = tmp_path / "logs" / "nested" / "rd.log"
        monkeypatch.setenv("RDBRIDGE_LOG_FILE", str(log_file))

        setup_logging(log_level="debug")
        logging.getLogger("rdbridge.test").debug("hello", extra={"context": {"run_dir": "/r"}})
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["message"] == "hello"
        assert line["run_dir"] == "/r"
        assert logging.getLogger().level == logging.DEBUG
