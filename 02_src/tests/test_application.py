"""Tests for Application."""

import os
from pathlib import Path

import pytest

from rdbridge.app import Application
from rdbridge.config import ARTIFACTS_DIR_ENV, RENDERDOC_DIR_ENV
from rdbridge.errors import InstallationNotFoundError
from rdbridge.installation import RenderDocInstallation
from rdbridge.models import (
    CaptureAndExportRequest,
    CaptureLaunchRequest,
    CommandOutput,
    ExportActionsRequest,
    FindEventsRequest,
)


class RecordingRunner:
    """renderdoccmd stand-in: `capture` exits with a target ident, the rest with 0."""

    def __init__(self, target_ident=38920):
        self.target_ident = target_ident
        self.specs = []

    def __call__(self, spec):
        self.specs.append(spec)
        status = self.target_ident if spec.args[0] == "capture" else 0
        return CommandOutput(status=status, stdout="", stderr="")


@pytest.fixture(autouse=True)
def no_artifacts_override(monkeypatch):
    monkeypatch.delenv(ARTIFACTS_DIR_ENV, raising=False)


@pytest.fixture
def workspace(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def app(workspace, install_root, bridge, fake_remote):
    installation = RenderDocInstallation.from_root_dir(install_root, runner=RecordingRunner())
    fake_remote.on("find_events_json", lambda req: {**req, "total_matches": 0, "truncated": False, "matches": []})
    fake_remote.on(
        "export_actions_jsonl",
        lambda req: {
            "capture_path": req["capture_path"],
            "actions_jsonl_path": os.path.join(req["output_dir"], req["basename"] + ".actions.jsonl"),
            "summary_json_path": os.path.join(req["output_dir"], req["basename"] + ".summary.json"),
            "total_actions": 0,
            "drawcall_actions": 0,
        },
    )
    fake_remote.on("trigger_capture", lambda req: {"capture_path": "/c/x.rdc", "frame_number": 1, "api": "Vulkan"})
    return Application(cwd=workspace, installation=installation, bridge=bridge)


class TestInstallation:
    """Tests for lazy installation detection."""

    def test_detects_from_env(self, install_root, workspace):
        app = Application(cwd=workspace, env={RENDERDOC_DIR_ENV: str(install_root)})
        assert app.installation.root_dir == install_root
        assert app.installation is app.installation

    def test_detection_failure(self, workspace, tmp_path):
        app = Application(cwd=workspace, env={RENDERDOC_DIR_ENV: str(tmp_path / "missing")})

        with pytest.raises(InstallationNotFoundError):
            app.installation

    def test_default_bridge_uses_artifacts_scripts_dir(self, install_root, workspace):
        app = Application(cwd=workspace, installation=RenderDocInstallation.from_root_dir(install_root))
        assert app.bridge.scripts_dir == workspace / "artifacts" / "renderdoc" / "scripts"

    def test_artifacts_dir_override(self, install_root, workspace, monkeypatch):
        monkeypatch.setenv(ARTIFACTS_DIR_ENV, "custom")
        app = Application(cwd=workspace, installation=RenderDocInstallation.from_root_dir(install_root))
        assert app.bridge.scripts_dir == workspace / "custom" / "scripts"


class TestPathResolution:
    """Tests for resolving request paths against the base directory."""

    def test_find_events_resolves_capture(self, app, workspace, fake_remote):
        response = app.find_events(FindEventsRequest(capture_path="caps/a.rdc"))
        assert response.capture_path == os.fspath(workspace / "caps" / "a.rdc")

    def test_absolute_paths_are_kept(self, app, tmp_path, fake_remote):
        capture = tmp_path / "elsewhere" / "a.rdc"
        app.find_events(FindEventsRequest(capture_path=str(capture)))
        assert fake_remote.requests[0]["capture_path"] == os.fspath(capture)

    def test_export_defaults_to_exports_dir(self, app, workspace):
        response = app.export_actions_jsonl(ExportActionsRequest(capture_path="frame.rdc"))

        exports = workspace / "artifacts" / "renderdoc" / "exports"
        assert Path(response.actions_jsonl_path) == exports / "frame.actions.jsonl"
        assert exports.is_dir()

    def test_launch_capture_resolves_paths(self, app, workspace):
        template = app.capture_template("demo")
        app.launch_capture(CaptureLaunchRequest(executable="bin/demo", working_dir="bin", capture_file_template=template))

        args = app.installation.runner.specs[0].args
        assert args == [
            "capture",
            "-d",
            os.fspath(workspace / "bin"),
            "-c",
            os.fspath(workspace / "artifacts" / "renderdoc" / "demo.rdc"),
            os.fspath(workspace / "bin" / "demo"),
        ]
        assert (workspace / "artifacts" / "renderdoc").is_dir()

    def test_save_thumbnail_creates_parent(self, app, workspace):
        output = app.save_thumbnail("a.rdc", "thumbs/a.png")

        assert output == workspace / "thumbs" / "a.png"
        assert output.parent.is_dir()

    def test_capture_and_export(self, app, workspace):
        result = app.capture_and_export_actions(CaptureAndExportRequest(executable="demo"))

        assert result.target_ident == 38920
        exports = workspace / "artifacts" / "renderdoc" / "exports"
        assert Path(result.actions_jsonl_path) == exports / "x.actions.jsonl"
