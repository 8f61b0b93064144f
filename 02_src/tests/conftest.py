"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


PUSH_MARKER = 0x0040
DRAWCALL = 0x0002


@pytest.fixture
def pass_tree():
    """Pass1 marker holding a draw and a nested Sub marker with another draw.

    Pass1 (1, PushMarker)
      Draw B (2, Drawcall)
      Sub (3, PushMarker)
        Draw D (4, Drawcall)
    """
    from rdbridge.remote.action_query import ActionNode

    d = ActionNode(4, "Draw D", DRAWCALL)
    c = ActionNode(3, "Sub", PUSH_MARKER, [d])
    b = ActionNode(2, "Draw B", DRAWCALL)
    a = ActionNode(1, "Pass1", PUSH_MARKER, [b, c])
    return [a]


class FakeRemote:
    """Command runner that plays qrenderdoc: runs a handler per script stem.

    Uses the same request/response protocol the bundled scripts use.
    """

    def __init__(self):
        self.handlers = {}
        self.calls = []
        self.requests = []
        self.status = 0

    def on(self, stem, handler):
        self.handlers[stem] = handler
        return self

    def __call__(self, spec):
        from rdbridge.models import CommandOutput
        from rdbridge.remote.protocol import read_request, run_script

        self.calls.append(spec)
        stem = Path(spec.args[-1]).stem
        run_dir = os.fspath(spec.cwd)
        self.requests.append(read_request(stem, run_dir))
        if stem in self.handlers:
            run_script(stem, self.handlers[stem], run_dir)
        return CommandOutput(status=self.status, stdout="", stderr="")


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def fake_interpreter(tmp_path):
    """Stand-in qrenderdoc path; the fake runner never executes it."""
    path = tmp_path / "bin" / "qrenderdoc"
    path.parent.mkdir(parents=True)
    path.write_text("")
    return path


@pytest.fixture
def bridge(tmp_path, fake_interpreter, fake_remote):
    """ScriptingBridge wired to the fake remote side."""
    from rdbridge.bridge import ScriptingBridge

    return ScriptingBridge(fake_interpreter, tmp_path / "scripts", runner=fake_remote)


@pytest.fixture
def install_root(tmp_path):
    """Directory laid out like a RenderDoc install with both executables."""
    root = tmp_path / "RenderDoc"
    root.mkdir()
    suffix = ".exe" if os.name == "nt" else ""
    for stem in ("qrenderdoc", "renderdoccmd"):
        (root / f"{stem}{suffix}").write_text("")
    return root
