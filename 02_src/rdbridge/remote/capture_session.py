"""Open a capture for read-only inspection inside qrenderdoc."""


def _succeeded(rd):
    # ResultCode replaced ReplayStatus in RenderDoc 1.25.
    codes = getattr(rd, "ResultCode", None) or getattr(rd, "ReplayStatus")
    return codes.Succeeded


class CaptureSession(object):
    """Context manager yielding itself with an open replay controller."""

    def __init__(self, rd, capture_path):
        self._rd = rd
        self.capture_path = capture_path
        self._cap = None
        self.controller = None

    def __enter__(self):
        rd = self._rd
        self._cap = rd.OpenCaptureFile()
        try:
            result = self._cap.OpenFile(self.capture_path, "", None)
            if result != _succeeded(rd):
                raise RuntimeError("couldn't open capture file %s: %s" % (self.capture_path, result))
            if self._cap.LocalReplaySupport() != rd.ReplaySupport.Supported:
                raise RuntimeError("capture %s cannot be replayed on this machine" % self.capture_path)
            result, self.controller = self._cap.OpenCapture(rd.ReplayOptions(), None)
            if result != _succeeded(rd):
                raise RuntimeError("couldn't initialise replay of %s: %s" % (self.capture_path, result))
        except Exception:
            self._cap.Shutdown()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.controller is not None:
            self.controller.Shutdown()
        self._cap.Shutdown()
        return False

    def api_name(self):
        pipeline_type = self.controller.GetAPIProperties().pipelineType
        return getattr(pipeline_type, "name", str(pipeline_type))

    def root_actions(self):
        """Root ActionDescription objects and a name_of(action) function."""
        structured_file = self.controller.GetStructuredFile()
        return self.controller.GetRootActions(), lambda a: a.GetName(structured_file)
