ERR_INVALID_INPUT = "INVALID_INPUT"
ERR_CAPTURE_FAILED = "CAPTURE_FAILED"
ERR_CAMERA_NOT_OPEN = "CAMERA_NOT_OPEN"
ERR_BUSY = "BUSY"
ERR_UNKNOWN = "UNKNOWN"


class GateLogError(Exception):
    code = ERR_UNKNOWN


class InvalidInput(GateLogError):
    """Selected file is not an image (or is empty)."""
    code = ERR_INVALID_INPUT


class CaptureError(GateLogError):
    """Camera frame could not be captured or encoded."""
    code = ERR_CAPTURE_FAILED

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class BackendFailure(GateLogError):
    """Raised inside a recognizer; never leaves the adapter."""


class PipelineBusy(GateLogError):
    code = ERR_BUSY
