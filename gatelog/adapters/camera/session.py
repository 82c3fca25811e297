"""
Camera session lifecycle: CLOSED -> OPEN -> CAPTURING -> CLOSED.

The session owns the device handle while OPEN or CAPTURING. close() is the
single teardown path and always releases the handle, whether it is called
manually, after a capture, or on shutdown.
"""
from enum import Enum

from gatelog.adapters.camera.base import CameraAdapter
from gatelog.orchestrator import errors
from gatelog.orchestrator.errors import CaptureError


class SessionState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    CAPTURING = "capturing"


class CameraSession:
    def __init__(self, camera: CameraAdapter, status_store):
        self.camera = camera
        self.status = status_store
        self._state = SessionState.CLOSED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state in (SessionState.OPEN, SessionState.CAPTURING)

    def _set_state(self, state: SessionState):
        self._state = state
        self.status.camera_state = state.value

    def open(self) -> "CameraSession":
        if self.is_open:
            self.close()
        if not self.camera.open() or not self.camera.is_opened():
            self.camera.release()
            raise CaptureError("could not access camera", code=errors.ERR_CAMERA_NOT_OPEN)
        self._set_state(SessionState.OPEN)
        self.status.log("camera_session: open")
        return self

    def grab_frame(self):
        """Read the current frame. Leaves the session in CAPTURING; the caller closes it."""
        if not self.is_open:
            raise CaptureError("camera session is not open", code=errors.ERR_CAMERA_NOT_OPEN)
        self._set_state(SessionState.CAPTURING)
        frame = self.camera.read_frame()
        if frame is None:
            raise CaptureError("no frame available from camera")
        h, w = frame.shape[:2]
        if h == 0 or w == 0:
            raise CaptureError("camera stream not ready (zero-sized frame)")
        return frame

    def close(self):
        if self._state == SessionState.CLOSED:
            return
        try:
            self.camera.release()
        except Exception as e:
            self.status.log(f"camera_session: release error {type(e).__name__}: {e}")
        finally:
            self._set_state(SessionState.CLOSED)
            self.status.log("camera_session: closed")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
