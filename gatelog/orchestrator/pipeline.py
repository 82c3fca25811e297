import threading
import time
from contextlib import contextmanager
from typing import Callable, Optional, Sequence

from gatelog.adapters.camera.base import CameraAdapter
from gatelog.adapters.camera.session import CameraSession
from gatelog.adapters.ocr.base import OCRAdapter
from gatelog.orchestrator import acquisition, errors
from gatelog.orchestrator.contracts import (
    Backend, ImageBlob, PipelineState, PlateDetected, PlateNotFound, RecognitionResult,
)
from gatelog.orchestrator.errors import CaptureError, PipelineBusy
from gatelog.orchestrator.plate_patterns import PLATE_PATTERNS, PlatePattern, extract_plate

OnDetected = Callable[[str], None]


class PlatePipeline:
    """
    Image -> plate text. Recognizers are tried in order; each one that accepts
    the image runs exactly once until one returns text. That text goes to the
    extractor. Recognizer failures never surface: they are logged and count as
    "no text". Only file/camera precondition errors are raised to the caller.
    """

    def __init__(self, recognizers: Sequence[OCRAdapter], status_store,
                 camera: CameraAdapter | None = None,
                 patterns: tuple[PlatePattern, ...] = PLATE_PATTERNS):
        self.recognizers = list(recognizers)
        self.status = status_store
        self.camera = camera
        self.patterns = patterns
        self.state = PipelineState.IDLE
        self._session: CameraSession | None = None
        self._lock = threading.Lock()

    # ── detection ──────────────────────────────────────────────────────────

    def detect_plate(self, image: ImageBlob) -> RecognitionResult:
        with self._busy():
            return self._recognize(image)

    def run_detection(self, image: ImageBlob, on_detected: Optional[OnDetected] = None) -> RecognitionResult:
        """Detect and invoke on_detected(plate) on success."""
        result = self.detect_plate(image)
        self._notify(result, on_detected)
        return result

    def detect_file(self, filename: str, content_type: str, data: bytes,
                    on_detected: Optional[OnDetected] = None) -> RecognitionResult:
        """Validate an uploaded file, store its preview, then detect. Raises InvalidInput."""
        with self._busy():
            self._set_state(PipelineState.ACQUIRING)
            blob, preview = acquisition.from_file(filename, content_type, data)
            self.status.last_preview = preview
            result = self._recognize(blob)
        self._notify(result, on_detected)
        return result

    def _recognize(self, image: ImageBlob) -> RecognitionResult:
        t0 = time.time()
        text: str | None = None
        source: Backend | None = None

        for rec in self.recognizers:
            if not rec.accepts(image):
                self.status.log(f"pipeline: skip {rec.name} (blob not file-backed)")
                continue
            self._set_state(
                PipelineState.RECOGNIZING_PRIMARY if rec.backend == Backend.PRIMARY
                else PipelineState.RECOGNIZING_FALLBACK
            )
            self.status.log(f"pipeline: {rec.name}.recognize")
            try:
                text = rec.recognize(image)
            except Exception as e:
                self.status.log(f"pipeline: {rec.name} raised {type(e).__name__}: {e}")
                text = None
            if text and text.strip():
                source = rec.backend
                break
            text = None
            self.status.log(f"pipeline: {rec.name} returned no text")

        self._set_state(PipelineState.EXTRACTING)
        plate = extract_plate(text, self.patterns) if text else None
        result: RecognitionResult = PlateDetected(text=plate, source=source) if plate else PlateNotFound()

        self._set_state(PipelineState.DONE)
        dt = int((time.time() - t0) * 1000)
        if isinstance(result, PlateDetected):
            self.status.log(f"pipeline: plate={result.text} source={result.source.value} dt={dt}ms")
        else:
            self.status.log(f"pipeline: no plate detected dt={dt}ms")
        self.status.last_result = result
        return result

    def _notify(self, result: RecognitionResult, on_detected: Optional[OnDetected]):
        if isinstance(result, PlateDetected):
            if on_detected is not None:
                on_detected(result.text)
        else:
            self.status.log("notice: no vehicle number found in the image")

    # ── camera ────────────────────────────────────────────────────────────

    def open_camera(self) -> CameraSession:
        """Start a fresh stream, stopping any previous one. Raises CaptureError or PipelineBusy."""
        if self.camera is None:
            raise CaptureError("no camera configured", code=errors.ERR_CAMERA_NOT_OPEN)
        with self._exclusive():
            self._close_session()
            session = CameraSession(self.camera, self.status)
            session.open()
            self._session = session
        return session

    def close_camera(self):
        with self._exclusive():
            self._close_session()

    @property
    def camera_open(self) -> bool:
        return self._session is not None and self._session.is_open

    def capture_and_detect(self, on_detected: Optional[OnDetected] = None) -> RecognitionResult:
        """Capture a frame from the open session (closing it) and detect. Raises CaptureError."""
        with self._busy():
            session = self._session
            if session is None or not session.is_open:
                raise CaptureError("camera is not open", code=errors.ERR_CAMERA_NOT_OPEN)
            self._set_state(PipelineState.ACQUIRING)
            try:
                blob = acquisition.from_camera(session)
            finally:
                if self._session is session:
                    self._session = None
            self.status.last_preview = acquisition.preview_data_url(blob)
            result = self._recognize(blob)
        self._notify(result, on_detected)
        return result

    def shutdown(self):
        # waits for a running detection so its session is released first
        with self._lock:
            self._close_session()

    def _close_session(self):
        if self._session is not None:
            self._session.close()
            self._session = None

    # ── helpers ───────────────────────────────────────────────────────────

    def _set_state(self, state: PipelineState):
        self.state = state

    @contextmanager
    def _exclusive(self):
        if not self._lock.acquire(blocking=False):
            raise PipelineBusy("a detection is already running")
        try:
            yield
        finally:
            self._lock.release()

    @contextmanager
    def _busy(self):
        with self._exclusive():
            self.status.set_busy(True)
            self._set_state(PipelineState.IDLE)
            try:
                yield
            except Exception:
                self._set_state(PipelineState.IDLE)
                raise
            finally:
                self.status.set_busy(False)
