"""
Local Tesseract recognizer (fallback backend).

Accepts file-backed and raw camera buffers: the bytes are decoded in-process
with OpenCV, so no filename is needed. Language is fixed to English and no
character whitelist is set; plate cleanup happens in the extractor.

TESSERACT_CMD env var overrides the tesseract binary path.
"""
import os
from typing import Callable, Optional

import cv2
import numpy as np
import pytesseract
from gatelog.adapters.ocr.base import OCRAdapter
from gatelog.orchestrator.contracts import Backend, ImageBlob
from gatelog.orchestrator.errors import BackendFailure

ProgressCallback = Callable[[str, float], None]


def _bytes_to_gray(image_bytes: bytes):
    arr = np.frombuffer(image_bytes, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if img is None:
        raise BackendFailure("could not decode image bytes")
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


class TesseractOCR(OCRAdapter):
    name = "tesseract"
    backend = Backend.FALLBACK

    def __init__(self, status_store, lang: str = "eng", tesseract_cmd: str | None = None,
                 on_progress: Optional[ProgressCallback] = None):
        self.status = status_store
        self.lang = lang
        self.on_progress = on_progress or self._log_progress
        cmd = tesseract_cmd or os.getenv("TESSERACT_CMD")
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd
        self._version: str | None = None

    def ready(self) -> bool:
        if self._version is None:
            try:
                self._version = str(pytesseract.get_tesseract_version())
                self.status.log(f"tesseract: ready (v{self._version})")
            except Exception as e:
                self.status.log(f"tesseract: not available: {e}")
                return False
        return True

    def recognize(self, image: ImageBlob) -> str | None:
        try:
            self.on_progress("decoding", 0.0)
            gray = _bytes_to_gray(image.data)
            self.on_progress("recognizing", 0.3)
            text = pytesseract.image_to_string(gray, lang=self.lang)
            self.on_progress("done", 1.0)
        except Exception as e:
            self.status.log(f"tesseract: error {type(e).__name__}: {e}")
            return None
        self.status.log(f"tesseract: raw={text!r}")
        if not text or not text.strip():
            return None
        return text

    def _log_progress(self, stage: str, progress: float):
        self.status.log(f"tesseract: {stage} {progress:.0%}")
