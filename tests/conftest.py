from __future__ import annotations

import cv2
import numpy as np
import pytest

from gatelog.adapters.camera.base import CameraAdapter
from gatelog.adapters.ocr.base import OCRAdapter
from gatelog.orchestrator.contracts import Backend, ImageBlob
from gatelog.services.status_store import StatusStore


class FakeCamera(CameraAdapter):
    """Records open/release calls; serves a fixed frame."""

    def __init__(self, frame=None, can_open: bool = True) -> None:
        self.frame = frame if frame is not None else np.full((48, 64, 3), 200, dtype=np.uint8)
        self.can_open = can_open
        self.events: list[str] = []
        self._open = False

    def open(self) -> bool:
        self.events.append("open")
        self._open = self.can_open
        return self.can_open

    def read_frame(self):
        self.events.append("read")
        return self.frame if self._open else None

    def release(self) -> None:
        self.events.append("release")
        self._open = False

    def is_opened(self) -> bool:
        return self._open


class FakeOCR(OCRAdapter):
    def __init__(self, name: str, backend: Backend, text: str | None = None,
                 file_only: bool = False, error: Exception | None = None) -> None:
        self.name = name
        self.backend = backend
        self.text = text
        self.file_only = file_only
        self.error = error
        self.calls: list[ImageBlob] = []

    def accepts(self, image: ImageBlob) -> bool:
        return image.is_file_backed or not self.file_only

    def recognize(self, image: ImageBlob) -> str | None:
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture
def jpeg_bytes() -> bytes:
    img = np.full((60, 180, 3), 255, dtype=np.uint8)
    cv2.rectangle(img, (10, 10), (170, 50), (0, 0, 0), 2)
    ok, buf = cv2.imencode(".jpg", img)
    assert ok
    return bytes(buf)


@pytest.fixture
def file_blob(jpeg_bytes: bytes) -> ImageBlob:
    return ImageBlob(data=jpeg_bytes, content_type="image/jpeg", filename="plate.jpg")


@pytest.fixture
def raw_blob(jpeg_bytes: bytes) -> ImageBlob:
    return ImageBlob(data=jpeg_bytes, content_type="image/jpeg")


@pytest.fixture
def make_camera():
    return FakeCamera


@pytest.fixture
def make_ocr():
    return FakeOCR
