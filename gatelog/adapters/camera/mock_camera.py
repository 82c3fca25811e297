"""Mock camera: serves a random image from MOCK_CAMERA_DIR, or a blank frame if none exist."""
import os
import random
from pathlib import Path

import cv2
import numpy as np
from gatelog.adapters.camera.base import CameraAdapter

SAMPLES_DIR = Path(__file__).parent / "samples"

class MockCamera(CameraAdapter):
    def __init__(self, status_store, samples_dir: str | Path | None = None):
        self.status = status_store
        self._dir = Path(samples_dir or os.getenv("MOCK_CAMERA_DIR", str(SAMPLES_DIR)))
        self._open = False

    def open(self) -> bool:
        self._open = True
        self.status.log(f"mock_camera: open (samples={self._dir})")
        return True

    def read_frame(self):
        if not self._open:
            return None
        images = sorted(self._dir.glob("*.jpg")) + sorted(self._dir.glob("*.png"))
        if not images:
            self.status.log("mock_camera: no sample images, serving blank frame")
            return np.full((480, 640, 3), 255, dtype=np.uint8)
        chosen = random.choice(images)
        self.status.log(f"mock_camera: serving {chosen.name}")
        return cv2.imread(str(chosen), cv2.IMREAD_COLOR)

    def release(self) -> None:
        if self._open:
            self.status.log("mock_camera: released")
        self._open = False

    def is_opened(self) -> bool:
        return self._open
