import os
from gatelog.adapters.ocr.base import OCRAdapter
from gatelog.orchestrator.contracts import Backend, ImageBlob

class MockOCR(OCRAdapter):
    """Returns a fixed text (MOCK_OCR_TEXT) for any image. Dev mode without Tesseract."""
    name = "mock_ocr"

    def __init__(self, status_store, text: str | None = None, backend: Backend = Backend.FALLBACK):
        self.status = status_store
        self.text = text if text is not None else os.getenv("MOCK_OCR_TEXT", "MH12AB1234")
        self.backend = backend
        self.calls = 0

    def recognize(self, image: ImageBlob) -> str | None:
        self.calls += 1
        self.status.log(f"mock_ocr: '{self.text}'")
        return self.text or None
