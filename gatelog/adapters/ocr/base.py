from gatelog.orchestrator.contracts import Backend, ImageBlob

class OCRAdapter:
    name = "ocr"
    backend = Backend.FALLBACK

    def accepts(self, image: ImageBlob) -> bool:
        """Whether this backend can take the given blob at all."""
        return True

    def recognize(self, image: ImageBlob) -> str | None:
        """Return raw recognized text, or None on any failure. Must not raise."""
        raise NotImplementedError

    def ready(self) -> bool:
        return True
