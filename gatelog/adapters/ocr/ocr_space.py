"""
OCR.space remote recognizer (primary backend).

Uploads the image as multipart/form-data, so only file-backed blobs are
accepted. Requires OCR_SPACE_API_KEY in gatelog/.env or the environment.

No extra dependencies: uses httpx.
"""
import os
import httpx
from gatelog.adapters.ocr.base import OCRAdapter
from gatelog.orchestrator.contracts import Backend, ImageBlob
from gatelog.orchestrator.errors import BackendFailure

OCR_SPACE_URL = os.getenv("OCR_SPACE_URL", "https://api.ocr.space/parse/image")
OCR_SPACE_TIMEOUT = float(os.getenv("OCR_SPACE_TIMEOUT", "30"))

EXIT_CODE_OK = 1

# Engine 2 handles short alphanumeric strings better than engine 1
_FORM = {
    "language": "eng",
    "isOverlayRequired": "false",
    "OCREngine": "2",
    "scale": "true",
}


class OCRSpaceOCR(OCRAdapter):
    name = "ocr_space"
    backend = Backend.PRIMARY

    def __init__(self, status_store, api_key: str | None = None, url: str | None = None,
                 timeout: float | None = None, transport: httpx.BaseTransport | None = None):
        self.status = status_store
        self._api_key = api_key if api_key is not None else os.getenv("OCR_SPACE_API_KEY")
        self._url = url or OCR_SPACE_URL
        self._timeout = timeout or OCR_SPACE_TIMEOUT
        self._transport = transport
        if self._api_key:
            self.status.log(f"ocr_space: ready ({self._url})")
        else:
            self.status.log("ocr_space: OCR_SPACE_API_KEY not set")

    def ready(self) -> bool:
        return bool(self._api_key)

    def accepts(self, image: ImageBlob) -> bool:
        return image.is_file_backed

    def recognize(self, image: ImageBlob) -> str | None:
        if not self.ready() or not self.accepts(image):
            return None
        try:
            text = self._parse(self._post(image))
        except BackendFailure as e:
            self.status.log(f"ocr_space: {e}")
            return None
        except Exception as e:
            self.status.log(f"ocr_space: API error: {type(e).__name__}: {e}")
            return None
        self.status.log(f"ocr_space: raw={text!r}")
        return text

    def _post(self, image: ImageBlob) -> dict:
        files = {"file": (image.filename, image.data, image.content_type)}
        data = dict(_FORM, apikey=self._api_key)
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            resp = client.post(self._url, data=data, files=files)
        if not resp.is_success:
            raise BackendFailure(f"HTTP {resp.status_code} {resp.text[:300]}")
        try:
            body = resp.json()
        except ValueError:
            raise BackendFailure("response is not JSON")
        if not isinstance(body, dict):
            raise BackendFailure("unexpected response shape")
        return body

    def _parse(self, body: dict) -> str | None:
        exit_code = body.get("OCRExitCode")
        if exit_code not in (EXIT_CODE_OK, str(EXIT_CODE_OK)):
            raise BackendFailure(f"OCRExitCode={exit_code} {body.get('ErrorMessage')}")
        results = body.get("ParsedResults") or []
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            raise BackendFailure("no ParsedResults")
        text = results[0].get("ParsedText")
        if not isinstance(text, str) or not text.strip():
            return None
        return text
