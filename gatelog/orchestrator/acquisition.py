"""
Image acquisition: turns a user-selected file or a live camera frame into an ImageBlob.

File uploads stay file-backed (they keep their filename) so the remote OCR
service can receive them as a multipart upload. Camera captures are raw JPEG
buffers with no filename.
"""
import base64

import cv2
from gatelog.adapters.camera.session import CameraSession
from gatelog.orchestrator.contracts import ImageBlob
from gatelog.orchestrator.errors import CaptureError, InvalidInput

JPEG_QUALITY = 80


def preview_data_url(blob: ImageBlob) -> str:
    b64 = base64.standard_b64encode(blob.data).decode("utf-8")
    return f"data:{blob.content_type};base64,{b64}"


def from_file(filename: str, content_type: str, data: bytes) -> tuple[ImageBlob, str]:
    """Validate a selected file and return (blob, preview data URL)."""
    if not content_type or not content_type.lower().startswith("image/"):
        raise InvalidInput(f"not an image file: {content_type or 'unknown type'}")
    if not data:
        raise InvalidInput("empty file")
    blob = ImageBlob(data=data, content_type=content_type.lower(), filename=filename or "upload")
    return blob, preview_data_url(blob)


def from_camera(session: CameraSession) -> ImageBlob:
    """Capture the current frame at native resolution and close the session."""
    try:
        frame = session.grab_frame()
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
        if not ok or buf is None or len(buf) == 0:
            raise CaptureError("image encoder returned no data")
        return ImageBlob(data=bytes(buf), content_type="image/jpeg")
    finally:
        session.close()
