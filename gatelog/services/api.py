import base64
import binascii
import os
from dataclasses import asdict
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from dotenv import load_dotenv
from gatelog.services.models import (
    FileDetectRequest, DetectResponse, CameraResponse, DetectionOut, StatusResponse,
    EntryCreate, EntryOut, RecentEntriesResponse,
)
from gatelog.services.status_store import StatusStore
from gatelog.services.entry_store import EntryStore, GateEntry
from gatelog.orchestrator import errors
from gatelog.orchestrator.contracts import PlateDetected, RecognitionResult
from gatelog.orchestrator.errors import GateLogError
from gatelog.orchestrator.pipeline import PlatePipeline
from gatelog.adapters.ocr.tesseract_ocr import TesseractOCR

load_dotenv(dotenv_path="gatelog/.env", override=False)

status = StatusStore()
entries = EntryStore()

# OCR adapters: OCR_ADAPTER env var
# Values: ocrspace (remote primary + tesseract fallback) | tesseract | mock  (default: ocrspace)
_ocr_adapter = os.getenv("OCR_ADAPTER", "ocrspace").lower()

if _ocr_adapter == "mock":
    from gatelog.adapters.ocr.mock_ocr import MockOCR
    recognizers = [MockOCR(status)]
else:
    recognizers = []
    if _ocr_adapter == "ocrspace":
        from gatelog.adapters.ocr.ocr_space import OCRSpaceOCR
        primary = OCRSpaceOCR(status)
        if primary.ready():
            recognizers.append(primary)
        else:
            status.log("ocr: OCRSpaceOCR not ready, using local tesseract only")
    recognizers.append(TesseractOCR(status))

status.log(f"ocr adapters: {[r.name for r in recognizers]}")

# Camera adapter: CAMERA_ADAPTER env var (cv2 | mock, default cv2)
camera_adapter = os.getenv("CAMERA_ADAPTER", "cv2").lower()
if camera_adapter == "mock":
    from gatelog.adapters.camera.mock_camera import MockCamera
    camera = MockCamera(status)
else:
    from gatelog.adapters.camera.cv2_camera import CV2Camera
    camera = CV2Camera(status)
status.log(f"camera adapter: {type(camera).__name__}")

pipeline = PlatePipeline(recognizers=recognizers, status_store=status, camera=camera)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # release the camera so other applications can use it
    pipeline.shutdown()


app = FastAPI(title="gatelog", lifespan=lifespan)


def _set_pending(plate: str):
    status.pending_vehicle_number = plate
    status.log(f"vehicle number ready: {plate}")


def _detection_out(result: RecognitionResult | None) -> DetectionOut | None:
    if result is None:
        return None
    if isinstance(result, PlateDetected):
        return DetectionOut(found=True, plate=result.text, source=result.source.value)
    return DetectionOut(found=False)


def _detect_response(result: RecognitionResult) -> DetectResponse:
    det = _detection_out(result)
    return DetectResponse(ok=True, found=det.found, plate=det.plate, source=det.source, preview=status.last_preview)


def _error_response(e: GateLogError) -> DetectResponse:
    status.last_error = e.code
    status.log(f"error {e.code}: {e}")
    return DetectResponse(ok=False, error_code=e.code, error=str(e))


@app.get("/status", response_model=StatusResponse)
def get_status():
    return StatusResponse(
        busy=status.busy,
        pipeline_state=pipeline.state.value,
        camera_state=status.camera_state,
        last_detection=_detection_out(status.last_result),
        preview=status.last_preview,
        pending_vehicle_number=status.pending_vehicle_number,
        last_error=status.last_error,
        logs=status.logs,
    )


@app.get("/health")
def health():
    checks = {"api": True}
    checks["ocr_adapters"] = [r.name for r in pipeline.recognizers]
    checks["ocr_ready"] = {r.name: r.ready() for r in pipeline.recognizers}
    checks["camera_adapter"] = type(pipeline.camera).__name__ if pipeline.camera else None
    checks["all_ok"] = checks["api"] and any(checks["ocr_ready"].values())
    return checks


@app.post("/ocr/file", response_model=DetectResponse)
def detect_file(req: FileDetectRequest):
    try:
        data = base64.b64decode(req.image, validate=True)
    except (binascii.Error, ValueError) as e:
        status.log(f"OCR_FILE decode error: {e}")
        return DetectResponse(ok=False, error_code=errors.ERR_INVALID_INPUT, error="base64 decode failed")

    status.log(f"OCR_FILE received {req.filename} ({req.content_type}, {len(data)} bytes)")
    status.last_error = None
    try:
        result = pipeline.detect_file(req.filename, req.content_type, data, on_detected=_set_pending)
    except GateLogError as e:
        return _error_response(e)
    return _detect_response(result)


@app.post("/camera/open", response_model=CameraResponse)
def camera_open():
    try:
        pipeline.open_camera()
    except GateLogError as e:
        status.last_error = e.code
        status.log(f"CAMERA_OPEN failed: {e}")
        return CameraResponse(ok=False, camera_state=status.camera_state, error_code=e.code, error=str(e))
    return CameraResponse(ok=True, camera_state=status.camera_state)


@app.post("/camera/close", response_model=CameraResponse)
def camera_close():
    try:
        pipeline.close_camera()
    except GateLogError as e:
        status.log(f"CAMERA_CLOSE failed: {e}")
        return CameraResponse(ok=False, camera_state=status.camera_state, error_code=e.code, error=str(e))
    return CameraResponse(ok=True, camera_state=status.camera_state)


@app.post("/camera/capture", response_model=DetectResponse)
def camera_capture():
    status.log("CAMERA_CAPTURE")
    status.last_error = None
    try:
        result = pipeline.capture_and_detect(on_detected=_set_pending)
    except GateLogError as e:
        return _error_response(e)
    return _detect_response(result)


@app.post("/ocr/clear")
def clear_results():
    status.clear_results()
    status.log("results cleared")
    return {"ok": True}


@app.post("/entries", response_model=EntryOut)
def create_entry(req: EntryCreate):
    pending = status.pending_vehicle_number
    vehicle_number = req.vehicle_number.strip() or (pending or "")
    if not vehicle_number:
        raise HTTPException(status_code=422, detail="vehicle_number is required")
    try:
        entry = entries.add(GateEntry(
            vehicle_number=vehicle_number,
            vehicle_status=req.vehicle_status,
            vehicle_category=req.vehicle_category,
            company=req.company or None,
            purpose_of_visit=req.purpose_of_visit or "Job",
            owner_name=req.owner_name or None,
        ))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if entry.vehicle_number == pending:
        status.pending_vehicle_number = None
    status.log(f"ENTRY {entry.vehicle_status} {entry.vehicle_number} ({entry.vehicle_category})")
    return EntryOut(**asdict(entry))


@app.get("/entries/recent", response_model=RecentEntriesResponse)
def recent_entries(limit: int = 10):
    rows = [EntryOut(**asdict(e)) for e in entries.recent(limit)]
    return RecentEntriesResponse(entries=rows, count=len(rows))
