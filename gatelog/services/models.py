from datetime import datetime
from pydantic import BaseModel, Field
from typing import Literal, Optional

class FileDetectRequest(BaseModel):
    filename: str = "upload"
    content_type: str
    image: str  # base64 file content

class DetectResponse(BaseModel):
    ok: bool
    found: bool = False
    plate: Optional[str] = None
    source: Optional[Literal["primary", "fallback"]] = None
    preview: Optional[str] = None    # data URL of the image that was processed
    error_code: Optional[str] = None
    error: Optional[str] = None

class CameraResponse(BaseModel):
    ok: bool
    camera_state: str
    error_code: Optional[str] = None
    error: Optional[str] = None

class DetectionOut(BaseModel):
    found: bool
    plate: Optional[str] = None
    source: Optional[Literal["primary", "fallback"]] = None

class StatusResponse(BaseModel):
    busy: bool
    pipeline_state: str
    camera_state: str
    last_detection: Optional[DetectionOut] = None
    preview: Optional[str] = None
    pending_vehicle_number: Optional[str] = None  # last detected plate, pre-fills the entry form
    last_error: Optional[str] = None
    logs: list[str]

class EntryCreate(BaseModel):
    # Empty vehicle_number falls back to the pending detected plate
    vehicle_number: str = ""
    vehicle_status: Literal["IN", "OUT"]
    vehicle_category: Literal["Car", "Bike"]
    company: Optional[str] = None
    purpose_of_visit: str = "Job"
    owner_name: Optional[str] = None

class EntryOut(BaseModel):
    id: str
    vehicle_number: str
    vehicle_status: Literal["IN", "OUT"]
    vehicle_category: Literal["Car", "Bike"]
    company: Optional[str] = None
    purpose_of_visit: str
    owner_name: Optional[str] = None
    created_at: datetime

class RecentEntriesResponse(BaseModel):
    entries: list[EntryOut]
    count: int = Field(ge=0)
