from dataclasses import dataclass, field
from typing import Optional, List
from gatelog.orchestrator.contracts import RecognitionResult

MAX_LOG_LINES = 200

@dataclass
class StatusStore:
    busy: bool = False
    camera_state: str = "closed"
    last_result: Optional[RecognitionResult] = None
    last_preview: Optional[str] = None            # data URL of the last uploaded/captured image
    pending_vehicle_number: Optional[str] = None  # set by a successful detection, consumed by POST /entries
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def set_busy(self, v: bool):
        self.busy = v

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > MAX_LOG_LINES:
            self.logs = self.logs[-MAX_LOG_LINES:]

    def clear_results(self):
        self.last_result = None
        self.last_preview = None
        self.pending_vehicle_number = None
        self.last_error = None
