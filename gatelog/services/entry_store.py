import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

VEHICLE_STATUSES = ("IN", "OUT")
VEHICLE_CATEGORIES = ("Car", "Bike")
DEFAULT_PURPOSE = "Job"

@dataclass
class GateEntry:
    vehicle_number: str
    vehicle_status: str          # "IN" | "OUT"
    vehicle_category: str        # "Car" | "Bike"
    company: Optional[str] = None
    purpose_of_visit: str = DEFAULT_PURPOSE
    owner_name: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

@dataclass
class EntryStore:
    """In-memory gate log. Newest entries last; recent() returns newest first."""
    entries: List[GateEntry] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, entry: GateEntry) -> GateEntry:
        entry.vehicle_number = entry.vehicle_number.strip().upper()
        if not entry.vehicle_number:
            raise ValueError("vehicle_number is required")
        if entry.vehicle_status not in VEHICLE_STATUSES:
            raise ValueError(f"vehicle_status must be one of {VEHICLE_STATUSES}")
        if entry.vehicle_category not in VEHICLE_CATEGORIES:
            raise ValueError(f"vehicle_category must be one of {VEHICLE_CATEGORIES}")
        with self._lock:
            self.entries.append(entry)
        return entry

    def recent(self, limit: int = 10) -> List[GateEntry]:
        with self._lock:
            return list(reversed(self.entries[-limit:])) if limit > 0 else []
