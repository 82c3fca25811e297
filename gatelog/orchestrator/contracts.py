from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Backend(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


class PipelineState(str, Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    RECOGNIZING_PRIMARY = "recognizing_primary"
    RECOGNIZING_FALLBACK = "recognizing_fallback"
    EXTRACTING = "extracting"
    DONE = "done"


@dataclass(frozen=True)
class ImageBlob:
    data: bytes
    content_type: str = "image/jpeg"
    filename: Optional[str] = None   # set only for user-selected files

    @property
    def is_file_backed(self) -> bool:
        return bool(self.filename)


@dataclass(frozen=True)
class PlateDetected:
    text: str
    source: Backend

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("PlateDetected requires non-blank text")


@dataclass(frozen=True)
class PlateNotFound:
    pass


RecognitionResult = Union[PlateDetected, PlateNotFound]
