from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    @abstractmethod
    def open(self) -> bool:
        """Acquire the device. Returns False if it could not be opened."""
        ...

    @abstractmethod
    def read_frame(self):
        """Read the current frame as a BGR ndarray, or None on failure."""
        ...

    @abstractmethod
    def release(self) -> None:
        ...

    @abstractmethod
    def is_opened(self) -> bool:
        ...
