# sneaker_tryon/tryon_engine/common/errors.py

class TryOnError(Exception):
    """Base class for every error raised by the try-on engine."""


class AcquisitionError(TryOnError):
    """The camera stream could not be acquired. The session does not start."""

    default_message = "Camera error. Please try again."

    def __init__(self, detail: str = "", user_message: str = None):
        super().__init__(detail or self.default_message)
        self.user_message = user_message or self.default_message


class CameraPermissionError(AcquisitionError):
    default_message = "Camera permission denied. Please enable camera access."


class CameraNotFoundError(AcquisitionError):
    default_message = "No camera found. Please connect a camera."


class EstimationError(TryOnError):
    """The pose estimator failed on a single frame."""
