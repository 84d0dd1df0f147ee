# sneaker_tryon/tryon_engine/common/enums.py
from enum import Enum

class TrackingStatus(str, Enum):
    """Per-frame classification of pose and foot visibility."""
    SEARCHING = "SEARCHING"
    POSE_FOUND = "POSE_FOUND"
    FEET_PARTIAL = "FEET_PARTIAL"
    FEET_LOCKED = "FEET_LOCKED"
    ERROR = "ERROR"

class StatusCategory(str, Enum):
    """Display category the UI uses to style the status message."""
    NONE = ""
    DETECTING = "detecting"
    SUCCESS = "success"
    ERROR = "error"

class FootSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"

class CameraFacing(str, Enum):
    USER = "user"
    ENVIRONMENT = "environment"

class LogLevel(str, Enum):
    """Defines logging levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
