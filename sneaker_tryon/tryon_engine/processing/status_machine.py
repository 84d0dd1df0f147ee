# sneaker_tryon/tryon_engine/processing/status_machine.py
from typing import Optional
from ..common.enums import TrackingStatus, StatusCategory
from ..common.models import FootLandmarks, FootSelection, StatusReport

STATUS_MESSAGES = {
    TrackingStatus.SEARCHING: ("Looking for pose...", StatusCategory.DETECTING),
    TrackingStatus.POSE_FOUND: ("Point camera at your feet - move closer", StatusCategory.DETECTING),
    TrackingStatus.FEET_PARTIAL: ("Feet detected - show ankle and toes clearly", StatusCategory.DETECTING),
    TrackingStatus.FEET_LOCKED: ("Shoe positioned! Try moving your foot", StatusCategory.SUCCESS),
}

REQUESTING_CAMERA = "Requesting camera permission..."
LOOKING_FOR_FEET = "Looking for feet..."
PHOTO_CAPTURED = "Photo captured!"
CAPTURE_FAILED = "Error capturing photo"


def derive_status(feet: FootLandmarks, selection: Optional[FootSelection]) -> TrackingStatus:
    """Classifies one frame from scratch; no history, no hysteresis."""
    if not feet.pose_detected or selection is None:
        return TrackingStatus.SEARCHING
    if selection.any_complete:
        return TrackingStatus.FEET_LOCKED
    if selection.any_good:
        return TrackingStatus.FEET_PARTIAL
    return TrackingStatus.POSE_FOUND


class SessionStatusMachine:
    """Holds the status shown to the user; rewritten once per frame."""

    def __init__(self):
        self.report = StatusReport(status=TrackingStatus.SEARCHING, message=LOOKING_FOR_FEET)

    @property
    def status(self) -> TrackingStatus:
        return self.report.status

    def set(self, status: TrackingStatus, message: str = None, category: StatusCategory = None) -> StatusReport:
        default_message, default_category = STATUS_MESSAGES.get(status, ("", StatusCategory.NONE))
        self.report = StatusReport(
            status=status,
            message=message if message is not None else default_message,
            category=category if category is not None else default_category,
        )
        return self.report

    def update(self, feet: FootLandmarks, selection: Optional[FootSelection]) -> StatusReport:
        return self.set(derive_status(feet, selection))

    def error(self, reason: str) -> StatusReport:
        return self.set(TrackingStatus.ERROR, reason, StatusCategory.ERROR)

    def reset(self) -> StatusReport:
        return self.set(TrackingStatus.SEARCHING, LOOKING_FOR_FEET, StatusCategory.NONE)
