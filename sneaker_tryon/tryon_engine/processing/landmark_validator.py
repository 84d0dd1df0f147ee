# sneaker_tryon/tryon_engine/processing/landmark_validator.py
import numpy as np
from typing import Optional, Sequence, List
from ..common.models import Landmark, FootLandmarks
from ..common.config import TrackingConfig

# Fixed index convention of the 33-point MediaPipe pose topology.
LEFT_ANKLE = 27
RIGHT_ANKLE = 28
LEFT_HEEL = 29
RIGHT_HEEL = 30
LEFT_FOOT_INDEX = 31
RIGHT_FOOT_INDEX = 32

FOOT_LANDMARK_INDICES = {
    "left_ankle": LEFT_ANKLE,
    "right_ankle": RIGHT_ANKLE,
    "left_heel": LEFT_HEEL,
    "right_heel": RIGHT_HEEL,
    "left_toe": LEFT_FOOT_INDEX,
    "right_toe": RIGHT_FOOT_INDEX,
}


def landmarks_from_array(landmarks_np: np.ndarray) -> List[Landmark]:
    """Builds Landmarks from an (N, 4) array of x, y, z, visibility rows."""
    return [Landmark(x=float(x), y=float(y), z=float(z), visibility=float(v)) for x, y, z, v in landmarks_np]


class LandmarkValidator:
    """Keeps the foot landmarks whose visibility is strictly above the threshold."""

    def __init__(self, config: TrackingConfig = None):
        self.config = config or TrackingConfig()

    def is_visible(self, landmark: Optional[Landmark]) -> bool:
        return landmark is not None and landmark.visibility > self.config.min_visibility

    def validate(self, landmarks: Optional[Sequence[Landmark]]) -> FootLandmarks:
        # A short or missing list is a "no pose" frame, never an error.
        if landmarks is None or len(landmarks) < self.config.landmark_count:
            return FootLandmarks(pose_detected=False)

        visible = {
            name: landmarks[idx] if self.is_visible(landmarks[idx]) else None
            for name, idx in FOOT_LANDMARK_INDICES.items()
        }
        return FootLandmarks(pose_detected=True, **visible)
