# sneaker_tryon/tryon_engine/common/models.py
import math
from pydantic import BaseModel, Field
from typing import Optional, Tuple, List, Dict
from .enums import TrackingStatus, StatusCategory, FootSide

class FrameMetadata(BaseModel):
    """Metadata associated with a single camera frame."""
    frame_id: int
    timestamp: float
    source_resolution: Tuple[int, int]

class Landmark(BaseModel):
    """A single body keypoint in normalized image coordinates."""
    x: float
    y: float
    z: float = 0.0
    visibility: float = 0.0

    def to_pixel(self, width: int, height: int) -> Tuple[float, float]:
        return self.x * width, self.y * height

    class Config:
        frozen = True

class PoseDetection(BaseModel):
    """Raw output of the pose estimator for one frame; landmarks is None when no person was found."""
    frame_id: int = 0
    landmarks: Optional[List[Landmark]] = None

class FootCandidate(BaseModel):
    """Ankle, heel and toe landmarks of one side that passed validation."""
    side: FootSide
    ankle: Optional[Landmark] = None
    heel: Optional[Landmark] = None
    toe: Optional[Landmark] = None

    @property
    def visible_count(self) -> int:
        return sum(lm is not None for lm in (self.ankle, self.heel, self.toe))

    @property
    def is_good(self) -> bool:
        return self.visible_count >= 2

    @property
    def is_complete(self) -> bool:
        # The heel is diagnostic only and never required for placement.
        return self.ankle is not None and self.toe is not None

class FootLandmarks(BaseModel):
    """The six foot landmarks after the visibility filter."""
    pose_detected: bool = False
    left_ankle: Optional[Landmark] = None
    right_ankle: Optional[Landmark] = None
    left_heel: Optional[Landmark] = None
    right_heel: Optional[Landmark] = None
    left_toe: Optional[Landmark] = None
    right_toe: Optional[Landmark] = None

    def candidate(self, side: FootSide) -> FootCandidate:
        prefix = side.value
        return FootCandidate(
            side=side,
            ankle=getattr(self, f"{prefix}_ankle"),
            heel=getattr(self, f"{prefix}_heel"),
            toe=getattr(self, f"{prefix}_toe"),
        )

class FootSelection(BaseModel):
    """Both feet for one frame plus the foot picked for placement and for overlay/status."""
    left: FootCandidate
    right: FootCandidate
    placement: Optional[FootCandidate] = None
    overlay: Optional[FootCandidate] = None

    @property
    def any_good(self) -> bool:
        return self.left.is_good or self.right.is_good

    @property
    def any_complete(self) -> bool:
        return self.placement is not None

class PlacementTransform(BaseModel):
    """Where and how to draw the tracked object for the current frame."""
    position: Tuple[float, float, float]
    rotation_z: float
    mirror_y: bool
    scale: float
    side: FootSide

    @property
    def rotation(self) -> Tuple[float, float, float]:
        """Euler XYZ rotation; the Y flip mirrors a single right-foot asset onto the left foot."""
        return 0.0, math.pi if self.mirror_y else 0.0, self.rotation_z

    class Config:
        frozen = True

class StatusReport(BaseModel):
    """User-facing tracking status."""
    status: TrackingStatus
    message: str
    category: StatusCategory = StatusCategory.NONE

class TryOnResult(BaseModel):
    """Encapsulates the complete result of a single frame's try-on processing."""
    timestamp: float
    frame_id: int
    processing_time_ms: float
    status: StatusReport
    selection: Optional[FootSelection] = None
    placement: Optional[PlacementTransform] = None
    object_visible: bool = False
    performance_metrics: Dict[str, float] = Field(default_factory=dict)
