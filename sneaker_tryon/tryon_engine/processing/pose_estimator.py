# sneaker_tryon/tryon_engine/processing/pose_estimator.py
import cv2
import mediapipe as mp
import numpy as np
from ..common.config import PoseConfig
from ..common.errors import EstimationError
from ..common.models import PoseDetection, FrameMetadata
from .landmark_validator import landmarks_from_array

class MediaPipePoseEstimator:
    """Runs MediaPipe Pose on camera frames and returns the raw 33-point landmark list."""

    def __init__(self, config: PoseConfig):
        self.config = config
        self.mp_pose = mp.solutions.pose
        self.pose = self.mp_pose.Pose(
            static_image_mode=False,
            model_complexity=config.model_complexity,
            smooth_landmarks=config.smooth_landmarks,
            enable_segmentation=False,
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence
        )

    def estimate(self, frame: np.ndarray, metadata: FrameMetadata) -> PoseDetection:
        """Estimates the pose in a BGR frame. Raises EstimationError if the model fails."""
        try:
            frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            frame_rgb.flags.writeable = False # Performance optimization
            results = self.pose.process(frame_rgb)
        except Exception as e:
            raise EstimationError(f"Pose estimation failed on frame {metadata.frame_id}: {e}") from e

        if not results.pose_landmarks:
            return PoseDetection(frame_id=metadata.frame_id)

        landmarks_np = np.array([[lm.x, lm.y, lm.z, lm.visibility] for lm in results.pose_landmarks.landmark])
        landmarks = landmarks_from_array(landmarks_np)
        return PoseDetection(frame_id=metadata.frame_id, landmarks=landmarks)

    def close(self):
        self.pose.close()
