# sneaker_tryon/tryon_engine/session/orchestrator.py
import asyncio
import logging
import time
import numpy as np
from typing import Optional, Sequence
from ..common.config import AppConfig
from ..common.errors import EstimationError
from ..common.models import FrameMetadata, Landmark, TryOnResult
from ..processing.foot_selector import select_foot
from ..processing.landmark_validator import LandmarkValidator
from ..processing.one_euro_filter import PlacementSmoother
from ..processing.placement import PlacementTransformer
from ..processing.status_machine import SessionStatusMachine
from ..rendering.object_renderer import SneakerRenderer
from ..visualization.overlay_renderer import OverlayRenderer
from .context import ARSessionContext

logger = logging.getLogger(__name__)


class FrameOrchestrator:
    """Per-frame entry point: validate, select, place, update status, draw."""

    def __init__(
        self,
        config: AppConfig,
        estimator,
        renderer: SneakerRenderer,
        overlay: OverlayRenderer,
        status: SessionStatusMachine,
    ):
        self.config = config
        self.estimator = estimator
        self.renderer = renderer
        self.overlay = overlay
        self.status = status
        self.validator = LandmarkValidator(config.tracking)
        self.transformer = PlacementTransformer(config.placement)
        self.smoother = PlacementSmoother(config.smoothing) if config.smoothing.enabled else None

    async def on_frame(self, context: ARSessionContext, frame: np.ndarray, metadata: FrameMetadata) -> Optional[TryOnResult]:
        """Runs the estimator on a camera frame, then the tracking pipeline. No-op once the session is inactive."""
        if not context.is_active:
            return None

        start_time = time.perf_counter()
        try:
            detection = await asyncio.to_thread(self.estimator.estimate, frame, metadata)
            landmarks = detection.landmarks
        except EstimationError:
            logger.exception("Pose detection error on frame %d", metadata.frame_id)
            landmarks = None

        # The session may have been torn down while inference was running.
        if not context.is_active:
            logger.debug("Dropping stale result for frame %d", metadata.frame_id)
            return None

        return self.process_landmarks(context, frame, metadata, landmarks, start_time)

    def process_landmarks(
        self,
        context: ARSessionContext,
        frame: np.ndarray,
        metadata: FrameMetadata,
        landmarks: Optional[Sequence[Landmark]],
        start_time: float = None,
    ) -> Optional[TryOnResult]:
        if not context.is_active:
            return None
        start_time = start_time if start_time is not None else time.perf_counter()

        context.update_frame(frame)
        self.overlay.resize(context.frame_width, context.frame_height)
        self.overlay.clear()

        feet = self.validator.validate(landmarks)
        selection = None
        placement = None

        if not feet.pose_detected:
            report = self.status.update(feet, None)
            context.hide_object()
            self.overlay.draw_no_pose_hint()
        else:
            selection = select_foot(feet)
            report = self.status.update(feet, selection)

            if selection.any_good:
                self.overlay.draw_foot_indicators(selection)
            else:
                self.overlay.draw_pose_detection_hint()

            placement = self.transformer.place(selection.placement)

        if self.smoother is not None:
            placement = self.smoother(placement, metadata.timestamp)

        obj = context.tracked_object
        if placement is not None and obj is not None:
            self.renderer.apply_transform(obj, placement)
        else:
            context.hide_object()

        context.object_layer = self.renderer.render(context.frame_width, context.frame_height)

        return TryOnResult(
            timestamp=metadata.timestamp,
            frame_id=metadata.frame_id,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            status=report,
            selection=selection,
            placement=placement,
            object_visible=obj is not None and obj.visible,
        )
