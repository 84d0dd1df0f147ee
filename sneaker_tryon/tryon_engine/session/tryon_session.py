# sneaker_tryon/tryon_engine/session/tryon_session.py
import logging
import numpy as np
from typing import AsyncIterable, AsyncIterator, Awaitable, Callable, Optional, Tuple
from ..camera.camera_manager import acquire_stream
from ..common.config import AppConfig, CameraConfig
from ..common.enums import TrackingStatus, StatusCategory
from ..common.errors import AcquisitionError
from ..common.models import FrameMetadata, StatusReport, TryOnResult
from ..processing.status_machine import (
    SessionStatusMachine, REQUESTING_CAMERA, LOOKING_FOR_FEET, PHOTO_CAPTURED, CAPTURE_FAILED,
)
from ..rendering.object_renderer import SneakerRenderer
from ..visualization.overlay_renderer import OverlayRenderer
from ..visualization.visualizer import composite
from .context import ARSessionContext
from .orchestrator import FrameOrchestrator

logger = logging.getLogger(__name__)


class TryOnSession:
    """
    Enter/exit lifecycle of try-on mode around a FrameOrchestrator.

    Exit order matters: stop accepting frames, release the camera, then
    clear the drawing surfaces.
    """

    def __init__(
        self,
        config: AppConfig,
        estimator,
        renderer: SneakerRenderer = None,
        acquire: Callable[[CameraConfig], Awaitable] = acquire_stream,
    ):
        self.config = config
        self.renderer = renderer or SneakerRenderer(config.rendering)
        width, height = config.camera.resolution
        self.overlay = OverlayRenderer(width, height)
        self.status_machine = SessionStatusMachine()
        self.context = ARSessionContext()
        self.orchestrator = FrameOrchestrator(config, estimator, self.renderer, self.overlay, self.status_machine)
        self._acquire = acquire
        self._tracked_object = None

    @property
    def status(self) -> StatusReport:
        return self.status_machine.report

    @property
    def is_active(self) -> bool:
        return self.context.is_active

    async def enter(self) -> bool:
        """Acquires the camera and activates tracking. Returns False (status Error) if the camera is unavailable."""
        if self.context.is_active:
            return True
        logger.info("Entering try-on mode...")
        self.status_machine.set(TrackingStatus.SEARCHING, REQUESTING_CAMERA, StatusCategory.DETECTING)

        try:
            stream = await self._acquire(self.config.camera)
        except AcquisitionError as e:
            logger.error("Error entering try-on mode: %s", e)
            self.status_machine.error(e.user_message)
            return False

        self.context.stream = stream
        self._tracked_object = self.renderer.clone_tracked_object()
        self.context.tracked_object = self._tracked_object
        self.status_machine.set(TrackingStatus.SEARCHING, LOOKING_FOR_FEET, StatusCategory.DETECTING)
        self.context.is_active = True
        logger.info("Try-on mode activated")
        return True

    def exit(self):
        logger.info("Exiting try-on mode...")
        self.context.is_active = False

        stream = self.context.stream
        if stream is not None:
            stream.stop()

        self.context.hide_object()
        if self._tracked_object is not None:
            self.renderer.remove(self._tracked_object)
            self._tracked_object = None
        self.context.reset()

        self.overlay.clear()
        if self.orchestrator.smoother is not None:
            self.orchestrator.smoother.reset()
        self.status_machine.reset()
        logger.info("Try-on mode deactivated")

    async def results(self, frames: AsyncIterable[Tuple[np.ndarray, FrameMetadata]]) -> AsyncIterator[TryOnResult]:
        """Feeds frames from any source through the orchestrator until the session exits."""
        async for frame, metadata in frames:
            if not self.context.is_active:
                break
            result = await self.orchestrator.on_frame(self.context, frame, metadata)
            if result is not None:
                yield result

    def capture(self) -> Optional[np.ndarray]:
        """Composites video frame, object layer and overlay into one BGR image."""
        if not self.context.is_active:
            return None
        if self.context.last_frame is None:
            self.status_machine.error(CAPTURE_FAILED)
            return None
        image = composite(self.context.last_frame, [self.context.object_layer, self.overlay.surface])
        self.status_machine.set(self.status.status, PHOTO_CAPTURED, StatusCategory.SUCCESS)
        return image

    def debug_status(self) -> dict:
        obj = self.context.tracked_object
        stream = self.context.stream
        return {
            "is_active": self.context.is_active,
            "frame_size": (self.context.frame_width, self.context.frame_height),
            "stream": stream.get_stats() if stream is not None and hasattr(stream, "get_stats") else None,
            "object_visible": obj.visible if obj is not None else None,
            "status": self.status.status.value,
            "message": self.status.message,
        }
