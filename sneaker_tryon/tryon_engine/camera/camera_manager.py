# sneaker_tryon/tryon_engine/camera/camera_manager.py
import asyncio
import cv2
import logging
import os
import sys
import time
import threading
import numpy as np
from collections import deque
from pydantic import BaseModel
from typing import AsyncIterator, Callable, Tuple, Optional, Union
from ..common.config import CameraConfig
from ..common.enums import CameraFacing
from ..common.errors import AcquisitionError, CameraNotFoundError, CameraPermissionError
from ..common.models import FrameMetadata

logger = logging.getLogger(__name__)

class StreamRequest(BaseModel):
    """What the session asks the camera for."""
    facing: CameraFacing = CameraFacing.USER
    width: int = 1280
    height: int = 720
    fps: int = 30

    @classmethod
    def from_config(cls, config: CameraConfig) -> "StreamRequest":
        width, height = config.resolution
        return cls(facing=config.facing, width=width, height=height, fps=config.target_fps)


def resolve_source(config: CameraConfig, request: StreamRequest) -> Union[int, str]:
    if config.source is not None:
        return config.source
    return config.devices.get(request.facing, 0)


class CameraManager:
    """Manages high-performance, non-blocking camera I/O in a separate thread."""

    def __init__(self, source: Union[int, str], request: StreamRequest, buffer_size: int = 5):
        self._source = source
        self._resolution = (request.width, request.height)
        self._target_fps = request.fps
        self._cap = cv2.VideoCapture(self._source)
        if not self._cap.isOpened():
            self._cap.release()
            device = f"/dev/video{source}" if isinstance(source, int) else None
            if device and sys.platform.startswith("linux") and os.path.exists(device) and not os.access(device, os.R_OK):
                raise CameraPermissionError(f"No read access to {device}")
            raise CameraNotFoundError(f"Cannot open camera source: {self._source}")

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._resolution[0])
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._resolution[1])
        self._cap.set(cv2.CAP_PROP_FPS, self._target_fps)

        self._buffer = deque(maxlen=buffer_size)
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._update, daemon=True)
        self._running = False
        self._released = False
        self._frame_id = 0
        self._dropped_frames = 0

    def _update(self):
        """The core frame-grabbing loop running in a dedicated thread."""
        while self._running:
            grabbed = self._cap.grab()
            if not grabbed:
                self._dropped_frames += 1
                time.sleep(0.01) # Avoid busy-waiting on error
                continue

            ret, frame = self._cap.retrieve()
            if ret:
                timestamp = time.perf_counter()
                self._frame_id += 1
                with self._lock:
                    self._buffer.append((frame, self._frame_id, timestamp))
            else:
                self._dropped_frames += 1

    def get_frame(self) -> Tuple[Optional[np.ndarray], Optional[FrameMetadata]]:
        """Returns the latest frame and its metadata from the buffer."""
        with self._lock:
            if not self._buffer:
                return None, None
            frame, frame_id, timestamp = self._buffer[-1]

        metadata = FrameMetadata(
            frame_id=frame_id,
            timestamp=timestamp,
            source_resolution=(frame.shape[1], frame.shape[0])
        )
        return frame.copy(), metadata

    async def frames(self) -> AsyncIterator[Tuple[np.ndarray, FrameMetadata]]:
        """
        Yields every new frame once, in arrival order.

        Frames that arrive while the consumer is still busy are skipped; only
        the latest one is handed out on the next iteration.
        """
        last_id = 0
        while self._running:
            frame, metadata = self.get_frame()
            if frame is None or metadata.frame_id == last_id:
                await asyncio.sleep(0.001) # Wait briefly if no new frame is available
                continue
            last_id = metadata.frame_id
            yield frame, metadata

    def get_stats(self) -> dict:
        """Returns comprehensive camera health and performance statistics."""
        return {
            "is_running": self.is_running(),
            "buffer_size": len(self._buffer),
            "dropped_frames": self._dropped_frames,
            "target_fps": self._target_fps,
            "actual_resolution": (self._cap.get(cv2.CAP_PROP_FRAME_WIDTH), self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        }

    def is_running(self) -> bool:
        return self._running

    def start(self) -> "CameraManager":
        self._running = True
        self._thread.start()
        logger.info("CameraManager started on source %s.", self._source)
        return self

    def stop(self):
        """Stops the grabber thread and releases the device. Safe to call more than once."""
        if self._released:
            return
        self._running = False
        if self._thread.is_alive():
            self._thread.join()
        self._cap.release()
        self._released = True
        logger.info("CameraManager stopped and resources released.")

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


async def acquire_stream(
    config: CameraConfig,
    request: StreamRequest = None,
    factory: Callable[..., CameraManager] = CameraManager,
) -> CameraManager:
    """
    Opens and starts a camera stream without blocking the event loop.

    Raises AcquisitionError (or one of its subclasses) if no stream can be
    obtained.
    """
    request = request or StreamRequest.from_config(config)
    source = resolve_source(config, request)

    def _open():
        return factory(source, request, config.buffer_size).start()

    try:
        return await asyncio.to_thread(_open)
    except AcquisitionError:
        raise
    except PermissionError as e:
        raise CameraPermissionError(str(e)) from e
    except (OSError, cv2.error) as e:
        raise AcquisitionError(str(e)) from e
