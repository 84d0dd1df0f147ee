import numpy as np
import pytest

from tryon_engine.common.config import AppConfig
from tryon_engine.common.errors import EstimationError
from tryon_engine.common.models import FrameMetadata, Landmark, PoseDetection
from tryon_engine.processing.landmark_validator import (
    LEFT_ANKLE, RIGHT_ANKLE, LEFT_HEEL, RIGHT_HEEL, LEFT_FOOT_INDEX, RIGHT_FOOT_INDEX,
)

FOOT_INDICES = {
    "left_ankle": LEFT_ANKLE,
    "right_ankle": RIGHT_ANKLE,
    "left_heel": LEFT_HEEL,
    "right_heel": RIGHT_HEEL,
    "left_toe": LEFT_FOOT_INDEX,
    "right_toe": RIGHT_FOOT_INDEX,
}


def make_landmarks(count=33, **points):
    """
    A full pose where every landmark is below the visibility threshold,
    except the named foot points given as (x, y, visibility).
    """
    landmarks = [Landmark(x=0.5, y=0.5, z=0.0, visibility=0.1) for _ in range(count)]
    for name, (x, y, visibility) in points.items():
        landmarks[FOOT_INDICES[name]] = Landmark(x=x, y=y, z=0.0, visibility=visibility)
    return landmarks


def make_frame(width=640, height=480):
    return np.full((height, width, 3), 40, dtype=np.uint8)


def make_metadata(frame_id=1, timestamp=0.0, width=640, height=480):
    return FrameMetadata(frame_id=frame_id, timestamp=timestamp, source_resolution=(width, height))


class ScriptedEstimator:
    """Returns queued landmark lists in order; an Exception in the queue is raised as EstimationError."""

    def __init__(self, *outputs):
        self.outputs = list(outputs)
        self.calls = 0

    def estimate(self, frame, metadata):
        self.calls += 1
        output = self.outputs.pop(0) if self.outputs else None
        if isinstance(output, Exception):
            raise EstimationError(str(output)) from output
        return PoseDetection(frame_id=metadata.frame_id, landmarks=output)

    def close(self):
        pass


class FakeStream:
    def __init__(self, frames=(), on_stop=None):
        self._frames = list(frames)
        self.on_stop = on_stop
        self.stopped = False

    async def frames(self):
        for frame, metadata in self._frames:
            if self.stopped:
                return
            yield frame, metadata

    def get_stats(self):
        return {"is_running": not self.stopped}

    def stop(self):
        if self.on_stop is not None:
            self.on_stop()
        self.stopped = True


@pytest.fixture
def config():
    return AppConfig()
