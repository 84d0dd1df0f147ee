"""Stream acquisition without touching a real device."""

import asyncio

import pytest

from tryon_engine.camera.camera_manager import StreamRequest, acquire_stream, resolve_source
from tryon_engine.common.config import CameraConfig
from tryon_engine.common.enums import CameraFacing
from tryon_engine.common.errors import AcquisitionError, CameraNotFoundError, CameraPermissionError


class FakeCamera:
    def __init__(self, source, request, buffer_size):
        self.source = source
        self.request = request
        self.buffer_size = buffer_size
        self.started = False

    def start(self):
        self.started = True
        return self


def _raising(exc):
    def factory(source, request, buffer_size):
        raise exc
    return factory


def test_request_from_config():
    request = StreamRequest.from_config(CameraConfig(resolution=(640, 360), target_fps=15))
    assert (request.width, request.height, request.fps) == (640, 360, 15)
    assert request.facing == CameraFacing.USER


def test_facing_selects_device():
    config = CameraConfig(facing=CameraFacing.ENVIRONMENT)
    assert resolve_source(config, StreamRequest.from_config(config)) == 1
    assert resolve_source(CameraConfig(), StreamRequest()) == 0


def test_explicit_source_wins():
    config = CameraConfig(source="clip.mp4", facing=CameraFacing.ENVIRONMENT)
    assert resolve_source(config, StreamRequest.from_config(config)) == "clip.mp4"


def test_acquire_starts_stream():
    stream = asyncio.run(acquire_stream(CameraConfig(buffer_size=3), factory=FakeCamera))
    assert stream.started
    assert stream.source == 0
    assert stream.buffer_size == 3


@pytest.mark.parametrize("raised,expected", [
    (CameraNotFoundError("gone"), CameraNotFoundError),
    (PermissionError("denied"), CameraPermissionError),
    (OSError("busy"), AcquisitionError),
])
def test_acquire_maps_failures(raised, expected):
    with pytest.raises(expected) as info:
        asyncio.run(acquire_stream(CameraConfig(), factory=_raising(raised)))
    assert info.value.user_message
