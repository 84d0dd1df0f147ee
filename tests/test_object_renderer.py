"""Projection and drawing of the tracked sneaker."""

import math

import numpy as np
import pytest

from tryon_engine.common.config import RenderingConfig
from tryon_engine.common.enums import FootSide
from tryon_engine.common.models import PlacementTransform
from tryon_engine.rendering.object_renderer import SneakerRenderer, euler_xyz_matrix


def _transform(position=(0.0, 0.0, -2.0), rotation_z=0.0, side=FootSide.RIGHT, scale=0.1):
    return PlacementTransform(position=position, rotation_z=rotation_z, mirror_y=side == FootSide.LEFT, scale=scale, side=side)


def test_cloned_object_starts_hidden():
    renderer = SneakerRenderer(RenderingConfig())
    obj = renderer.clone_tracked_object()
    assert not obj.visible
    assert obj.scale == 0.1
    assert not renderer.render(320, 240).any()


def test_visible_object_is_drawn_at_projected_center():
    renderer = SneakerRenderer(RenderingConfig())
    obj = renderer.clone_tracked_object()
    renderer.apply_transform(obj, _transform())
    layer = renderer.render(640, 480)
    assert obj.visible
    assert layer[240, 320, 3] == 255
    assert layer[0, 0, 3] == 0


def test_projection_of_origin_plane():
    renderer = SneakerRenderer(RenderingConfig())
    focal = 240 / math.tan(math.radians(30))
    pixels = renderer.project(np.array([[1.0, 1.0, -2.0]]), 640, 480)
    assert pixels[0, 0] == pytest.approx(320 + focal / 7)
    assert pixels[0, 1] == pytest.approx(240 - focal / 7)


def test_points_behind_camera_are_not_projected():
    renderer = SneakerRenderer(RenderingConfig())
    assert renderer.project(np.array([[0.0, 0.0, 6.0]]), 640, 480) is None


def test_left_foot_mirror_flips_the_outline():
    renderer = SneakerRenderer(RenderingConfig())
    right = renderer.clone_tracked_object()
    left = renderer.clone_tracked_object()
    renderer.apply_transform(right, _transform(side=FootSide.RIGHT))
    renderer.apply_transform(left, _transform(side=FootSide.LEFT))
    np.testing.assert_allclose(left.world_vertices()[:, 0] - left.position[0], -(right.world_vertices()[:, 0] - right.position[0]), atol=1e-9)
    np.testing.assert_allclose(left.world_vertices()[:, 1], right.world_vertices()[:, 1], atol=1e-9)


def test_euler_z_rotation():
    rotated = euler_xyz_matrix(0.0, 0.0, math.pi / 2) @ np.array([1.0, 0.0, 0.0])
    np.testing.assert_allclose(rotated, [0.0, 1.0, 0.0], atol=1e-12)


def test_removed_object_is_not_rendered():
    renderer = SneakerRenderer(RenderingConfig())
    obj = renderer.clone_tracked_object()
    renderer.apply_transform(obj, _transform())
    renderer.remove(obj)
    assert not renderer.render(320, 240).any()
