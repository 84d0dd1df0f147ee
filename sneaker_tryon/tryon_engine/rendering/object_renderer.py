# sneaker_tryon/tryon_engine/rendering/object_renderer.py
import cv2
import logging
import math
import numpy as np
from typing import List, Optional, Tuple
from ..common.config import RenderingConfig
from ..common.models import PlacementTransform

logger = logging.getLogger(__name__)

# Top-down sole outline of a right shoe, unit length, toe along +X.
# The inner (big toe) side bulges toward +Y so the left-foot mirror is visible.
SNEAKER_OUTLINE = np.array([
    [-0.50, 0.00], [-0.47, 0.12], [-0.35, 0.15], [-0.10, 0.14], [0.15, 0.18],
    [0.38, 0.17], [0.48, 0.10], [0.50, 0.00], [0.48, -0.09], [0.38, -0.15],
    [0.15, -0.15], [-0.10, -0.13], [-0.35, -0.15], [-0.47, -0.12],
])


def euler_xyz_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """Rotation matrix for intrinsic XYZ Euler angles (R = Rx @ Ry @ Rz)."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    rot_z = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return rot_x @ rot_y @ rot_z


class TrackedObject:
    """Handle to an object in the render scene. Only the session writes to it."""

    def __init__(self, vertices: np.ndarray, color: Tuple[int, int, int], scale: float):
        self.vertices = vertices
        self.color = color
        self.position = (0.0, 0.0, 0.0)
        self.rotation = (0.0, 0.0, 0.0)
        self.scale = scale
        self.visible = False

    def world_vertices(self) -> np.ndarray:
        rotation = euler_xyz_matrix(*self.rotation)
        return (self.vertices * self.scale) @ rotation.T + np.asarray(self.position)


class SneakerRenderer:
    """Draws tracked objects through a fixed perspective camera onto a transparent BGRA layer."""

    def __init__(self, config: RenderingConfig):
        self.config = config
        self.objects: List[TrackedObject] = []
        outline = SNEAKER_OUTLINE * config.object_length
        self._asset = np.column_stack([outline, np.zeros(len(outline))])

    def clone_tracked_object(self) -> TrackedObject:
        obj = TrackedObject(self._asset.copy(), tuple(self.config.object_color), self.config.initial_scale)
        self.objects.append(obj)
        return obj

    def remove(self, obj: TrackedObject):
        if obj in self.objects:
            self.objects.remove(obj)

    def apply_transform(self, obj: TrackedObject, transform: PlacementTransform):
        obj.position = transform.position
        obj.rotation = transform.rotation
        obj.scale = transform.scale
        obj.visible = True

    def project(self, points: np.ndarray, width: int, height: int) -> Optional[np.ndarray]:
        """Projects scene points to pixels; None if any point is behind the near plane."""
        depth = self.config.camera_z - points[:, 2]
        if np.any(depth <= self.config.near) or np.any(depth >= self.config.far):
            return None
        focal = (height / 2) / math.tan(math.radians(self.config.fov_degrees) / 2)
        u = width / 2 + focal * points[:, 0] / depth
        v = height / 2 - focal * points[:, 1] / depth
        return np.column_stack([u, v])

    def render(self, width: int, height: int) -> np.ndarray:
        layer = np.zeros((height, width, 4), dtype=np.uint8)
        for obj in self.objects:
            if not obj.visible:
                continue
            pixels = self.project(obj.world_vertices(), width, height)
            if pixels is None:
                logger.debug("Tracked object outside the view frustum, skipped.")
                continue
            polygon = np.round(pixels).astype(np.int32).reshape(-1, 1, 2)
            b, g, r = obj.color
            cv2.fillPoly(layer, [polygon], (b, g, r, 255), cv2.LINE_AA)
            cv2.polylines(layer, [polygon], True, (b // 2, g // 2, r // 2, 255), 2, cv2.LINE_AA)
        return layer
