# sneaker_tryon/tryon_engine/visualization/overlay_renderer.py
import cv2
import math
import numpy as np
from typing import Optional, Tuple
from ..common.enums import FootSide
from ..common.models import Landmark, FootCandidate, FootSelection

# BGRA
ANKLE_COLOR = (0, 255, 0, 255)
TOE_COLOR = (107, 107, 255, 255)
HEEL_COLOR = (0, 200, 255, 255)
CONNECTION_COLOR = (0, 255, 0, 255)
BORDER_COLOR = (255, 255, 255, 255)
SHADOW_COLOR = (0, 0, 0, 255)
POSE_HINT_COLOR = (0, 255, 255, 178)
NO_POSE_HINT_COLOR = (107, 107, 255, 178)

MARKER_RADIUS = 10
HEEL_RADIUS = 6
DASH_LENGTH = 5
GAP_LENGTH = 5


class OverlayRenderer:
    """Diagnostic 2D layer drawn over the video: foot markers, the active foot axis and hints."""

    def __init__(self, width: int = 1280, height: int = 720):
        self.font = cv2.FONT_HERSHEY_SIMPLEX
        self.surface = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.shape[1], self.surface.shape[0]

    def resize(self, width: int, height: int):
        if (width, height) != self.size:
            self.surface = np.zeros((height, width, 4), dtype=np.uint8)

    def clear(self):
        self.surface[:] = 0

    def draw_foot_indicators(self, selection: FootSelection):
        for candidate in (selection.left, selection.right):
            self._draw_candidate(candidate)

        active = selection.placement
        if active is not None:
            self.draw_foot_connection(active.ankle, active.toe)

    def _draw_candidate(self, candidate: FootCandidate):
        tag = "L" if candidate.side == FootSide.LEFT else "R"
        self.draw_foot_point(candidate.ankle, f"{tag}-ANKLE", ANKLE_COLOR)
        self.draw_foot_point(candidate.heel, f"{tag}-HEEL", HEEL_COLOR, radius=HEEL_RADIUS)
        self.draw_foot_point(candidate.toe, f"{tag}-TOE", TOE_COLOR)

    def draw_foot_point(self, landmark: Optional[Landmark], label: str, color, radius: int = MARKER_RADIUS):
        if landmark is None:
            return
        width, height = self.size
        x, y = landmark.to_pixel(width, height)
        center = (int(round(x)), int(round(y)))
        cv2.circle(self.surface, center, radius, color, -1, cv2.LINE_AA)
        cv2.circle(self.surface, center, radius, BORDER_COLOR, 2, cv2.LINE_AA)
        self._shadowed_text(label, (center[0] + 15, center[1] + 5), 0.5, BORDER_COLOR)

    def draw_foot_connection(self, ankle: Optional[Landmark], toe: Optional[Landmark], color=CONNECTION_COLOR):
        if ankle is None or toe is None:
            return
        width, height = self.size
        x0, y0 = ankle.to_pixel(width, height)
        x1, y1 = toe.to_pixel(width, height)
        length = math.hypot(x1 - x0, y1 - y0)
        if length == 0:
            return
        ux, uy = (x1 - x0) / length, (y1 - y0) / length
        pos = 0.0
        while pos < length:
            end = min(pos + DASH_LENGTH, length)
            p0 = (int(round(x0 + ux * pos)), int(round(y0 + uy * pos)))
            p1 = (int(round(x0 + ux * end)), int(round(y0 + uy * end)))
            cv2.line(self.surface, p0, p1, color, 3, cv2.LINE_AA)
            pos += DASH_LENGTH + GAP_LENGTH

    def draw_pose_detection_hint(self):
        self._centered_lines(["Pose detection active", "Point camera at your feet"], POSE_HINT_COLOR, -40)

    def draw_no_pose_hint(self):
        self._centered_lines(["Looking for person...", "Make sure you are in the camera view"], NO_POSE_HINT_COLOR, -20)

    def _centered_lines(self, lines, color, first_offset: int):
        width, height = self.size
        for i, text in enumerate(lines):
            (text_w, _), _ = cv2.getTextSize(text, self.font, 0.6, 2)
            origin = (width // 2 - text_w // 2, height // 2 + first_offset + i * 24)
            cv2.putText(self.surface, text, origin, self.font, 0.6, color, 2, cv2.LINE_AA)

    def _shadowed_text(self, text: str, origin, font_scale: float, color):
        shadow = (origin[0] + 1, origin[1] + 1)
        cv2.putText(self.surface, text, shadow, self.font, font_scale, SHADOW_COLOR, 3, cv2.LINE_AA)
        cv2.putText(self.surface, text, origin, self.font, font_scale, color, 1, cv2.LINE_AA)
