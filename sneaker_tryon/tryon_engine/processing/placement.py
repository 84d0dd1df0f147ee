# sneaker_tryon/tryon_engine/processing/placement.py
import logging
import math
from typing import Optional
from ..common.config import PlacementConfig
from ..common.enums import FootSide
from ..common.models import Landmark, FootCandidate, PlacementTransform

logger = logging.getLogger(__name__)


class PlacementTransformer:
    """
    Maps a complete foot (ankle + toe) from normalized image space to an
    object transform in scene units.

    Stateless: the same landmarks and side always give the same transform.
    Depth is a fixed plane in front of the camera, no monocular depth
    estimate is attempted.
    """

    def __init__(self, config: PlacementConfig = None):
        self.config = config or PlacementConfig()

    def compute(self, ankle: Landmark, toe: Landmark, side: FootSide) -> PlacementTransform:
        cfg = self.config
        dx = toe.x - ankle.x
        dy = toe.y - ankle.y

        center_x = (ankle.x + toe.x) / 2
        center_y = (ankle.y + toe.y) / 2

        # Image Y grows downward, scene Y grows upward.
        screen_x = (center_x - 0.5) * cfg.position_scale
        screen_y = -(center_y - 0.5) * cfg.position_scale

        # Nudge toward the toes so the object sits under the foot, not the ankle.
        final_x = screen_x + dx * cfg.forward_offset
        final_y = screen_y - dy * cfg.forward_offset

        foot_angle = math.atan2(dy, dx)
        foot_length = math.sqrt(dx * dx + dy * dy)
        scale = max(cfg.scale_min, min(cfg.scale_max, foot_length * cfg.scale_gain))

        transform = PlacementTransform(
            position=(final_x, final_y, cfg.depth),
            rotation_z=-foot_angle,
            mirror_y=side == FootSide.LEFT,
            scale=scale,
            side=side,
        )
        logger.debug(
            "Shoe positioned at (%.2f, %.2f, %.2f) scale=%.3f foot=%s angle=%.1f deg",
            final_x, final_y, cfg.depth, scale, side.value, math.degrees(foot_angle),
        )
        return transform

    def place(self, candidate: Optional[FootCandidate]) -> Optional[PlacementTransform]:
        """Returns None unless the candidate has both ankle and toe; the caller then hides the object."""
        if candidate is None or not candidate.is_complete:
            return None
        return self.compute(candidate.ankle, candidate.toe, candidate.side)
