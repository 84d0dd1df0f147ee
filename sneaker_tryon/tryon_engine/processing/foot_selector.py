# sneaker_tryon/tryon_engine/processing/foot_selector.py
import logging
from typing import Optional
from ..common.enums import FootSide
from ..common.models import FootLandmarks, FootCandidate, FootSelection

logger = logging.getLogger(__name__)


def _first(*candidates: FootCandidate, predicate) -> Optional[FootCandidate]:
    for candidate in candidates:
        if predicate(candidate):
            return candidate
    return None


def select_foot(feet: FootLandmarks) -> FootSelection:
    """
    Picks the foot to anchor the object to.

    The right foot always wins when both are usable. This is a fixed policy,
    not something inferred from the detections: a complete right foot, then a
    complete left foot; failing both, the first "good" foot in the same order
    is reported for overlay and status only.
    """
    left = feet.candidate(FootSide.LEFT)
    right = feet.candidate(FootSide.RIGHT)

    placement = _first(right, left, predicate=lambda c: c.is_complete)
    overlay = placement or _first(right, left, predicate=lambda c: c.is_good)

    logger.debug("Foot detection: Left=%d/3, Right=%d/3", left.visible_count, right.visible_count)
    return FootSelection(left=left, right=right, placement=placement, overlay=overlay)
