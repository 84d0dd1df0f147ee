"""Overlay drawing is null-safe and cleared between frames."""

from conftest import make_landmarks
from tryon_engine.common.enums import FootSide
from tryon_engine.common.models import FootCandidate, FootSelection, Landmark
from tryon_engine.processing.foot_selector import select_foot
from tryon_engine.processing.landmark_validator import LandmarkValidator
from tryon_engine.visualization.overlay_renderer import OverlayRenderer, ANKLE_COLOR, TOE_COLOR


def test_markers_at_pixel_positions():
    overlay = OverlayRenderer(640, 480)
    feet = LandmarkValidator().validate(make_landmarks(right_ankle=(0.25, 0.5, 0.9), right_toe=(0.75, 0.5, 0.9)))
    overlay.draw_foot_indicators(select_foot(feet))

    assert tuple(overlay.surface[240, 160]) == ANKLE_COLOR
    assert tuple(overlay.surface[240, 480]) == TOE_COLOR
    # Dashed connection between the two markers.
    assert overlay.surface[240, 200:440, 3].any()
    assert not overlay.surface[240, 260:440, 3].all()


def test_missing_landmarks_do_not_raise():
    overlay = OverlayRenderer(320, 240)
    selection = FootSelection(
        left=FootCandidate(side=FootSide.LEFT),
        right=FootCandidate(side=FootSide.RIGHT, heel=Landmark(x=0.5, y=0.5, visibility=0.9)),
    )
    overlay.draw_foot_indicators(selection)
    overlay.draw_foot_point(None, "R-ANKLE", ANKLE_COLOR)
    overlay.draw_foot_connection(None, Landmark(x=0.1, y=0.1, visibility=0.9))
    assert overlay.surface[120, 160, 3] > 0


def test_clear_empties_the_surface():
    overlay = OverlayRenderer(320, 240)
    overlay.draw_no_pose_hint()
    assert overlay.surface.any()
    overlay.clear()
    assert not overlay.surface.any()


def test_hints_draw_text():
    overlay = OverlayRenderer(640, 480)
    overlay.draw_pose_detection_hint()
    assert overlay.surface[:, :, 3].any()


def test_resize_matches_frame():
    overlay = OverlayRenderer(640, 480)
    overlay.resize(1280, 720)
    assert overlay.size == (1280, 720)
    assert overlay.surface.shape == (720, 1280, 4)
