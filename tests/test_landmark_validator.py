"""Tests for the visibility filter on the six foot landmarks."""

import numpy as np
import pytest

from conftest import make_landmarks
from tryon_engine.common.config import TrackingConfig
from tryon_engine.common.models import Landmark
from tryon_engine.processing.landmark_validator import (
    LandmarkValidator,
    RIGHT_ANKLE,
    landmarks_from_array,
)


@pytest.mark.parametrize("visibility,present", [
    (0.0, False),
    (0.49, False),
    (0.5, False),
    (0.5000001, True),
    (0.9, True),
    (1.0, True),
])
def test_visibility_threshold_is_strict(visibility, present):
    feet = LandmarkValidator().validate(make_landmarks(right_ankle=(0.5, 0.6, visibility)))
    assert feet.pose_detected
    assert (feet.right_ankle is not None) == present


def test_visible_landmark_is_returned_unchanged():
    landmarks = make_landmarks(left_toe=(0.31, 0.72, 0.8))
    feet = LandmarkValidator().validate(landmarks)
    assert feet.left_toe == landmarks[31]
    assert feet.left_toe.x == 0.31 and feet.left_toe.y == 0.72


def test_all_six_indices_are_mapped():
    landmarks = make_landmarks(
        left_ankle=(0.1, 0.1, 0.9), right_ankle=(0.2, 0.2, 0.9),
        left_heel=(0.3, 0.3, 0.9), right_heel=(0.4, 0.4, 0.9),
        left_toe=(0.5, 0.5, 0.9), right_toe=(0.6, 0.6, 0.9),
    )
    feet = LandmarkValidator().validate(landmarks)
    assert feet.left_ankle.x == 0.1
    assert feet.right_ankle.x == 0.2
    assert feet.left_heel.x == 0.3
    assert feet.right_heel.x == 0.4
    assert feet.left_toe.x == 0.5
    assert feet.right_toe.x == 0.6


@pytest.mark.parametrize("landmarks", [None, [], make_landmarks(count=32, right_ankle=(0.5, 0.5, 0.9))])
def test_short_or_missing_list_is_no_pose(landmarks):
    feet = LandmarkValidator().validate(landmarks)
    assert not feet.pose_detected
    assert feet.right_ankle is None
    assert feet.left_toe is None


def test_threshold_comes_from_config():
    validator = LandmarkValidator(TrackingConfig(min_visibility=0.8))
    feet = validator.validate(make_landmarks(right_ankle=(0.5, 0.6, 0.75)))
    assert feet.right_ankle is None


def test_landmarks_from_array():
    arr = np.zeros((33, 4))
    arr[RIGHT_ANKLE] = [0.5, 0.6, -0.1, 0.9]
    landmarks = landmarks_from_array(arr)
    assert len(landmarks) == 33
    assert landmarks[RIGHT_ANKLE] == Landmark(x=0.5, y=0.6, z=-0.1, visibility=0.9)
