# Shared test fixtures

import pytest

from heatpose.posture.keypoints import Keypoint, NUM_KEYPOINTS


def make_keypoints(shoulder_y: float, hip_y: float, knee_y: float, ankle_y: float,
                   shoulder_x=(90.0, 110.0), hip_x=(95.0, 105.0),
                   nose_y: float = None) -> list:
    """Build a 17-point COCO pose from per-joint-pair heights."""
    nose_y = shoulder_y - 20 if nose_y is None else nose_y
    center_x = (shoulder_x[0] + shoulder_x[1]) / 2
    points = [Keypoint(center_x, nose_y)] * NUM_KEYPOINTS

    # Eyes and ears near the nose, arms hanging from the shoulders
    for idx in range(1, 5):
        points[idx] = Keypoint(center_x + (-1) ** idx * 3, nose_y - 2)
    points[5] = Keypoint(shoulder_x[0], shoulder_y)
    points[6] = Keypoint(shoulder_x[1], shoulder_y)
    points[7] = Keypoint(shoulder_x[0], (shoulder_y + hip_y) / 2)
    points[8] = Keypoint(shoulder_x[1], (shoulder_y + hip_y) / 2)
    points[9] = Keypoint(shoulder_x[0], hip_y)
    points[10] = Keypoint(shoulder_x[1], hip_y)
    points[11] = Keypoint(hip_x[0], hip_y)
    points[12] = Keypoint(hip_x[1], hip_y)
    points[13] = Keypoint(hip_x[0], knee_y)
    points[14] = Keypoint(hip_x[1], knee_y)
    points[15] = Keypoint(hip_x[0], ankle_y)
    points[16] = Keypoint(hip_x[1], ankle_y)
    return points


@pytest.fixture
def standing_keypoints():
    return make_keypoints(shoulder_y=100, hip_y=200, knee_y=300, ankle_y=400, nose_y=80)


@pytest.fixture
def sitting_keypoints():
    return make_keypoints(shoulder_y=100, hip_y=200, knee_y=220, ankle_y=320)


@pytest.fixture
def lying_keypoints():
    return make_keypoints(shoulder_y=150, hip_y=155, knee_y=158, ankle_y=160,
                          shoulder_x=(0.0, 200.0), hip_x=(30.0, 170.0), nose_y=150)
