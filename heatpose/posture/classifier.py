# Rule-based Posture Classifier
# Geometric decision procedure over COCO keypoints with torso-relative thresholds

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from ..config import ClassifierConfig
from .keypoints import (
    NUM_KEYPOINTS,
    LEFT_SHOULDER, RIGHT_SHOULDER,
    LEFT_HIP, RIGHT_HIP,
    LEFT_KNEE, RIGHT_KNEE,
    LEFT_ANKLE, RIGHT_ANKLE,
)


class PostureLabel(str, Enum):
    """Closed set of posture labels with their display text."""
    STANDING = "Standing"
    SITTING = "Sitting"
    LYING_DOWN = "Lying Down"
    SQUATTING = "Squatting/Crouching"
    UNKNOWN = "Unknown"
    FEW_KEYPOINTS = "Unknown (Few Keypoints)"
    UNRELIABLE_TORSO = "Unknown (Unreliable Torso Keypoints)"
    TORSO_NOT_UPRIGHT = "Unknown (Torso Not Upright)"

    @property
    def is_unknown(self) -> bool:
        return self.value.startswith("Unknown")


@dataclass
class PostureMeasurements:
    """Derived measurements (pixels, Y grows downward)."""
    shoulder_avg_y: float
    hip_avg_y: float
    knee_avg_y: float
    ankle_avg_y: float
    torso_height: float  # After stabilization
    hip_to_knee_vertical: float
    knee_to_ankle_vertical: float
    shoulder_to_ankle_vertical: float
    shoulder_width: float
    shoulder_y_align_diff: float
    hip_y_align_diff: float


PointLike = Union[Tuple[float, float], Sequence[float]]


def measure_posture(keypoints: Sequence[PointLike],
                    config: Optional[ClassifierConfig] = None) -> PostureMeasurements:
    """
    Compute the scalar measurements the classifier decides on.

    Args:
        keypoints: At least 17 (x, y) points in COCO order.
        config: Classifier thresholds (torso stabilization values).

    Returns:
        PostureMeasurements with a stabilized torso height.
    """
    config = config or ClassifierConfig()
    if len(keypoints) < NUM_KEYPOINTS:
        raise ValueError(
            f"Need {NUM_KEYPOINTS} keypoints to measure posture, got {len(keypoints)}"
        )
    pts = np.asarray(keypoints[:NUM_KEYPOINTS], dtype=np.float64).reshape(NUM_KEYPOINTS, 2)

    left_shoulder, right_shoulder = pts[LEFT_SHOULDER], pts[RIGHT_SHOULDER]
    left_hip, right_hip = pts[LEFT_HIP], pts[RIGHT_HIP]
    left_knee, right_knee = pts[LEFT_KNEE], pts[RIGHT_KNEE]
    left_ankle, right_ankle = pts[LEFT_ANKLE], pts[RIGHT_ANKLE]

    shoulder_avg_y = (left_shoulder[1] + right_shoulder[1]) / 2
    hip_avg_y = (left_hip[1] + right_hip[1]) / 2
    knee_avg_y = (left_knee[1] + right_knee[1]) / 2
    ankle_avg_y = (left_ankle[1] + right_ankle[1]) / 2

    torso_height = abs(hip_avg_y - shoulder_avg_y)
    # Foreshortened or noisy torsos get a pixel floor
    overall_height = abs(min(left_shoulder[1], right_shoulder[1]) -
                         max(left_ankle[1], right_ankle[1]))
    if torso_height < max(config.torso_height_fraction * overall_height, config.min_torso_px):
        torso_height = max(torso_height, config.min_torso_px)

    return PostureMeasurements(
        shoulder_avg_y=float(shoulder_avg_y),
        hip_avg_y=float(hip_avg_y),
        knee_avg_y=float(knee_avg_y),
        ankle_avg_y=float(ankle_avg_y),
        torso_height=float(torso_height),
        hip_to_knee_vertical=float(abs(knee_avg_y - hip_avg_y)),
        knee_to_ankle_vertical=float(abs(ankle_avg_y - knee_avg_y)),
        shoulder_to_ankle_vertical=float(abs(ankle_avg_y - shoulder_avg_y)),
        shoulder_width=float(max(1.0, abs(left_shoulder[0] - right_shoulder[0]))),
        shoulder_y_align_diff=float(abs(left_shoulder[1] - right_shoulder[1])),
        hip_y_align_diff=float(abs(left_hip[1] - right_hip[1])),
    )


class PostureClassifier:
    """
    Classifies a single-subject pose as standing, sitting, lying or squatting.

    Checks run in a fixed order and the first match wins: lying down,
    torso-upright gate, standing, sitting, squatting. Thresholds scale with
    torso height and shoulder width so the result does not depend on image
    resolution or camera distance. Uncertain poses map to an "Unknown"
    label rather than raising.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()

    def classify(self, keypoints: Sequence[PointLike]) -> PostureLabel:
        """
        Classify posture from COCO keypoints.

        Args:
            keypoints: Sequence of (x, y) points in image coordinates.

        Returns:
            PostureLabel
        """
        if len(keypoints) < NUM_KEYPOINTS:
            return PostureLabel.FEW_KEYPOINTS

        m = measure_posture(keypoints, self.config)
        if m.torso_height <= self.config.torso_epsilon:
            return PostureLabel.UNRELIABLE_TORSO

        if self._is_lying(m):
            return PostureLabel.LYING_DOWN

        c = self.config
        torso = m.torso_height

        # Hips must sit discernibly below shoulders for any upright pose
        if not m.shoulder_avg_y < m.hip_avg_y - c.torso_upright_margin * torso:
            return PostureLabel.TORSO_NOT_UPRIGHT

        upright = m.shoulder_to_ankle_vertical > c.upright_min_aspect_ratio * m.shoulder_width
        leg_threshold = c.leg_segment_threshold_factor * torso

        standing_legs = (m.hip_to_knee_vertical > leg_threshold and
                         m.knee_to_ankle_vertical > leg_threshold)
        standing_order = (m.hip_avg_y < m.knee_avg_y - c.standing_order_margin * torso and
                          m.knee_avg_y < m.ankle_avg_y - c.standing_order_margin * torso)
        if upright and standing_legs and standing_order:
            return PostureLabel.STANDING

        # Thigh compressed, shin extended
        sitting_legs = (m.hip_to_knee_vertical < leg_threshold and
                        m.knee_to_ankle_vertical > leg_threshold)
        sitting_order = (m.knee_avg_y < m.ankle_avg_y - c.sitting_ankle_margin * torso and
                         m.hip_avg_y < m.knee_avg_y + c.sitting_hip_margin * torso)
        if upright and sitting_legs and sitting_order:
            return PostureLabel.SITTING

        squat_thighs = m.hip_to_knee_vertical < leg_threshold * c.squat_thigh_factor
        squat_shins = m.knee_to_ankle_vertical < leg_threshold
        squat_hips_low = m.hip_avg_y > m.knee_avg_y - c.squat_hip_margin * torso
        if upright and squat_thighs and squat_shins and squat_hips_low:
            return PostureLabel.SQUATTING

        return PostureLabel.UNKNOWN

    def _is_lying(self, m: PostureMeasurements) -> bool:
        """Level shoulders and hips on a body wider (or flatter) than tall."""
        c = self.config
        torso = m.torso_height

        shoulders_level = m.shoulder_y_align_diff < c.lying_alignment_ratio * torso
        hips_level = m.hip_y_align_diff < c.lying_alignment_ratio * torso
        wider_than_tall = m.shoulder_width > c.lying_width_to_height_ratio * m.shoulder_to_ankle_vertical
        not_too_tall = m.shoulder_to_ankle_vertical < c.lying_max_vertical_to_width_ratio * m.shoulder_width
        compressed = (m.shoulder_to_ankle_vertical < c.compressed_vertical_ratio * torso and
                      torso > c.compressed_torso_to_width_ratio * m.shoulder_width)

        return shoulders_level and hips_level and (wider_than_tall or compressed) and not_too_tall


def classify_posture(keypoints: Sequence[PointLike],
                     config: Optional[ClassifierConfig] = None) -> PostureLabel:
    """Classify posture with a one-off classifier."""
    return PostureClassifier(config).classify(keypoints)
