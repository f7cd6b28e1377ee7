# Keypoint Layout
# COCO 17-point body layout shared by the decoder, classifier and renderer

from typing import NamedTuple, Tuple


class Keypoint(NamedTuple):
    """Single body joint in original-image pixel coordinates."""
    x: float
    y: float


KEYPOINT_NAMES: Tuple[str, ...] = (
    'nose',
    'left_eye', 'right_eye',
    'left_ear', 'right_ear',
    'left_shoulder', 'right_shoulder',
    'left_elbow', 'right_elbow',
    'left_wrist', 'right_wrist',
    'left_hip', 'right_hip',
    'left_knee', 'right_knee',
    'left_ankle', 'right_ankle',
)

NUM_KEYPOINTS = len(KEYPOINT_NAMES)

NOSE = 0
LEFT_SHOULDER, RIGHT_SHOULDER = 5, 6
LEFT_HIP, RIGHT_HIP = 11, 12
LEFT_KNEE, RIGHT_KNEE = 13, 14
LEFT_ANKLE, RIGHT_ANKLE = 15, 16

# Skeleton edges for drawing (nose-shoulder edges left out, they clutter the torso)
COCO_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (5, 6),  # Shoulders
    (5, 7), (7, 9),  # Left arm
    (6, 8), (8, 10),  # Right arm
    (11, 12),  # Hips
    (5, 11), (6, 12),  # Torso
    (11, 13), (13, 15),  # Left leg
    (12, 14), (14, 16),  # Right leg
    (0, 1), (0, 2),  # Nose to eyes
    (1, 3), (2, 4),  # Eyes to ears
)
