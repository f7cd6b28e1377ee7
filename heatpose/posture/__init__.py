# Posture Analysis Module
from .keypoints import Keypoint, KEYPOINT_NAMES, NUM_KEYPOINTS, COCO_CONNECTIONS
from .decoder import decode_keypoints, find_heatmap_peaks
from .classifier import PostureClassifier, PostureLabel, PostureMeasurements, classify_posture, measure_posture

__all__ = [
    'Keypoint', 'KEYPOINT_NAMES', 'NUM_KEYPOINTS', 'COCO_CONNECTIONS',
    'decode_keypoints', 'find_heatmap_peaks',
    'PostureClassifier', 'PostureLabel', 'PostureMeasurements',
    'classify_posture', 'measure_posture',
]
