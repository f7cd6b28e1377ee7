# Pose Posture Pipeline
# Decode -> classify -> render, with the label computed once and passed along

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import Config, default_config
from .posture.classifier import PostureClassifier, PostureLabel
from .posture.decoder import decode_keypoints, find_heatmap_peaks
from .posture.keypoints import Keypoint
from .visualization.renderer import render_predictions


@dataclass
class PoseResult:
    """Output of one pipeline run."""
    keypoints: Tuple[Keypoint, ...]
    scores: np.ndarray  # Peak confidence per keypoint, reporting only
    label: PostureLabel
    annotated: Optional[np.ndarray] = None


class PosturePipeline:
    """
    Single-image posture analysis from a precomputed heatmap tensor.

    Stateless between calls; independent images may be processed
    concurrently as long as each call gets its own arrays.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize pipeline.

        Args:
            config: Framework configuration.
        """
        self.config = config or default_config
        self.classifier = PostureClassifier(self.config.classifier)

    def analyze(self, heatmaps: np.ndarray,
                original_width: float, original_height: float,
                output_size: Optional[Tuple[float, float]] = None) -> PoseResult:
        """
        Decode keypoints and classify posture.

        Args:
            heatmaps: Tensor of shape [1, K, H, W].
            original_width: Target image width.
            original_height: Target image height.
            output_size: (width, height) of the heatmap for scaling,
                defaults to the tensor's own size.

        Returns:
            PoseResult without an annotated image.
        """
        output_width, output_height = output_size if output_size else (None, None)
        keypoints = decode_keypoints(
            heatmaps,
            original_width,
            original_height,
            output_width=output_width,
            output_height=output_height,
            expected_keypoints=self.config.decoder.num_keypoints,
        )
        _, scores = find_heatmap_peaks(heatmaps)
        label = self.classifier.classify(keypoints)
        return PoseResult(keypoints=keypoints, scores=scores, label=label)

    def process(self, heatmaps: np.ndarray, image: np.ndarray,
                output_size: Optional[Tuple[float, float]] = None) -> PoseResult:
        """
        Full pipeline: analyze and draw onto a copy of the image.

        Args:
            heatmaps: Tensor of shape [1, K, H, W].
            image: Original BGR image; left untouched.
            output_size: (width, height) of the heatmap for scaling.

        Returns:
            PoseResult with the annotated copy.
        """
        h, w = image.shape[:2]
        result = self.analyze(heatmaps, w, h, output_size=output_size)

        annotated = image.copy()
        render_predictions(
            annotated,
            result.keypoints,
            result.label,
            self.config.render.marker_ratio,
            style=self.config.render.style,
        )
        result.annotated = annotated
        return result
