# Heatmap Keypoint Decoder
# Per-channel argmax over a [1, K, H, W] confidence tensor

import numpy as np
from typing import Optional, Tuple

from .keypoints import Keypoint


def _validate_heatmaps(heatmaps: np.ndarray) -> np.ndarray:
    heatmaps = np.asarray(heatmaps)
    if heatmaps.ndim != 4:
        raise ValueError(
            f"Expected heatmap tensor [batch, keypoints, height, width], "
            f"got shape {heatmaps.shape}"
        )
    if heatmaps.shape[0] == 0:
        raise ValueError("Heatmap tensor has an empty batch dimension")
    if heatmaps.shape[2] == 0 or heatmaps.shape[3] == 0:
        raise ValueError(f"Heatmap tensor has empty spatial dimensions: {heatmaps.shape}")
    return heatmaps


def find_heatmap_peaks(heatmaps: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Locate the hottest cell of every keypoint channel.

    Ties go to the first cell in row-major order. NaN cells never win; a
    channel without any finite maximum resolves to cell (0, 0).

    Args:
        heatmaps: Tensor of shape [1, K, H, W]. Only batch 0 is read.

    Returns:
        (cells, scores): cells is an int array (K, 2) of (row, col),
        scores is the confidence at each peak.
    """
    heatmaps = _validate_heatmaps(heatmaps)
    channels = heatmaps[0]
    num_keypoints, height, width = channels.shape

    flat = channels.reshape(num_keypoints, height * width).astype(np.float64)
    flat = np.where(np.isnan(flat), -np.inf, flat)

    # np.argmax returns the first occurrence, matching a row-major scan
    flat_idx = np.argmax(flat, axis=1)
    scores = flat[np.arange(num_keypoints), flat_idx]

    rows, cols = np.unravel_index(flat_idx, (height, width))
    cells = np.stack([rows, cols], axis=1).astype(np.int64)
    return cells, scores


def decode_keypoints(heatmaps: np.ndarray,
                     original_width: float,
                     original_height: float,
                     output_width: Optional[float] = None,
                     output_height: Optional[float] = None,
                     expected_keypoints: Optional[int] = None) -> Tuple[Keypoint, ...]:
    """
    Convert a heatmap tensor into keypoints in original-image pixels.

    Each peak cell is mapped through its center:
    x = (col + 0.5) * original_width / output_width, likewise for y.
    No confidence threshold is applied, every channel yields a point.

    Args:
        heatmaps: Tensor of shape [1, K, H, W].
        original_width: Width of the image the keypoints are mapped to.
        original_height: Height of the image the keypoints are mapped to.
        output_width: Heatmap width used for scaling (defaults to W).
        output_height: Heatmap height used for scaling (defaults to H).
        expected_keypoints: If given, K must equal this value.

    Returns:
        Tuple of K keypoints ordered by channel index.
    """
    heatmaps = _validate_heatmaps(heatmaps)
    num_keypoints, height, width = heatmaps.shape[1:4]

    if expected_keypoints is not None and num_keypoints != expected_keypoints:
        raise ValueError(
            f"Heatmap tensor has {num_keypoints} keypoint channels, "
            f"expected {expected_keypoints}"
        )

    output_width = width if output_width is None else output_width
    output_height = height if output_height is None else output_height
    if min(original_width, original_height, output_width, output_height) <= 0:
        raise ValueError(
            f"Image and heatmap dimensions must be positive, got "
            f"original=({original_width}, {original_height}), "
            f"output=({output_width}, {output_height})"
        )

    scale_x = original_width / output_width
    scale_y = original_height / output_height

    cells, _ = find_heatmap_peaks(heatmaps)
    return tuple(
        Keypoint(float((col + 0.5) * scale_x), float((row + 0.5) * scale_y))
        for row, col in cells
    )
