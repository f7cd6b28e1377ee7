# I/O Utility
# Load saved heatmap tensors and images, persist annotated output

import cv2
import numpy as np
from pathlib import Path


def load_heatmaps(path: str) -> np.ndarray:
    """
    Load a heatmap tensor saved with np.save.

    Args:
        path: Path to a .npy file holding [1, K, H, W] or [K, H, W].

    Returns:
        Float array of shape [1, K, H, W].
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Heatmap file not found: {path}")

    heatmaps = np.load(path)
    if heatmaps.ndim == 3:
        heatmaps = heatmaps[np.newaxis]
    if heatmaps.ndim != 4:
        raise ValueError(f"Heatmap file {path} has shape {heatmaps.shape}, expected 3 or 4 dims")
    return heatmaps.astype(np.float32, copy=False)


def load_image(path: str) -> np.ndarray:
    """Read a BGR image with OpenCV."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode image: {path}")
    return image


def save_image(path: str, image: np.ndarray) -> Path:
    """Write an image, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), image):
        raise ValueError(f"Could not write image: {path}")
    return path
