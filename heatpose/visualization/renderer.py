# Pose Annotation Renderer
# Draws skeleton, joints and the posture label banner onto a BGR frame

import cv2
import numpy as np
from typing import Optional, Sequence, Tuple, Union

from ..config import RenderStyle
from ..posture.classifier import PostureLabel
from ..posture.keypoints import COCO_CONNECTIONS


def compute_marker_size(width: int, height: int, ratio: float) -> int:
    """Joint marker diameter in pixels, at least 2."""
    return max(2, int((width + height) * ratio / 2))


def _to_point(point: Sequence[float]) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))


def _draw_label_banner(image: np.ndarray, text: str, font_px: int,
                       style: RenderStyle) -> None:
    """Draw text over a semi-transparent box anchored at the top-left corner."""
    font = cv2.FONT_HERSHEY_SIMPLEX
    thickness = style.label_thickness
    font_scale = cv2.getFontScaleFromHeight(font, font_px, thickness)
    (text_w, text_h), baseline = cv2.getTextSize(text, font, font_scale, thickness)

    h, w = image.shape[:2]
    x1 = style.banner_offset
    y1 = style.banner_offset
    x2 = min(w, x1 + text_w + style.banner_padding)
    y2 = min(h, y1 + text_h + baseline + style.banner_padding)

    if x2 > x1 and y2 > y1:
        roi = image[y1:y2, x1:x2]
        patch = np.empty_like(roi)
        patch[:] = style.banner_color
        image[y1:y2, x1:x2] = cv2.addWeighted(
            patch, style.banner_alpha, roi, 1 - style.banner_alpha, 0
        )

    # putText anchors at the baseline
    text_x = x1 + style.banner_padding // 2
    text_y = y1 + style.banner_padding // 2 + text_h
    cv2.putText(image, text, (text_x, text_y), font, font_scale,
                style.label_color, thickness, cv2.LINE_AA)


def render_predictions(image: np.ndarray,
                       keypoints: Sequence[Sequence[float]],
                       label: Union[PostureLabel, str],
                       marker_ratio: float,
                       connections: Sequence[Tuple[int, int]] = COCO_CONNECTIONS,
                       reference_shape: Optional[Tuple[int, int]] = None,
                       style: Optional[RenderStyle] = None) -> np.ndarray:
    """
    Draw keypoints, skeleton edges and the posture label onto an image.

    The buffer is modified in place; calling twice on the same buffer
    stacks the drawings.

    Args:
        image: BGR frame to draw on.
        keypoints: (x, y) points in image coordinates.
        label: Posture label to display.
        marker_ratio: Marker size as a fraction of (width + height) / 2.
        connections: (start, end) index pairs; pairs outside the keypoint
            range are skipped.
        reference_shape: (height, width) used for marker sizing instead of
            the image's own shape.
        style: Colors and banner layout.

    Returns:
        The same image array, annotated.
    """
    style = style or RenderStyle()
    h, w = reference_shape if reference_shape is not None else image.shape[:2]

    marker_size = compute_marker_size(w, h, marker_ratio)
    line_thickness = max(1, marker_size // 2)
    radius = max(1, marker_size // 2)
    count = len(keypoints)

    for start_idx, end_idx in connections:
        if 0 <= start_idx < count and 0 <= end_idx < count:
            cv2.line(image, _to_point(keypoints[start_idx]), _to_point(keypoints[end_idx]),
                     style.line_color, line_thickness)

    for point in keypoints:
        cv2.circle(image, _to_point(point), radius, style.keypoint_color, -1)

    text = label.value if isinstance(label, PostureLabel) else str(label)
    _draw_label_banner(image, text, max(style.min_font_px, marker_size), style)

    return image
