# Visualization Module
from .renderer import render_predictions, compute_marker_size

__all__ = ['render_predictions', 'compute_marker_size']
