# Utils module
from .io import load_heatmaps, load_image, save_image

__all__ = ['load_heatmaps', 'load_image', 'save_image']
