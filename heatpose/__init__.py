# Heatmap Pose Posture Framework
from .config import Config, default_config
from .pipeline import PosturePipeline, PoseResult

__version__ = "0.1.0"

__all__ = ['Config', 'default_config', 'PosturePipeline', 'PoseResult']
