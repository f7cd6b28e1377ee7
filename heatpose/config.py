# Pose Posture Framework - Configuration

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import yaml


@dataclass
class DecoderConfig:
    """Heatmap decoding configuration."""
    num_keypoints: Optional[int] = 17  # COCO layout; None accepts any channel count


@dataclass(frozen=True)
class ClassifierConfig:
    """
    Geometric posture classifier thresholds.

    Every value is relative to torso height or shoulder width, except the
    pixel floor used to stabilize a foreshortened torso.
    """
    # Lying down
    lying_alignment_ratio: float = 0.35  # Max shoulder/hip Y diff vs torso height
    lying_width_to_height_ratio: float = 0.9  # shoulder width > this * vertical span
    lying_max_vertical_to_width_ratio: float = 1.5  # vertical span < this * shoulder width
    compressed_vertical_ratio: float = 0.7  # vertical span < this * torso height
    compressed_torso_to_width_ratio: float = 0.5  # torso height > this * shoulder width
    # Upright gates
    torso_upright_margin: float = 0.15
    upright_min_aspect_ratio: float = 1.1
    # Leg segments
    leg_segment_threshold_factor: float = 0.40  # times torso height
    standing_order_margin: float = 0.05
    sitting_ankle_margin: float = 0.1
    sitting_hip_margin: float = 0.6
    squat_thigh_factor: float = 1.1
    squat_hip_margin: float = 0.3
    # Torso stabilization
    min_torso_px: float = 15.0
    torso_height_fraction: float = 0.10  # of shoulder-to-ankle height
    torso_epsilon: float = 1e-5


@dataclass(frozen=True)
class RenderStyle:
    """Colors (BGR) and layout of the annotation overlay."""
    keypoint_color: Tuple[int, int, int] = (0, 0, 255)  # Red
    line_color: Tuple[int, int, int] = (255, 255, 0)  # Aqua
    label_color: Tuple[int, int, int] = (255, 255, 255)  # White
    banner_color: Tuple[int, int, int] = (0, 0, 0)
    banner_alpha: float = 0.5
    banner_offset: int = 5
    banner_padding: int = 10
    min_font_px: int = 8
    label_thickness: int = 2  # Bold


@dataclass
class RenderConfig:
    """Annotation rendering configuration."""
    marker_ratio: float = 0.01  # Fraction of (width + height) / 2
    style: RenderStyle = field(default_factory=RenderStyle)


@dataclass
class Config:
    """Main configuration container."""
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    # Paths
    output_dir: Path = Path("output")

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        config = cls()
        if 'decoder' in data:
            config.decoder = DecoderConfig(**data['decoder'])
        if 'classifier' in data:
            config.classifier = ClassifierConfig(**data['classifier'])
        if 'render' in data:
            render = dict(data['render'])
            style = render.pop('style', None)
            config.render = RenderConfig(**render)
            if style:
                style = {k: tuple(v) if isinstance(v, list) else v for k, v in style.items()}
                config.render.style = RenderStyle(**style)
        if 'output_dir' in data:
            config.output_dir = Path(data['output_dir'])
        return config

    def to_yaml(self, path: str) -> None:
        """Save configuration to YAML file."""
        style = {
            k: list(v) if isinstance(v, tuple) else v
            for k, v in self.render.style.__dict__.items()
        }
        data = {
            'decoder': dict(self.decoder.__dict__),
            'classifier': dict(self.classifier.__dict__),
            'render': {'marker_ratio': self.render.marker_ratio, 'style': style},
            'output_dir': str(self.output_dir),
        }
        with open(path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False)


# Default configuration instance
default_config = Config()
