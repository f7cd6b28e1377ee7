# Heatmap Pose Posture Framework - Main Entry Point
# CLI interface: saved heatmap tensor + image -> keypoints, posture label, annotated image

import argparse
import sys
from pathlib import Path

from heatpose.config import Config, default_config
from heatpose.pipeline import PosturePipeline
from heatpose.posture.keypoints import KEYPOINT_NAMES
from heatpose.utils.io import load_heatmaps, load_image, save_image


def run(config: Config, heatmaps_path: str, image_path: str, output_path: str,
        output_size=None) -> int:
    """Run the pipeline on one image and report the result."""
    print(f"Loading heatmaps from {heatmaps_path}")
    heatmaps = load_heatmaps(heatmaps_path)
    image = load_image(image_path)
    h, w = image.shape[:2]
    print(f"  - Heatmap tensor: {tuple(heatmaps.shape)}")
    print(f"  - Image: {w}x{h}")

    pipeline = PosturePipeline(config)
    result = pipeline.process(heatmaps, image, output_size=output_size)

    print("\nKeypoints:")
    for idx, (point, score) in enumerate(zip(result.keypoints, result.scores)):
        name = KEYPOINT_NAMES[idx] if idx < len(KEYPOINT_NAMES) else f'keypoint_{idx}'
        print(f"  {name:<15} x={point.x:7.1f} y={point.y:7.1f} conf={score:.3f}")

    print(f"\nPosture: {result.label.value}")

    saved = save_image(output_path, result.annotated)
    print(f"Annotated image saved to {saved}")
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Decode pose heatmaps, classify posture and annotate the image"
    )

    parser.add_argument(
        '--heatmaps', type=str, required=True,
        help='Path to .npy heatmap tensor [1, K, H, W] from the pose model'
    )
    parser.add_argument(
        '--image', type=str, required=True,
        help='Path to the original image'
    )
    parser.add_argument(
        '--output', type=str, default=None,
        help='Path for the annotated image (default: <output_dir>/<image name>)'
    )
    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--marker-ratio', type=float, default=None,
        help='Joint marker size as a fraction of the image size'
    )
    parser.add_argument(
        '--output-width', type=float, default=None,
        help='Heatmap width used for coordinate scaling (default: tensor width)'
    )
    parser.add_argument(
        '--output-height', type=float, default=None,
        help='Heatmap height used for coordinate scaling (default: tensor height)'
    )

    args = parser.parse_args()

    # Load config
    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = default_config

    # Apply CLI overrides
    if args.marker_ratio is not None:
        config.render.marker_ratio = args.marker_ratio

    output_size = None
    if args.output_width is not None or args.output_height is not None:
        if args.output_width is None or args.output_height is None:
            parser.error('--output-width and --output-height must be given together')
        output_size = (args.output_width, args.output_height)

    output_path = args.output or str(config.output_dir / Path(args.image).name)

    try:
        return run(config, args.heatmaps, args.image, output_path, output_size)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
