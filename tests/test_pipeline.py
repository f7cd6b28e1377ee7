# Pipeline, Configuration and I/O Tests

import pytest
import numpy as np

from heatpose.config import ClassifierConfig, Config, DecoderConfig
from heatpose.pipeline import PoseResult, PosturePipeline
from heatpose.posture.classifier import PostureLabel
from heatpose.utils.io import load_heatmaps, load_image, save_image


def create_pose_heatmaps(keypoints, image_size=(192, 256), heatmap_size=(48, 64)) -> np.ndarray:
    """Render keypoints back into one-hot heatmaps of shape [1, K, H, W]."""
    image_w, image_h = image_size
    hm_w, hm_h = heatmap_size
    heatmaps = np.zeros((1, len(keypoints), hm_h, hm_w), dtype=np.float32)
    for idx, (x, y) in enumerate(keypoints):
        col = min(hm_w - 1, int(x * hm_w / image_w))
        row = min(hm_h - 1, int(y * hm_h / image_h))
        heatmaps[0, idx, row, col] = 1.0
    return heatmaps


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = Config()

        assert config.decoder.num_keypoints == 17
        assert config.classifier.lying_alignment_ratio == 0.35
        assert config.classifier.leg_segment_threshold_factor == 0.40
        assert config.classifier.upright_min_aspect_ratio == 1.1
        assert config.render.style.banner_alpha == 0.5

    def test_classifier_config_is_immutable(self):
        config = ClassifierConfig()

        with pytest.raises(AttributeError):
            config.min_torso_px = 0.0

    def test_from_yaml_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "decoder:\n"
            "  num_keypoints: null\n"
            "classifier:\n"
            "  min_torso_px: 10.0\n"
            "render:\n"
            "  marker_ratio: 0.03\n"
            "  style:\n"
            "    label_color: [0, 255, 0]\n"
        )

        config = Config.from_yaml(str(path))

        assert config.decoder.num_keypoints is None
        assert config.classifier.min_torso_px == 10.0
        assert config.classifier.lying_alignment_ratio == 0.35
        assert config.render.marker_ratio == 0.03
        assert config.render.style.label_color == (0, 255, 0)

    def test_to_yaml_reloads(self, tmp_path):
        path = tmp_path / "saved.yaml"
        config = Config(classifier=ClassifierConfig(squat_hip_margin=0.25))

        config.to_yaml(str(path))
        loaded = Config.from_yaml(str(path))

        assert loaded.classifier == config.classifier
        assert loaded.render.style == config.render.style


class TestPosturePipeline:
    """Tests for end-to-end processing."""

    def test_analyze_standing(self, standing_keypoints):
        heatmaps = create_pose_heatmaps(standing_keypoints, image_size=(640, 480),
                                        heatmap_size=(160, 120))
        pipeline = PosturePipeline()

        result = pipeline.analyze(heatmaps, 640, 480)

        assert isinstance(result, PoseResult)
        assert len(result.keypoints) == 17
        assert result.label == PostureLabel.STANDING
        assert result.annotated is None
        assert np.allclose(result.scores, 1.0)

    def test_process_leaves_input_untouched(self, sitting_keypoints):
        heatmaps = create_pose_heatmaps(sitting_keypoints, image_size=(640, 480),
                                        heatmap_size=(160, 120))
        image = np.full((480, 640, 3), 50, dtype=np.uint8)
        original = image.copy()

        result = PosturePipeline().process(heatmaps, image)

        assert result.label == PostureLabel.SITTING
        assert np.array_equal(image, original)
        assert result.annotated.shape == image.shape
        assert not np.array_equal(result.annotated, original)

    def test_channel_count_enforced(self):
        heatmaps = np.zeros((1, 16, 64, 48), dtype=np.float32)

        with pytest.raises(ValueError):
            PosturePipeline().analyze(heatmaps, 192, 256)

    def test_any_channel_count_when_unconstrained(self):
        config = Config(decoder=DecoderConfig(num_keypoints=None))
        heatmaps = np.zeros((1, 5, 64, 48), dtype=np.float32)

        result = PosturePipeline(config).analyze(heatmaps, 192, 256)

        assert len(result.keypoints) == 5
        assert result.label == PostureLabel.FEW_KEYPOINTS


class TestIO:
    """Tests for tensor and image file helpers."""

    def test_load_heatmaps_adds_batch_axis(self, tmp_path):
        path = tmp_path / "heatmaps.npy"
        np.save(path, np.zeros((17, 64, 48), dtype=np.float32))

        heatmaps = load_heatmaps(str(path))

        assert heatmaps.shape == (1, 17, 64, 48)

    def test_load_heatmaps_rejects_bad_rank(self, tmp_path):
        path = tmp_path / "flat.npy"
        np.save(path, np.zeros((64, 48), dtype=np.float32))

        with pytest.raises(ValueError):
            load_heatmaps(str(path))

    def test_missing_files(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_heatmaps(str(tmp_path / "missing.npy"))
        with pytest.raises(FileNotFoundError):
            load_image(str(tmp_path / "missing.png"))

    def test_save_and_load_image(self, tmp_path):
        image = np.zeros((20, 30, 3), dtype=np.uint8)
        image[5, 5] = (0, 0, 255)

        saved = save_image(str(tmp_path / "out" / "frame.png"), image)
        loaded = load_image(str(saved))

        assert loaded.shape == (20, 30, 3)
        assert tuple(int(c) for c in loaded[5, 5]) == (0, 0, 255)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
