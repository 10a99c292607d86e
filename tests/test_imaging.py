"""Tests for image input normalisation."""

import numpy as np
import pytest
from PIL import Image

from antique_identifier.errors import ImageProcessingError
from antique_identifier.imaging import encode_image_bytes, load_image, to_analysis_array, to_model_input
from tests.helpers.image_factory import png_bytes, solid_array, solid_image, write_png


class TestLoadImage:
    def test_from_pil_converts_to_rgb(self):
        image = Image.new('RGBA', (10, 12), (10, 20, 30, 128))
        loaded = load_image(image)
        assert loaded.mode == 'RGB'
        assert loaded.size == (10, 12)

    def test_from_bytes(self):
        loaded = load_image(png_bytes(solid_image(16, 8)))
        assert loaded.size == (16, 8)

    def test_from_path(self, tmp_path):
        path = write_png(tmp_path / "item.png", solid_image(20, 10))
        assert load_image(path).size == (20, 10)
        assert load_image(str(path)).size == (20, 10)

    @pytest.mark.parametrize("array", [
        np.zeros((8, 6), dtype=np.uint8),
        np.zeros((8, 6, 3), dtype=np.uint8),
        np.zeros((8, 6, 4), dtype=np.uint8),
        np.ones((8, 6, 3), dtype=np.float32),
    ])
    def test_from_array(self, array):
        loaded = load_image(array)
        assert loaded.mode == 'RGB'
        assert loaded.size == (6, 8)

    def test_float_array_scaled(self):
        loaded = load_image(np.full((2, 2, 3), 0.5, dtype=np.float32))
        assert loaded.getpixel((0, 0)) == (127, 127, 127)

    @pytest.mark.parametrize("source", [
        b"",
        b"not an image at all",
        np.zeros((0, 0, 3), dtype=np.uint8),
        np.zeros((4, 4, 2), dtype=np.uint8),
        12345,
    ])
    def test_invalid_sources(self, source):
        with pytest.raises(ImageProcessingError):
            load_image(source)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageProcessingError, match="does not exist"):
            load_image(tmp_path / "missing.png")

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\nbroken")
        with pytest.raises(ImageProcessingError):
            load_image(path)

    def test_oversized_image_is_rejected(self, monkeypatch):
        data = png_bytes(solid_image(100, 100))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageProcessingError, match="Failed to decode"):
            load_image(data)

    def test_oversized_image_file_is_rejected(self, tmp_path, monkeypatch):
        path = write_png(tmp_path / "huge.png", solid_image(100, 100))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageProcessingError):
            to_analysis_array(path)


class TestModelInput:
    def test_square_float_buffer(self):
        pixels = to_model_input(solid_image(640, 480, (255, 0, 0)))

        assert pixels.shape == (224, 224, 3)
        assert pixels.dtype == np.float32
        assert pixels[..., 0].max() == pytest.approx(1.0)
        assert pixels[..., 1].max() == pytest.approx(0.0)

    def test_custom_size(self):
        assert to_model_input(solid_image(), 96).shape == (96, 96, 3)

    def test_invalid_size(self):
        with pytest.raises(ImageProcessingError):
            to_model_input(solid_image(), 0)


class TestAnalysisArray:
    def test_downscales_longest_side(self):
        array = to_analysis_array(solid_array(1024, 512), max_side=512)
        assert array.shape == (256, 512, 3)
        assert array.dtype == np.uint8

    def test_small_images_untouched(self):
        assert to_analysis_array(solid_array(100, 50), max_side=512).shape == (50, 100, 3)


class TestEncode:
    def test_png_bytes_decode_back(self):
        data = encode_image_bytes(solid_image(9, 7))
        assert data.startswith(b"\x89PNG")
        assert load_image(data).size == (9, 7)
