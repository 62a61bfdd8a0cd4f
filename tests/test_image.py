"""
Tests for PixelImage validation and Pillow interop
"""

import numpy as np
import pytest
from PIL import Image

from raster_codec import ImageKind, ImageShapeError, PixelImage, from_image, to_image


class TestPixelImage:
    """Construction and accessors"""

    def test_from_raw(self):
        image = PixelImage.from_raw(ImageKind.RGB8, 2, 1, [1, 2, 3, 4, 5, 6])
        assert (image.width, image.height, image.channels) == (2, 1, 3)
        assert image.get_pixel(1, 0) == (4, 5, 6)
        assert image.get_pixel(2, 0) is None
        assert image.as_bytes() == bytes([1, 2, 3, 4, 5, 6])

    def test_from_raw_wrong_count(self):
        with pytest.raises(ImageShapeError):
            PixelImage.from_raw(ImageKind.RGBA8, 2, 2, range(15))

    @pytest.mark.parametrize(
        "kind,samples",
        [
            (ImageKind.LUMA8, [300]),
            (ImageKind.LUMA8, [-1]),
            (ImageKind.LUMA8, [1.5]),
            (ImageKind.LUMA8, np.array([256], dtype=np.uint16)),
            (ImageKind.LUMA16, np.array([70000], dtype=np.int64)),
            (ImageKind.LUMA16, [2**70]),
            (ImageKind.LUMA32F, [1 + 2j]),
        ],
    )
    def test_from_raw_values_must_fit(self, kind, samples):
        """Out-of-range or lossy values are rejected instead of wrapped"""
        with pytest.raises(ImageShapeError):
            PixelImage.from_raw(kind, 1, 1, samples)

    def test_from_raw_accepts_wide_arrays_in_range(self):
        samples = np.array([0, 255, 65535], dtype=np.int64)
        image = PixelImage.from_raw(ImageKind.RGB16, 1, 1, samples)
        assert image.get_pixel(0, 0) == (0, 255, 65535)

        floats = PixelImage.from_raw(ImageKind.LUMA32F, 2, 1, [0.5, 3])
        assert floats.data.dtype == np.float32
        assert floats.get_pixel(1, 0) == (3.0,)

    def test_channel_mismatch(self):
        with pytest.raises(ImageShapeError):
            PixelImage(ImageKind.RGB8, np.zeros((2, 2, 4), dtype=np.uint8))

    def test_dtype_mismatch(self):
        with pytest.raises(ImageShapeError):
            PixelImage(ImageKind.LUMA16, np.zeros((2, 2, 1), dtype=np.uint8))

    def test_requires_three_dimensions(self):
        with pytest.raises(ImageShapeError):
            PixelImage(ImageKind.LUMA8, np.zeros((2, 2), dtype=np.uint8))

    def test_empty_image_rejected(self):
        with pytest.raises(ImageShapeError):
            PixelImage(ImageKind.LUMA8, np.zeros((0, 2, 1), dtype=np.uint8))

    def test_as_bytes_native_order(self):
        image = PixelImage.from_raw(ImageKind.LUMA16, 1, 1, [0x0102])
        assert image.as_bytes() == np.array([0x0102], dtype=np.uint16).tobytes()

    def test_repr(self):
        image = PixelImage.from_raw(ImageKind.LUMAA8, 4, 3, bytes(24))
        assert repr(image) == "PixelImage(lumaa8, 4x3)"


class TestPillowInterop:
    """Conversion to and from Pillow images"""

    @pytest.mark.parametrize(
        "kind,mode",
        [
            (ImageKind.LUMA8, "L"),
            (ImageKind.LUMAA8, "LA"),
            (ImageKind.RGB8, "RGB"),
            (ImageKind.RGBA8, "RGBA"),
            (ImageKind.LUMA16, "I;16"),
            (ImageKind.LUMA32F, "F"),
        ],
    )
    def test_to_pil_and_back(self, rng, kind, mode):
        count = 4 * 3 * kind.channels
        if kind is ImageKind.LUMA32F:
            samples = rng.standard_normal(count).astype(np.float32)
        else:
            samples = rng.integers(0, np.iinfo(kind.dtype).max + 1, count)
        image = PixelImage.from_raw(kind, 4, 3, samples)

        pil = image.to_pil()
        assert pil.mode == mode
        assert pil.size == (4, 3)

        back = PixelImage.from_pil(pil)
        assert back.kind is kind
        np.testing.assert_array_equal(back.data, image.data)

    def test_pixel_values_survive(self):
        image = PixelImage.from_raw(ImageKind.LUMA16, 2, 1, [7, 60000])
        assert image.to_pil().getpixel((1, 0)) == 60000

    def test_no_pillow_mode(self):
        image = PixelImage.from_raw(ImageKind.RGB16, 1, 1, [1, 2, 3])
        with pytest.raises(ImageShapeError):
            image.to_pil()

    def test_palette_image_keeps_indices(self):
        pil = Image.new("P", (2, 2), color=3)
        image = PixelImage.from_pil(pil)
        assert image.kind is ImageKind.INDEXED8
        assert image.get_pixel(1, 1) == (3,)

    def test_unsupported_mode(self):
        with pytest.raises(ImageShapeError):
            PixelImage.from_pil(Image.new("CMYK", (1, 1)))

    def test_save_decoded_raster(self, tmp_path):
        """Decode a raster and write it out, as a display pipeline would"""
        source = PixelImage.from_raw(ImageKind.RGB8, 2, 2, range(12))
        out = tmp_path / "preview.png"

        to_image(from_image(source)).save(out)

        with Image.open(out) as reloaded:
            assert reloaded.mode == "RGB"
            np.testing.assert_array_equal(np.asarray(reloaded), source.data)
