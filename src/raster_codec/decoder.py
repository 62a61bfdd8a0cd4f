"""
Raster decoder: typed views over a raw raster buffer.

Three kinds of output are supported:
- single pixels as 8-bit RGBA, for display
- whole-raster numpy arrays (uint8, float32, float64, complex64), for analysis
- whole-raster PixelImage, for display or file output

Every path looks its shape up in the tables of ``raster_codec.shapes`` and
fails with a RasterError subclass when the raster's metadata is not one it
supports. Nothing here mutates the raster.
"""

import logging
from typing import Dict, NamedTuple, Optional, Tuple

import numpy as np

from .errors import BufferLengthError, ShapeMismatchError, UnsupportedShapeError
from .image import ImageKind, PixelImage
from .raster import Raster
from .shapes import (
    ARRAY_TARGETS,
    IMAGE_STRATEGIES,
    RGBA_STRATEGIES,
    DecodeStrategy,
    lookup,
    matches_target,
)

logger = logging.getLogger("raster_codec.decoder")

# Fixed calibration for single-band float32 rasters: maps the value range
# [-0.037346, 0.03628] of the sensor products this codec was first used with
# onto 0..255. External calibration data; do not re-derive.
TONE_MAP_OFFSET = np.float32(0.037346)
TONE_MAP_UPPER = np.float32(0.03628)

# Display convention for single-band 16-bit intensity: value / 10
GRAY16_DISPLAY_DIVISOR = 10


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int


# strategy -> (image kind, dtype to decode the buffer as; None means raw bytes)
_IMAGE_KINDS: Dict[DecodeStrategy, Tuple[ImageKind, Optional[np.dtype]]] = {
    DecodeStrategy.GRAY8: (ImageKind.LUMA8, None),
    DecodeStrategy.GRAY_ALPHA8: (ImageKind.LUMAA8, None),
    DecodeStrategy.RGB8: (ImageKind.RGB8, None),
    DecodeStrategy.RGBA8: (ImageKind.RGBA8, None),
    DecodeStrategy.GRAY16: (ImageKind.LUMA16, np.dtype(np.uint16)),
    DecodeStrategy.GRAY_ALPHA16: (ImageKind.LUMAA16, np.dtype(np.uint16)),
    DecodeStrategy.RGB16: (ImageKind.RGB16, np.dtype(np.uint16)),
    DecodeStrategy.RGBA16: (ImageKind.RGBA16, np.dtype(np.uint16)),
    DecodeStrategy.RGB32F: (ImageKind.RGB32F, np.dtype(np.float32)),
    DecodeStrategy.RGBA32F: (ImageKind.RGBA32F, np.dtype(np.float32)),
}


def pixel_rgba(raster: Raster, x: int, y: int) -> Optional[RGBA]:
    """
    Map one pixel to 8-bit RGBA.

    Args:
        raster: Source raster
        x: Column, 0 <= x < width
        y: Row, 0 <= y < height

    Returns:
        RGBA tuple, or None when (x, y) is out of bounds or the raster's bit
        layout has no RGBA mapping
    """
    strategy = lookup(RGBA_STRATEGIES, raster.bits_per_sample)
    if strategy is None:
        return None

    p = raster.get_pixel(x, y)
    if p is None:
        return None

    if strategy is DecodeStrategy.GRAY8:
        return RGBA(p[0], p[0], p[0], 255)
    if strategy is DecodeStrategy.GRAY_ALPHA8:
        return RGBA(p[0], p[0], p[0], p[1])
    if strategy is DecodeStrategy.RGB8:
        return RGBA(p[0], p[1], p[2], 255)
    if strategy is DecodeStrategy.RGBA8:
        return RGBA(p[0], p[1], p[2], p[3])

    # GRAY16: signed intensity, truncating division then clamp
    value = int(raster.endian.decode(p[:2], np.int16))
    v8 = min(max(int(value / GRAY16_DISPLAY_DIVISOR), 0), 255)
    return RGBA(v8, v8, v8, 255)


def _typed_array(raster: Raster, target_name: str) -> np.ndarray:
    """Validate the raster against one ARRAY_TARGETS entry and decode its buffer."""
    target = ARRAY_TARGETS[target_name]
    if not matches_target(target, raster.bits_per_sample, raster.sample_format):
        expected_formats = (
            "any" if target.sample_format is None else [f.name for f in target.sample_format]
        )
        raise ShapeMismatchError(
            f"Unsupported bits_per_sample configuration for {target_name} conversion: "
            f"need bits {list(target.bits_per_sample)} / formats {expected_formats}, "
            f"raster has bits {list(raster.bits_per_sample)} / "
            f"formats {[f.name for f in raster.sample_format]}"
        )

    values = raster.endian.decode_all(raster.buffer, target.dtype)

    expected = raster.width * raster.height * target.values_per_pixel
    if values.size != expected:
        raise BufferLengthError(
            f"Decoded {values.size} {target.dtype.name} value(s) for {target_name} "
            f"conversion, expected {expected}"
        )
    logger.debug(f"Decoded {target_name} array of {values.size} value(s) from {raster}")
    return values


def to_u8_array(raster: Raster) -> np.ndarray:
    """Whole raster as uint8 samples (requires bits [8])."""
    return _typed_array(raster, "u8")


def to_f32_array(raster: Raster) -> np.ndarray:
    """Whole raster as float32 samples (requires bits [32]; bytes are read as IEEE floats)."""
    return _typed_array(raster, "f32")


def to_f64_array(raster: Raster) -> np.ndarray:
    """Whole raster as float64 samples (requires bits [64])."""
    return _typed_array(raster, "f64")


def to_complex32_array(raster: Raster) -> np.ndarray:
    """
    Whole raster as complex64 samples.

    Requires bits [64] with sample format [COMPLEX_FLOAT]; each sample is a
    (real, imaginary) pair of float32 in the raster's byte order.

    Raises:
        ShapeMismatchError: If the metadata is not [64] / [COMPLEX_FLOAT]
        BufferLengthError: If the float count is not 2 x width x height
        EndianDecodeError: If the buffer is not a whole number of float32
    """
    floats = _typed_array(raster, "complex32")
    # floats is a fresh contiguous native float32 array: (re, im, re, im, ...)
    return floats.view(np.complex64)


def tone_map(values: np.ndarray) -> np.ndarray:
    """
    Map float32 samples to uint8 using the fixed calibration constants.

    ``(v + TONE_MAP_OFFSET) / (TONE_MAP_UPPER + TONE_MAP_OFFSET)`` is clamped
    to [0, 1], scaled to 255 and truncated. NaN maps to 0.
    """
    values = np.asarray(values, dtype=np.float32)
    scaled = (values + TONE_MAP_OFFSET) / (TONE_MAP_UPPER + TONE_MAP_OFFSET)
    scaled = np.clip(scaled, np.float32(0.0), np.float32(1.0)) * np.float32(255.0)
    return np.nan_to_num(scaled, nan=0.0).astype(np.uint8)


def to_image(raster: Raster) -> PixelImage:
    """
    Convert the whole raster to a PixelImage.

    8-bit layouts are used as-is, 16-bit layouts are decoded as unsigned
    integers and 32-bit multi-band layouts as float32, all in the raster's
    byte order. Single-band float32 has no direct image analog and is tone
    mapped to 8-bit grayscale.

    Only bit depths select the mapping; sample format is not consulted. A
    ``[32, 32, 32]`` UNSIGNED raster is read as float32 bit patterns, and
    signed 16-bit samples come out as their unsigned two's complement.

    Raises:
        UnsupportedShapeError: If the bit layout has no image mapping
        EndianDecodeError: If the buffer cannot be decoded
    """
    strategy = lookup(IMAGE_STRATEGIES, raster.bits_per_sample)
    if strategy is None:
        raise UnsupportedShapeError(
            f"Not Supported: no image mapping for bits {list(raster.bits_per_sample)}"
        )

    width, height = raster.dimensions

    if strategy is DecodeStrategy.GRAY32F:
        values = raster.endian.decode_all(raster.buffer, np.float32)
        logger.debug(
            f"Tone mapping {values.size} float32 value(s) with fixed calibration "
            f"[{-TONE_MAP_OFFSET}, {TONE_MAP_UPPER}]"
        )
        return PixelImage.from_raw(ImageKind.LUMA8, width, height, tone_map(values))

    kind, dtype = _IMAGE_KINDS[strategy]
    if dtype is None:
        samples = np.frombuffer(raster.buffer, dtype=np.uint8).copy()
    else:
        samples = raster.endian.decode_all(raster.buffer, dtype)

    logger.debug(f"Converting {raster} to {kind.label} image")
    return PixelImage.from_raw(kind, width, height, samples)
