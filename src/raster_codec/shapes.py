"""
Shape tables driving decode dispatch.

A shape is the combination of band count, bit depth and sample format that
selects a decode strategy. Keeping the tables as plain data lets them be
inspected and tested without building any raster.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .tags import SampleFormat


class SampleShape(NamedTuple):
    """Table key: ``sample_format`` is None when the dispatch ignores it"""

    band_count: int
    bit_depth: int
    sample_format: Optional[SampleFormat] = None


class DecodeStrategy(Enum):
    """Every decode path the codec knows about"""

    GRAY8 = "gray8"
    GRAY_ALPHA8 = "gray_alpha8"
    RGB8 = "rgb8"
    RGBA8 = "rgba8"
    GRAY16 = "gray16"
    GRAY_ALPHA16 = "gray_alpha16"
    RGB16 = "rgb16"
    RGBA16 = "rgba16"
    GRAY32F = "gray32f"
    RGB32F = "rgb32f"
    RGBA32F = "rgba32f"


class ArrayTarget(NamedTuple):
    """Single supported metadata shape for a whole-raster typed array"""

    bits_per_sample: Tuple[int, ...]
    sample_format: Optional[Tuple[SampleFormat, ...]]
    dtype: np.dtype
    values_per_pixel: int


# Single-pixel RGBA8 extraction
RGBA_STRATEGIES: Dict[SampleShape, DecodeStrategy] = {
    SampleShape(1, 8): DecodeStrategy.GRAY8,
    SampleShape(2, 8): DecodeStrategy.GRAY_ALPHA8,
    SampleShape(3, 8): DecodeStrategy.RGB8,
    SampleShape(4, 8): DecodeStrategy.RGBA8,
    SampleShape(1, 16): DecodeStrategy.GRAY16,
}

# Whole-image conversion to a PixelImage
IMAGE_STRATEGIES: Dict[SampleShape, DecodeStrategy] = {
    SampleShape(1, 8): DecodeStrategy.GRAY8,
    SampleShape(2, 8): DecodeStrategy.GRAY_ALPHA8,
    SampleShape(3, 8): DecodeStrategy.RGB8,
    SampleShape(4, 8): DecodeStrategy.RGBA8,
    SampleShape(1, 16): DecodeStrategy.GRAY16,
    SampleShape(2, 16): DecodeStrategy.GRAY_ALPHA16,
    SampleShape(3, 16): DecodeStrategy.RGB16,
    SampleShape(4, 16): DecodeStrategy.RGBA16,
    SampleShape(1, 32): DecodeStrategy.GRAY32F,
    SampleShape(3, 32): DecodeStrategy.RGB32F,
    SampleShape(4, 32): DecodeStrategy.RGBA32F,
}

ARRAY_TARGETS: Dict[str, ArrayTarget] = {
    "u8": ArrayTarget((8,), None, np.dtype(np.uint8), 1),
    "f32": ArrayTarget((32,), None, np.dtype(np.float32), 1),
    "f64": ArrayTarget((64,), None, np.dtype(np.float64), 1),
    # One 64-bit complex sample is a (real, imaginary) pair of float32
    "complex32": ArrayTarget(
        (64,), (SampleFormat.COMPLEX_FLOAT,), np.dtype(np.float32), 2
    ),
}


def shape_of(
    bits_per_sample: Sequence[int],
    sample_format: Optional[Sequence[SampleFormat]] = None,
) -> Optional[SampleShape]:
    """
    Build the table key for a raster's metadata.

    Args:
        bits_per_sample: Bit depth of each band
        sample_format: Sample format of each band, or None to leave it out of the key

    Returns:
        SampleShape, or None when the bands do not share a single bit depth
        or sample format
    """
    depths = set(bits_per_sample)
    if len(depths) != 1:
        return None

    fmt = None
    if sample_format is not None:
        formats = set(sample_format)
        if len(formats) != 1:
            return None
        fmt = SampleFormat(formats.pop())

    return SampleShape(len(bits_per_sample), depths.pop(), fmt)


def lookup(
    table: Dict[SampleShape, DecodeStrategy], bits_per_sample: Sequence[int]
) -> Optional[DecodeStrategy]:
    """Return the strategy for ``bits_per_sample`` in ``table``, or None."""
    key = shape_of(bits_per_sample)
    if key is None:
        return None
    return table.get(key)


def matches_target(
    target: ArrayTarget,
    bits_per_sample: Sequence[int],
    sample_format: Sequence[SampleFormat],
) -> bool:
    """True when the raster metadata is exactly the target's supported shape."""
    if tuple(bits_per_sample) != target.bits_per_sample:
        return False
    if target.sample_format is not None:
        return tuple(sample_format) == target.sample_format
    return True
