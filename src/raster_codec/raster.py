"""
Raster: a raw pixel buffer together with the metadata needed to decode it.

The buffer is row-major and band-interleaved: pixel (x, y) starts at byte
``(y * width + x) * bytes_per_pixel``. A Raster is immutable once built and
the constructor is the only place the buffer-length invariant is checked.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .endian import Endian
from .errors import BufferLengthError, RasterShapeError
from .shapes import SampleShape, shape_of
from .tags import ExtraSamples, PhotometricInterpretation, SampleFormat

logger = logging.getLogger("raster_codec.raster")


@dataclass(frozen=True)
class Raster:
    """
    Decoded image plane set in its raw form.

    Args:
        dimensions: (width, height) in pixels
        buffer: Raw sample bytes, copied on construction
        bits_per_sample: Bit depth of each band, in interleaving order
        interpretation: Photometric meaning of the primary bands
        sample_format: Numeric encoding of each band
        extra_samples: Tags for bands beyond the primary colour bands
        endian: Byte order of multi-byte samples

    Raises:
        RasterShapeError: If dimensions or band metadata are invalid
        BufferLengthError: If the buffer length does not match the metadata
    """

    dimensions: Tuple[int, int]
    buffer: bytes = field(repr=False)
    bits_per_sample: Tuple[int, ...]
    interpretation: PhotometricInterpretation
    sample_format: Tuple[SampleFormat, ...]
    extra_samples: Tuple[ExtraSamples, ...] = ()
    endian: Endian = Endian.LITTLE

    def __post_init__(self):
        try:
            width, height = (int(v) for v in self.dimensions)
        except (TypeError, ValueError) as e:
            raise RasterShapeError(
                f"Dimensions must be a (width, height) pair, got {self.dimensions!r}"
            ) from e
        if width <= 0 or height <= 0:
            raise RasterShapeError(f"Dimensions must be positive, got {width}x{height}")

        try:
            bits = tuple(int(b) for b in self.bits_per_sample)
            formats = tuple(SampleFormat(f) for f in self.sample_format)
            interpretation = PhotometricInterpretation(self.interpretation)
            extra_samples = tuple(ExtraSamples(e) for e in self.extra_samples)
            endian = Endian(self.endian)
        except (TypeError, ValueError) as e:
            raise RasterShapeError(f"Invalid raster tag: {e}") from e

        if not bits:
            raise RasterShapeError("bits_per_sample must name at least one band")
        if len(bits) != len(formats):
            raise RasterShapeError(
                f"bits_per_sample has {len(bits)} band(s) but sample_format has {len(formats)}"
            )
        for depth in bits:
            if depth <= 0 or depth % 8 != 0:
                raise RasterShapeError(f"Unsupported bit depth {depth}: must be a multiple of 8")

        buffer = bytes(self.buffer)
        expected = width * height * sum(bits) // 8
        if len(buffer) != expected:
            raise BufferLengthError(
                f"Buffer has {len(buffer)} bytes, {width}x{height} pixels of "
                f"{list(bits)} bits need {expected}"
            )

        object.__setattr__(self, "dimensions", (width, height))
        object.__setattr__(self, "buffer", buffer)
        object.__setattr__(self, "bits_per_sample", bits)
        object.__setattr__(self, "sample_format", formats)
        object.__setattr__(self, "interpretation", interpretation)
        object.__setattr__(self, "extra_samples", extra_samples)
        object.__setattr__(self, "endian", endian)
        logger.debug(f"Built {self}")

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    @property
    def band_count(self) -> int:
        return len(self.bits_per_sample)

    @property
    def bytes_per_pixel(self) -> int:
        return sum(self.bits_per_sample) // 8

    @property
    def shape(self) -> Optional[SampleShape]:
        """Shape-table key, or None for mixed bit depths or sample formats."""
        return shape_of(self.bits_per_sample, self.sample_format)

    def get_pixel(self, x: int, y: int) -> Optional[bytes]:
        """Raw interleaved sample bytes of pixel (x, y), or None when out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        start = (y * self.width + x) * self.bytes_per_pixel
        return self.buffer[start : start + self.bytes_per_pixel]

    # Decoder / encoder delegation

    def pixel_rgba(self, x: int, y: int):
        from .decoder import pixel_rgba

        return pixel_rgba(self, x, y)

    def to_u8_array(self) -> np.ndarray:
        from .decoder import to_u8_array

        return to_u8_array(self)

    def to_f32_array(self) -> np.ndarray:
        from .decoder import to_f32_array

        return to_f32_array(self)

    def to_f64_array(self) -> np.ndarray:
        from .decoder import to_f64_array

        return to_f64_array(self)

    def to_complex32_array(self) -> np.ndarray:
        from .decoder import to_complex32_array

        return to_complex32_array(self)

    def to_image(self):
        from .decoder import to_image

        return to_image(self)

    into_image = to_image

    @classmethod
    def from_image(cls, image) -> "Raster":
        from .encoder import from_image

        return from_image(image)

    def __str__(self) -> str:
        return (
            f"Raster {self.width}x{self.height}, {self.band_count} band(s), "
            f"bits {list(self.bits_per_sample)}, "
            f"formats {[f.name for f in self.sample_format]}, "
            f"{self.interpretation.name}, {self.endian.value} endian"
        )

    __repr__ = __str__


def metadata_summary(raster: Raster) -> dict:
    """Summarise raster metadata as plain values (used by the comparison helpers)."""
    return {
        "width": raster.width,
        "height": raster.height,
        "bits_per_sample": list(raster.bits_per_sample),
        "sample_format": [f.name for f in raster.sample_format],
        "interpretation": raster.interpretation.name,
        "extra_samples": [e.name for e in raster.extra_samples],
        "endian": raster.endian.value,
        "buffer_bytes": len(raster.buffer),
    }
