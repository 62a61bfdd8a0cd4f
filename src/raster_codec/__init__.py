"""
raster-codec: typed views over raw raster sample buffers

Decode a raw pixel buffer, described by its dimensions, per-band bit depth,
sample format, byte order and photometric interpretation, into:
- 8-bit RGBA pixels for display
- uint8, float32, float64 or complex64 numpy arrays for analysis
- PixelImage (8/16-bit, float RGB/RGBA/grayscale) for display or file output

and encode a PixelImage back into a Raster with the metadata needed to decode it.

Supported layouts:
- [8], [8, 8], [8, 8, 8], [8, 8, 8, 8]: grayscale, grayscale+alpha, RGB, RGBA
- [16] ... [16, 16, 16, 16]: the same in unsigned 16-bit
- [32]: float32, tone mapped to 8-bit grayscale for display
- [32, 32, 32], [32, 32, 32, 32]: float32 RGB/RGBA
- [64]: float64, or complex float32 pairs when tagged COMPLEX_FLOAT
"""

from .compare import compare_images, compare_rasters, display_comparison_table
from .decoder import (
    RGBA,
    TONE_MAP_OFFSET,
    TONE_MAP_UPPER,
    pixel_rgba,
    to_complex32_array,
    to_f32_array,
    to_f64_array,
    to_image,
    to_u8_array,
    tone_map,
)
from .encoder import ENCODE_TABLE, RasterTags, describe, from_image
from .endian import Endian
from .errors import (
    BufferLengthError,
    EndianDecodeError,
    ImageShapeError,
    RasterError,
    RasterShapeError,
    ShapeMismatchError,
    UnsupportedShapeError,
)
from .image import ImageKind, PixelImage
from .logs import configure_logging
from .raster import Raster
from .shapes import DecodeStrategy, SampleShape
from .tags import ExtraSamples, PhotometricInterpretation, SampleFormat

__version__ = "0.1.0"  # Keep in sync with pyproject.toml
__all__ = [
    # Data model
    "Raster",
    "Endian",
    "SampleFormat",
    "PhotometricInterpretation",
    "ExtraSamples",
    "SampleShape",
    "DecodeStrategy",
    # Images
    "ImageKind",
    "PixelImage",
    # Decoder
    "RGBA",
    "pixel_rgba",
    "to_u8_array",
    "to_f32_array",
    "to_f64_array",
    "to_complex32_array",
    "to_image",
    "tone_map",
    "TONE_MAP_OFFSET",
    "TONE_MAP_UPPER",
    # Encoder
    "from_image",
    "describe",
    "ENCODE_TABLE",
    "RasterTags",
    # Comparison utilities
    "compare_images",
    "compare_rasters",
    "display_comparison_table",
    # Errors
    "RasterError",
    "RasterShapeError",
    "BufferLengthError",
    "ShapeMismatchError",
    "EndianDecodeError",
    "UnsupportedShapeError",
    "ImageShapeError",
    # Logging
    "configure_logging",
]
