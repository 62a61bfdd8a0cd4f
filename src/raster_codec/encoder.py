"""
Raster encoder: PixelImage -> Raster.

The image's sample bytes are copied verbatim (no resampling, no
recompression) and tagged with the host byte order. The metadata needed to
decode them again comes from a closed table keyed by ImageKind.
"""

import logging
from typing import Dict, NamedTuple, Tuple

from .endian import Endian
from .image import ImageKind, PixelImage
from .raster import Raster
from .tags import ExtraSamples, PhotometricInterpretation, SampleFormat

logger = logging.getLogger("raster_codec.encoder")

_U = SampleFormat.UNSIGNED
_F = SampleFormat.FLOAT
_ALPHA = (ExtraSamples.ASSOCIATED_ALPHA,)


class RasterTags(NamedTuple):
    """Metadata inferred for one image kind"""

    interpretation: PhotometricInterpretation
    bits_per_sample: Tuple[int, ...]
    sample_format: Tuple[SampleFormat, ...]
    extra_samples: Tuple[ExtraSamples, ...]


ENCODE_TABLE: Dict[ImageKind, RasterTags] = {
    ImageKind.LUMA8: RasterTags(PhotometricInterpretation.BLACK_IS_ZERO, (8,), (_U,), ()),
    ImageKind.LUMA16: RasterTags(PhotometricInterpretation.BLACK_IS_ZERO, (16,), (_U,), ()),
    ImageKind.LUMAA8: RasterTags(
        PhotometricInterpretation.BLACK_IS_ZERO, (8, 8), (_U, _U), _ALPHA
    ),
    ImageKind.LUMAA16: RasterTags(
        PhotometricInterpretation.BLACK_IS_ZERO, (16, 16), (_U, _U), _ALPHA
    ),
    ImageKind.RGB8: RasterTags(PhotometricInterpretation.RGB, (8,) * 3, (_U,) * 3, ()),
    ImageKind.RGB16: RasterTags(PhotometricInterpretation.RGB, (16,) * 3, (_U,) * 3, ()),
    ImageKind.RGB32F: RasterTags(PhotometricInterpretation.RGB, (32,) * 3, (_F,) * 3, ()),
    ImageKind.RGBA8: RasterTags(PhotometricInterpretation.RGB, (8,) * 4, (_U,) * 4, _ALPHA),
    ImageKind.RGBA16: RasterTags(PhotometricInterpretation.RGB, (16,) * 4, (_U,) * 4, _ALPHA),
    ImageKind.RGBA32F: RasterTags(
        PhotometricInterpretation.RGB, (32,) * 4, (_F,) * 4, _ALPHA
    ),
}

# Best effort for kinds outside the table; only correct for one byte per pixel
FALLBACK_TAGS = RasterTags(PhotometricInterpretation.UNKNOWN, (8,), (_U,), ())


def describe(kind: ImageKind) -> RasterTags:
    """Metadata the encoder would assign to an image of ``kind``."""
    return ENCODE_TABLE.get(kind, FALLBACK_TAGS)


def from_image(image: PixelImage) -> Raster:
    """
    Build a Raster describing ``image``.

    Kinds outside ENCODE_TABLE fall back to a single unsigned 8-bit band of
    unknown interpretation. The fallback is not an error, but it does not
    round-trip values, and the Raster constructor still rejects it when the
    image has more than one byte per pixel.

    Raises:
        BufferLengthError: If the Raster constructor rejects the buffer
    """
    tags = ENCODE_TABLE.get(image.kind)
    if tags is None:
        logger.warning(
            f"No raster mapping for {image.kind.label} images, "
            "falling back to a single 8-bit band of unknown interpretation"
        )
        tags = FALLBACK_TAGS

    endian = Endian.native()
    logger.debug(
        f"Encoding {image!r} as {tags.interpretation.name} {list(tags.bits_per_sample)} "
        f"({endian.value} endian)"
    )
    return Raster(
        (image.width, image.height),
        image.as_bytes(),
        tags.bits_per_sample,
        tags.interpretation,
        tags.sample_format,
        tags.extra_samples,
        endian,
    )
