"""
Exception hierarchy for raster-codec

Every failure raised by the decoder, the encoder or the Raster constructor
derives from RasterError, which is itself a ValueError so callers that only
care about "bad input" can catch the builtin.
"""


class RasterError(ValueError):
    """Base class for all raster-codec errors"""


class RasterShapeError(RasterError):
    """Raster metadata is inconsistent (dimensions, band lists, bit depths)"""


class BufferLengthError(RasterError):
    """Buffer length does not match the element count implied by the metadata"""


class ShapeMismatchError(RasterError):
    """Requested typed conversion does not match the raster's bits/sample formats"""


class EndianDecodeError(RasterError):
    """Byte-order decode could not consume the buffer cleanly"""


class UnsupportedShapeError(RasterError):
    """No known mapping exists for the band/bit-depth combination"""


class ImageShapeError(RasterError):
    """PixelImage array does not agree with its ImageKind"""
