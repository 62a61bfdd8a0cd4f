"""
TIFF tag enumerations used to describe raster samples.

Values are the numeric codes from the TIFF 6.0 specification so they can be
passed straight through from a parsed image file directory.
"""

from enum import IntEnum


class SampleFormat(IntEnum):
    """Numeric encoding of one band (TIFF tag 339)"""

    UNSIGNED = 1
    SIGNED = 2
    FLOAT = 3
    UNDEFINED = 4
    COMPLEX_INT = 5
    COMPLEX_FLOAT = 6


class PhotometricInterpretation(IntEnum):
    """Meaning of the primary bands (TIFF tag 262)"""

    WHITE_IS_ZERO = 0
    BLACK_IS_ZERO = 1
    RGB = 2
    PALETTE = 3
    MASK = 4
    CMYK = 5
    YCBCR = 6
    CIELAB = 8
    # Not a TIFF code; used when nothing is known about the bands
    UNKNOWN = 65535


class ExtraSamples(IntEnum):
    """Description of bands beyond the primary colour bands (TIFF tag 338)"""

    UNSPECIFIED = 0
    ASSOCIATED_ALPHA = 1
    UNASSOCIATED_ALPHA = 2
