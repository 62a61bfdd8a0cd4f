"""
Common in-memory pixel image.

PixelImage pairs a numpy array of shape (height, width, channels) with an
ImageKind describing its channel layout and sample type. It is the image the
decoder produces and the encoder consumes, and it converts to and from Pillow
images for display and file output.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
from PIL import Image

from .errors import ImageShapeError

logger = logging.getLogger("raster_codec.image")


class ImageKind(Enum):
    """Channel layout and sample type of a PixelImage"""

    LUMA8 = ("luma8", 1, "uint8")
    LUMAA8 = ("lumaa8", 2, "uint8")
    LUMA16 = ("luma16", 1, "uint16")
    LUMAA16 = ("lumaa16", 2, "uint16")
    RGB8 = ("rgb8", 3, "uint8")
    RGBA8 = ("rgba8", 4, "uint8")
    RGB16 = ("rgb16", 3, "uint16")
    RGBA16 = ("rgba16", 4, "uint16")
    RGB32F = ("rgb32f", 3, "float32")
    RGBA32F = ("rgba32f", 4, "float32")
    # Palette indices; the palette itself is not carried
    INDEXED8 = ("indexed8", 1, "uint8")
    LUMA32F = ("luma32f", 1, "float32")

    def __init__(self, label: str, channels: int, dtype_name: str):
        self.label = label
        self.channels = channels
        self.dtype_name = dtype_name

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.dtype_name)


# kind -> (Pillow mode, raw mode used for frombytes)
_PIL_MODES: Dict[ImageKind, Tuple[str, str]] = {
    ImageKind.LUMA8: ("L", "L"),
    ImageKind.LUMAA8: ("LA", "LA"),
    ImageKind.RGB8: ("RGB", "RGB"),
    ImageKind.RGBA8: ("RGBA", "RGBA"),
    ImageKind.LUMA16: ("I;16", "I;16"),
    ImageKind.LUMA32F: ("F", "F;32F"),
}

_KINDS_BY_PIL_MODE: Dict[str, ImageKind] = {
    "L": ImageKind.LUMA8,
    "LA": ImageKind.LUMAA8,
    "RGB": ImageKind.RGB8,
    "RGBA": ImageKind.RGBA8,
    "I;16": ImageKind.LUMA16,
    "P": ImageKind.INDEXED8,
    "F": ImageKind.LUMA32F,
}

# Little-endian dtypes matching the raw modes above
_PIL_RAW_DTYPES = {
    "uint8": np.dtype("u1"),
    "uint16": np.dtype("<u2"),
    "float32": np.dtype("<f4"),
}


def _cast_samples(values: np.ndarray, kind: ImageKind) -> np.ndarray:
    """
    Cast ``values`` to the kind's dtype without wrapping or truncating.

    Integer values are accepted when they fit the target range; floats are
    accepted for float kinds only.

    Raises:
        ImageShapeError: If a value cannot be represented exactly
    """
    target = kind.dtype
    if values.size == 0 or np.can_cast(values.dtype, target, casting="safe"):
        return values.astype(target)

    if values.dtype.kind in "biu" and target.kind in "iu":
        info = np.iinfo(target)
        low, high = int(values.min()), int(values.max())
        if low < info.min or high > info.max:
            raise ImageShapeError(
                f"{kind.label} samples must lie in [{info.min}, {info.max}], "
                f"got values in [{low}, {high}]"
            )
        return values.astype(target)

    if values.dtype.kind in "biuf" and target.kind == "f":
        return values.astype(target)

    raise ImageShapeError(f"Cannot store {values.dtype} samples in a {kind.label} image")


@dataclass(frozen=True, eq=False)
class PixelImage:
    """
    A decoded image of one ImageKind.

    Args:
        kind: Channel layout and sample type
        data: Array of shape (height, width, channels) with ``kind.dtype``
    """

    kind: ImageKind
    data: np.ndarray

    def __post_init__(self):
        data = self.data
        if data.ndim != 3:
            raise ImageShapeError(
                f"{self.kind.label} image needs a (height, width, channels) array, "
                f"got shape {data.shape}"
            )
        if data.shape[2] != self.kind.channels:
            raise ImageShapeError(
                f"{self.kind.label} image has {self.kind.channels} channel(s), "
                f"array has {data.shape[2]}"
            )
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ImageShapeError(f"Image dimensions must be positive, got {data.shape[:2]}")
        if data.dtype != self.kind.dtype:
            raise ImageShapeError(
                f"{self.kind.label} image needs {self.kind.dtype} samples, got {data.dtype}"
            )

    @classmethod
    def from_raw(cls, kind: ImageKind, width: int, height: int, samples) -> "PixelImage":
        """
        Build an image from a flat, row-major, channel-interleaved sample sequence.

        ``samples`` may be any array-like of values, or raw bytes holding
        native-order samples of the kind's dtype.

        Raises:
            ImageShapeError: If the sample count does not fill width x height pixels,
                or a value does not fit the kind's dtype
        """
        if isinstance(samples, (bytes, bytearray, memoryview)):
            if len(samples) % kind.dtype.itemsize != 0:
                raise ImageShapeError(
                    f"{len(samples)} bytes is not a whole number of {kind.dtype} samples"
                )
            flat = np.frombuffer(samples, dtype=kind.dtype).copy()
        else:
            flat = _cast_samples(np.asarray(samples), kind).reshape(-1)
        expected = width * height * kind.channels
        if flat.size != expected:
            raise ImageShapeError(
                f"{kind.label} {width}x{height} image needs {expected} samples, "
                f"got {flat.size}"
            )
        return cls(kind, flat.reshape(height, width, kind.channels))

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return self.kind.channels

    def as_bytes(self) -> bytes:
        """Raw sample bytes in native byte order."""
        return np.ascontiguousarray(self.data, dtype=self.kind.dtype).tobytes()

    def get_pixel(self, x: int, y: int) -> Optional[tuple]:
        """Channel values at (x, y), or None outside the image."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return tuple(self.data[y, x].tolist())

    def to_pil(self) -> Image.Image:
        """
        Convert to a Pillow image.

        Raises:
            ImageShapeError: If Pillow has no mode for this kind
        """
        if self.kind not in _PIL_MODES:
            raise ImageShapeError(f"No Pillow mode for {self.kind.label} images")
        mode, raw_mode = _PIL_MODES[self.kind]
        raw = self.data.astype(_PIL_RAW_DTYPES[self.kind.dtype_name]).tobytes()
        return Image.frombytes(mode, (self.width, self.height), raw, "raw", raw_mode)

    @classmethod
    def from_pil(cls, img: Image.Image) -> "PixelImage":
        """
        Wrap a Pillow image.

        Palette images keep their indices (INDEXED8); the palette is dropped.

        Raises:
            ImageShapeError: If the Pillow mode has no matching kind
        """
        kind = _KINDS_BY_PIL_MODE.get(img.mode)
        if kind is None:
            raise ImageShapeError(f"Unsupported Pillow mode: {img.mode}")
        array = np.asarray(img).astype(kind.dtype)
        return cls.from_raw(kind, img.width, img.height, array)

    def save(self, path: Union[str, Path], **kwargs):
        """Write the image to ``path`` through Pillow (format from the suffix)."""
        logger.info(f"Saving {self.kind.label} {self.width}x{self.height} image to {path}")
        self.to_pil().save(path, **kwargs)

    def __repr__(self) -> str:
        return f"PixelImage({self.kind.label}, {self.width}x{self.height})"
