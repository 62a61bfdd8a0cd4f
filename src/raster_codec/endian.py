"""
Byte-order aware sample decoding.

The byte order of a raster travels with the raster itself as an Endian value;
nothing here reads or sets process-wide state. Decoded arrays are always
returned in native byte order so downstream numpy code never has to care.
"""

import logging
import sys
from enum import Enum
from typing import Union

import numpy as np

from .errors import EndianDecodeError

logger = logging.getLogger("raster_codec.endian")

BytesLike = Union[bytes, bytearray, memoryview]


class Endian(Enum):
    """Byte order used to store multi-byte samples"""

    LITTLE = "little"
    BIG = "big"

    @classmethod
    def native(cls) -> "Endian":
        """Byte order of the running interpreter."""
        return cls.BIG if sys.byteorder == "big" else cls.LITTLE

    @property
    def prefix(self) -> str:
        """numpy byte-order character for this endianness."""
        return "<" if self is Endian.LITTLE else ">"

    def dtype(self, base) -> np.dtype:
        """Return ``base`` as a numpy dtype in this byte order."""
        base = np.dtype(base)
        if base.itemsize == 1:
            return base
        return base.newbyteorder(self.prefix)

    def decode(self, raw: BytesLike, dtype):
        """
        Decode exactly one value from ``raw``.

        Args:
            raw: Bytes of a single sample
            dtype: Target numpy dtype (byte order is taken from self)

        Returns:
            numpy scalar in native byte order

        Raises:
            EndianDecodeError: If ``raw`` is not exactly one item long
        """
        dt = self.dtype(dtype)
        if len(raw) != dt.itemsize:
            raise EndianDecodeError(
                f"Expected {dt.itemsize} byte(s) for {dt.name}, got {len(raw)}"
            )
        return np.frombuffer(raw, dtype=dt)[0].astype(dt.newbyteorder("="))

    def decode_all(self, buffer: BytesLike, dtype) -> np.ndarray:
        """
        Decode a whole buffer into a flat array of ``dtype`` values.

        Args:
            buffer: Raw sample bytes
            dtype: Target numpy dtype (byte order is taken from self)

        Returns:
            1-D array in native byte order, never a view on ``buffer``

        Raises:
            EndianDecodeError: If the buffer length is not a multiple of the item size
        """
        dt = self.dtype(dtype)
        if len(buffer) % dt.itemsize != 0:
            raise EndianDecodeError(
                f"Buffer of {len(buffer)} bytes is not a whole number of "
                f"{dt.itemsize}-byte {dt.name} values"
            )
        values = np.frombuffer(buffer, dtype=dt).astype(dt.newbyteorder("="), copy=True)
        logger.debug(f"Decoded {values.size} {dt.name} value(s) ({self.value} endian)")
        return values
