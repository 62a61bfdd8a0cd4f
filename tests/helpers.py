"""
Test helpers for building raw sample buffers
"""

import struct

from raster_codec import Endian


def pack(fmt: str, values, endian: Endian = Endian.LITTLE) -> bytes:
    """Pack ``values`` with a struct format character in the given byte order"""
    prefix = "<" if endian is Endian.LITTLE else ">"
    return struct.pack(f"{prefix}{len(values)}{fmt}", *values)
