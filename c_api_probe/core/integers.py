"""
Native integers — the fixed-width vocabulary a C integer type can map onto.

Resolution is by (byte size, signedness) only. Widths outside
{1, 2, 4, 8} have no equivalent and resolve to None; guessing a width
would silently corrupt generated bindings.
"""
import ctypes
from enum import Enum, unique
from typing import Optional


@unique
class NativeInteger(str, Enum):
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"

    @property
    def signed(self) -> bool:
        return not self.value.startswith("u")

    @property
    def width_bits(self) -> int:
        return int(self.value.split("int", 1)[1])

    @property
    def width_bytes(self) -> int:
        return self.width_bits // 8

    @property
    def c_name(self) -> str:
        """The ``<stdint.h>`` spelling, e.g. ``int32_t``."""
        return f"{self.value}_t"

    @property
    def ctype(self):
        """Matching ``ctypes`` fixed-width type, e.g. ``ctypes.c_int32``."""
        return _CTYPES[self]


_CTYPES = {
    NativeInteger.INT8: ctypes.c_int8,
    NativeInteger.INT16: ctypes.c_int16,
    NativeInteger.INT32: ctypes.c_int32,
    NativeInteger.INT64: ctypes.c_int64,
    NativeInteger.UINT8: ctypes.c_uint8,
    NativeInteger.UINT16: ctypes.c_uint16,
    NativeInteger.UINT32: ctypes.c_uint32,
    NativeInteger.UINT64: ctypes.c_uint64,
}

_BY_SHAPE = {
    (member.width_bytes, member.signed): member for member in NativeInteger
}

SUPPORTED_WIDTHS = frozenset(width for width, _ in _BY_SHAPE)


def resolve_native_integer(size: int, signed: bool) -> Optional[NativeInteger]:
    """Fixed-width integer with *size* bytes and the given signedness, or None."""
    return _BY_SHAPE.get((size, signed))
