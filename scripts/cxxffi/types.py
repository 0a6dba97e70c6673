"""
Type conversion module

Maps C/C++ type spellings from a binding onto ctypes types.
"""

import ctypes
from typing import Optional, TYPE_CHECKING

from .codegen import (
    extract_array_sizes, extract_array_type, identifier, is_array_type,
    is_reference, normalize_type, pointer_depth, strip_qualifiers,
)
from .errors import UnsupportedType

if TYPE_CHECKING:
    from .namespace import Namespace

PRIMITIVES = {
    'bool': ctypes.c_bool,
    'char': ctypes.c_char,
    'signed char': ctypes.c_byte,
    'unsigned char': ctypes.c_ubyte,
    'wchar_t': ctypes.c_wchar,

    'short': ctypes.c_short,
    'unsigned short': ctypes.c_ushort,
    'int': ctypes.c_int,
    'unsigned int': ctypes.c_uint,
    'unsigned': ctypes.c_uint,
    'long': ctypes.c_long,
    'unsigned long': ctypes.c_ulong,
    'long long': ctypes.c_longlong,
    'unsigned long long': ctypes.c_ulonglong,

    'int8_t': ctypes.c_int8,
    'uint8_t': ctypes.c_uint8,
    'int16_t': ctypes.c_int16,
    'uint16_t': ctypes.c_uint16,
    'int32_t': ctypes.c_int32,
    'uint32_t': ctypes.c_uint32,
    'int64_t': ctypes.c_int64,
    'uint64_t': ctypes.c_uint64,

    'size_t': ctypes.c_size_t,
    'ssize_t': ctypes.c_ssize_t,
    'intptr_t': ctypes.c_ssize_t,
    'uintptr_t': ctypes.c_size_t,

    'float': ctypes.c_float,
    'double': ctypes.c_double,
    'long double': ctypes.c_longdouble,
}


class TypeConverter:
    """Resolves type strings to ctypes types

    Class names are looked up in the namespace, so a class can be passed by
    pointer once its layout has been generated. Extra names can be mapped with
    register().
    """

    def __init__(self, namespace: 'Namespace'):
        self.namespace = namespace
        self._handlers: dict[str, type] = {}

    def register(self, type_name: str, ctype):
        """Map a bare type name onto a ctypes type"""
        self._handlers[type_name] = ctype

    def has_handler(self, type_name: str) -> bool:
        return type_name in self._handlers

    def _base(self, bare: str):
        if bare in self._handlers:
            return self._handlers[bare]
        if bare in PRIMITIVES:
            return PRIMITIVES[bare]
        return self.namespace.get_ctype(identifier(bare))

    def to_ctype(self, type_str: str):
        """ctypes type for a parameter, return or field type

        Returns None for void. Pointers to unknown types decay to c_void_p;
        unknown types passed by value raise UnsupportedType.
        """
        type_str = normalize_type(type_str)

        if is_array_type(type_str):
            element = self.to_ctype(extract_array_type(type_str))
            if element is None:
                raise UnsupportedType(type_str)
            for size in reversed(extract_array_sizes(type_str)):
                element = element * size
            return element

        bare = strip_qualifiers(type_str)
        depth = pointer_depth(type_str)

        if depth == 0:
            if bare == 'void':
                return None
            base = self._base(bare)
            if base is None:
                raise UnsupportedType(type_str)
            return base

        if depth == 1 and not is_reference(type_str):
            if bare == 'void':
                return ctypes.c_void_p
            if bare == 'char' and bare not in self._handlers:
                return ctypes.c_char_p
            if bare == 'wchar_t' and bare not in self._handlers:
                return ctypes.c_wchar_p

        if bare == 'void':
            base, depth = ctypes.c_void_p, depth - 1
        else:
            base = self._base(bare)
        if base is None:
            return ctypes.c_void_p
        for _ in range(depth):
            base = ctypes.POINTER(base)
        return base

    def is_known(self, type_str: str) -> bool:
        try:
            self.to_ctype(type_str)
        except UnsupportedType:
            return False
        return True
