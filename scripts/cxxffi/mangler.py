"""
Type remangler

C++ allows overloads that differ only in their parameters; C does not. Each
generated accessor therefore gets a suffix derived from its parameter types.
Return types are never encoded since C++ cannot overload on them.

    Pointer to type: P* where * is the type
    Const:           Q* where * is the type
    Reference:       R* where * is the type
    64-bit integer:  L for signed, l for unsigned long long
    32-bit integer:  I for signed, i for unsigned
    16-bit integer:  S for signed, s for unsigned
     8-bit integer:  C for signed, c for unsigned
    double:          D
    float:           F
    void:            V
    anything else:   the name surrounded by underscores

The pointer marker is printed before const, and const before reference:

    MangleMe(const char* str, uint32_t length, void* callback) -> PQCiPV
    MeToo(std::string, lib_callback callback) -> _std__string__lib_callback_
"""

import re

from .codegen import identifier, is_const, is_pointer, is_reference, strip_qualifiers

TYPE_CODES = {
    'long long': 'L',
    'int64_t': 'L',
    'unsigned long long': 'l',
    'uint64_t': 'L',

    'int': 'I',
    'int32_t': 'I',
    'unsigned int': 'i',
    'uint32_t': 'i',

    'short': 'S',
    'int16_t': 'S',
    'unsigned short': 's',
    'uint16_t': 's',

    'char': 'C',
    'signed char': 'C',
    'int8_t': 'C',
    'unsigned char': 'c',
    'uint8_t': 'c',

    'double': 'D',
    'float': 'F',

    'void': 'V',
}

EMPTY_SUFFIX = 'V'


def type_code(parameter: str) -> str:
    """Token for a single parameter type"""
    bare = strip_qualifiers(parameter)

    code = TYPE_CODES.get(bare)
    if code is None:
        code = '_' + re.sub(r'\s+', '_', identifier(bare)) + '_'

    if is_reference(parameter):
        code = 'R' + code
    if is_const(parameter):
        code = 'Q' + code
    if is_pointer(parameter):
        code = 'P' + code

    return code


def suffix(parameters) -> str:
    """Argument-based suffix a function gets to prevent name clashes"""
    if not parameters:
        return EMPTY_SUFFIX
    return ''.join(type_code(p) for p in parameters)


def mangle(name: str, parameters) -> str:
    """Identifier-safe name followed by its parameter suffix"""
    return identifier(name) + suffix(parameters)
