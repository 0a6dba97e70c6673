import ctypes

import pytest

from cxxffi import Layout, TypeConverter, UnsupportedType


@pytest.fixture
def conv(namespace):
    return TypeConverter(namespace)


def test_primitives(conv):
    assert conv.to_ctype('int64_t') is ctypes.c_int64
    assert conv.to_ctype('unsigned int') is ctypes.c_uint
    assert conv.to_ctype('double') is ctypes.c_double
    assert conv.to_ctype('const int32_t') is ctypes.c_int32
    assert conv.to_ctype('void') is None


def test_pointers(conv):
    assert conv.to_ctype('void*') is ctypes.c_void_p
    assert conv.to_ctype('const char*') is ctypes.c_char_p
    assert conv.to_ctype('int32_t*') is ctypes.POINTER(ctypes.c_int32)
    assert conv.to_ctype('double&') is ctypes.POINTER(ctypes.c_double)
    assert conv.to_ctype('char**') is ctypes.POINTER(ctypes.POINTER(ctypes.c_char))


def test_unknown_types(conv):
    assert conv.to_ctype('std::string*') is ctypes.c_void_p
    with pytest.raises(UnsupportedType):
        conv.to_ctype('std::string')
    assert not conv.is_known('std::string')


def test_arrays(conv):
    vector = conv.to_ctype('float[4]')
    assert vector._type_ is ctypes.c_float
    assert vector._length_ == 4
    matrix = conv.to_ctype('float[4][3]')
    assert ctypes.sizeof(matrix) == ctypes.sizeof(ctypes.c_float) * 12
    assert matrix._length_ == 4


def test_registered_classes(conv, namespace):
    class Widget(ctypes.Structure):
        _fields_ = [('x', ctypes.c_int)]

    namespace.register_layout(Layout('ui__Widget', ()), Widget)
    assert conv.to_ctype('ui::Widget') is Widget
    assert conv.to_ctype('const ui::Widget*') is ctypes.POINTER(Widget)


def test_custom_handler(conv):
    class StdString(ctypes.Structure):
        _fields_ = [('data', ctypes.c_void_p), ('size', ctypes.c_size_t), ('cap', ctypes.c_size_t)]

    conv.register('std::string', StdString)
    assert conv.has_handler('std::string')
    assert conv.to_ctype('const std::string&') is ctypes.POINTER(StdString)
    assert conv.to_ctype('std::string') is StdString
