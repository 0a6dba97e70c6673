"""
cxxffi - call precompiled C++ classes through ctypes

A binding file describes a class's data layout and the native symbols of its
constructors, destructor and methods for each compiler ABI. cxxffi parses it,
works out which compiler built the library at hand, and generates
C-compatible declarations and collision-free accessor names for them.
"""

from .ir import Binding, ClassDef, DataMember, MethodDef, MethodKind, Layout, LayoutField
from .errors import (
    BindingError, ParseError, GenerationError, UnknownBaseClass, CyclicBaseClass,
    DuplicateMember, UnsupportedType, NamespaceConflict, DetectionError, NoLibraryFound,
    NoCompilerDetected, MissingOverloadSymbol,
)
from .mangler import suffix, mangle
from .parser import parse, parse_file
from .writer import dumps
from .namespace import Namespace, default_namespace
from .library import CtypesLoader, CtypesLibrary
from .types import TypeConverter
from .detector import Detector, detect
from .generator import Generator, SymbolTable, generate
from .loader import define_binding, load, loadfile

__version__ = '1.3.0'

__all__ = [
    'Binding', 'ClassDef', 'DataMember', 'MethodDef', 'MethodKind', 'Layout', 'LayoutField',
    'BindingError', 'ParseError', 'GenerationError', 'UnknownBaseClass', 'CyclicBaseClass',
    'DuplicateMember', 'UnsupportedType', 'NamespaceConflict', 'DetectionError', 'NoLibraryFound',
    'NoCompilerDetected', 'MissingOverloadSymbol',
    'suffix', 'mangle',
    'parse', 'parse_file',
    'dumps',
    'Namespace', 'default_namespace',
    'CtypesLoader', 'CtypesLibrary',
    'TypeConverter',
    'Detector', 'detect',
    'Generator', 'SymbolTable', 'generate',
    'define_binding', 'load', 'loadfile',
]
