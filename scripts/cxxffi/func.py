"""
Accessor generation module

Generates one C declaration per constructor, destructor and method, bound to
the native symbol the chosen compiler emitted for it:

    HelloClass* __thiscall HelloClass__C_LI(HelloClass*, int64_t, int32_t) asm("??0HelloClass@@QAE@_JH@Z");
"""

import ctypes
import os
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .codegen import identifier
from .ir import MethodKind
from .mangler import suffix

if TYPE_CHECKING:
    from .ir import MethodDef
    from .namespace import Namespace
    from .types import TypeConverter

# Calling conventions per ABI family: (receiver methods, static functions)
CONVENTIONS = {
    'msvc': ('__thiscall', '__cdecl'),
    'itanium': ('__cdecl', '__cdecl'),
}

ROLES = {
    MethodKind.CONSTRUCTOR: 'C',
    MethodKind.DESTRUCTOR: 'D',
}


def abi_family(compiler: str) -> str:
    """ABI family of a compiler id: MSVC-style or Itanium-style"""
    if compiler.lower().startswith('msvc'):
        return 'msvc'
    return 'itanium'


def calling_convention(compiler: str, method: 'MethodDef') -> str:
    receiver, static = CONVENTIONS[abi_family(compiler)]
    return receiver if method.has_receiver else static


def thiscall_is_distinct() -> bool:
    """Whether __thiscall differs from __cdecl here (32-bit Windows only)"""
    return os.name == 'nt' and ctypes.sizeof(ctypes.c_void_p) == 4


def is_bindable(compiler: str, method: 'MethodDef') -> bool:
    """Whether CFUNCTYPE matches the convention the accessor is declared with"""
    return calling_convention(compiler, method) != '__thiscall' or not thiscall_is_distinct()


def accessor_name(class_name: str, method: 'MethodDef') -> str:
    """<Class>__<Role>_<Suffix>, unique per overload"""
    role = ROLES.get(method.kind, method.name)
    return f'{identifier(class_name)}__{role}_{suffix(method.parameters)}'


@dataclass
class Accessor:
    """Declared accessor, ready to be bound to an address"""
    name: str
    symbol: str
    declaration: str
    restype: Optional[type]
    argtypes: list[type]

    @property
    def prototype(self):
        return ctypes.CFUNCTYPE(self.restype, *self.argtypes)

    def bind(self, address: int):
        """Callable for the native function at `address`"""
        return self.prototype(address)


class FuncGenerator:
    """Generates accessor declarations for class members"""

    def __init__(self, namespace: 'Namespace', type_conv: 'TypeConverter'):
        self.namespace = namespace
        self.type_conv = type_conv

    def _return_type(self, class_name: str, method: 'MethodDef') -> str:
        if method.kind is MethodKind.CONSTRUCTOR:
            return f'{class_name}*'
        if method.kind is MethodKind.DESTRUCTOR:
            return 'void'
        return method.return_type

    def _parameters(self, class_name: str, method: 'MethodDef') -> list[str]:
        params = list(method.parameters)
        if method.has_receiver:
            params.insert(0, f'{class_name}*')
        return params

    def declaration(self, class_name: str, method: 'MethodDef', compiler: str, symbol: str) -> str:
        class_name = identifier(class_name)
        name = accessor_name(class_name, method)
        returns = self._return_type(class_name, method)
        params = ', '.join(self._parameters(class_name, method)) or 'void'
        convention = calling_convention(compiler, method)
        return f'{returns} {convention} {name}({params}) asm("{symbol}");'

    def generate(self, class_name: str, method: 'MethodDef', compiler: str) -> Optional[Accessor]:
        """Declare the accessor for `compiler`

        Returns None when the method has no symbol for this compiler. Raises
        UnsupportedType if a parameter or return type has no ctypes
        equivalent, and NamespaceConflict if the name is already declared
        differently.
        """
        symbol = method.symbols.get(compiler)
        if symbol is None:
            return None

        safe_name = identifier(class_name)
        restype = self.type_conv.to_ctype(self._return_type(safe_name, method))
        argtypes = [self.type_conv.to_ctype(p) for p in self._parameters(safe_name, method)]

        text = self.declaration(class_name, method, compiler, symbol)
        name = accessor_name(class_name, method)
        self.namespace.declare(name, text)

        return Accessor(name=name, symbol=symbol, declaration=text,
                        restype=restype, argtypes=argtypes)
