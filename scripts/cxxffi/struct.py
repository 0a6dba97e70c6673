"""
Struct layout generation module

Turns a class description into a flat, C-compatible layout: base class fields
first, then the virtual table pointer, then the class's own data members.
"""

import ctypes
import logging
from typing import TYPE_CHECKING

from .codegen import CodeGen, identifier, split_array_suffix
from .errors import DuplicateMember, UnknownBaseClass
from .ir import Layout, LayoutField

if TYPE_CHECKING:
    from .ir import ClassDef
    from .namespace import Namespace
    from .types import TypeConverter

logger = logging.getLogger(__name__)

VTABLE_POINTER_TYPE = 'void*'


class StructGenerator:
    """Generates class layouts and their struct declarations"""

    def __init__(self, namespace: 'Namespace', type_conv: 'TypeConverter'):
        self.namespace = namespace
        self.type_conv = type_conv

    def layout(self, cls: 'ClassDef') -> Layout:
        """Compute the layout of a class whose bases are already registered"""
        name = identifier(cls.name)
        fields: list[LayoutField] = []

        for base in cls.inherits:
            base_layout = self.namespace.get_layout(identifier(base))
            if base_layout is None:
                raise UnknownBaseClass(cls.name, base)
            fields.extend(base_layout.fields)

        if cls.has_virtuals:
            fields.append(LayoutField(VTABLE_POINTER_TYPE, f'vfptr_{name}'))

        for member in cls.data:
            fields.append(LayoutField(member.type, member.name))

        seen: set[str] = set()
        for field in fields:
            if field.name in seen:
                raise DuplicateMember(cls.name, field.name)
            seen.add(field.name)

        return Layout(name=name, fields=tuple(fields))

    def declaration(self, layout: Layout) -> str:
        """C typedef for a layout"""
        gen = CodeGen()
        with gen.block('typedef struct {', f'}} {layout.name};'):
            for field in layout.fields:
                type_str, dims = split_array_suffix(field.type)
                gen.line(f'{type_str} {field.name}{dims};')
        return gen.output()

    def make_ctype(self, layout: Layout) -> type[ctypes.Structure]:
        """ctypes.Structure subclass mirroring a layout"""
        fields = [(field.name, self.type_conv.to_ctype(field.type)) for field in layout.fields]
        return type(layout.name, (ctypes.Structure,), {'_fields_': fields})

    def generate(self, cls: 'ClassDef', gen: CodeGen) -> Layout:
        """Declare a class layout, reusing the cached one if already declared"""
        layout = self.layout(cls)
        text = self.declaration(layout)

        cached = self.namespace.get_layout(layout.name)
        if cached is not None and cached == layout:
            self.namespace.declare(layout.name, text)
            gen.lines(*text.splitlines())
            return cached

        ctype = self.make_ctype(layout)
        self.namespace.declare(layout.name, text)
        self.namespace.register_layout(layout, ctype)

        logger.debug('%s', text)
        gen.lines(*text.splitlines())
        return layout
