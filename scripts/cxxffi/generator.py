"""
Main generator module

Orchestrates layout and accessor generation for a whole binding and collects
the results into a SymbolTable.
"""

import logging
from typing import Optional, TYPE_CHECKING

from .codegen import CodeGen, identifier
from .errors import CyclicBaseClass, MissingOverloadSymbol, NamespaceConflict, UnknownBaseClass, UnsupportedType
from .func import FuncGenerator, accessor_name, is_bindable
from .namespace import Namespace, default_namespace
from .struct import StructGenerator
from .types import TypeConverter

if TYPE_CHECKING:
    from .ir import Binding, ClassDef, Layout, MethodDef
    from .library import Library

logger = logging.getLogger(__name__)


class SymbolTable(dict):
    """Generated names mapped to callables and structure types

    Entries are also reachable as attributes:

        table.HelloClass__C_V(instance)
    """

    def __init__(self, compiler: Optional[str] = None, library: Optional['Library'] = None):
        super().__init__()
        self.compiler = compiler
        self.library = library
        self.layouts: dict[str, 'Layout'] = {}
        self.declarations: str = ''
        self.skipped: list[MissingOverloadSymbol] = []

    def __getattr__(self, name: str):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e


class Generator:
    """Binding code generator"""

    def __init__(self, namespace: Optional[Namespace] = None, types: Optional[dict] = None):
        self.namespace = namespace if namespace is not None else default_namespace()
        self.type_conv = TypeConverter(self.namespace)
        for type_name, ctype in (types or {}).items():
            self.type_conv.register(type_name, ctype)
        self.struct_gen = StructGenerator(self.namespace, self.type_conv)
        self.func_gen = FuncGenerator(self.namespace, self.type_conv)

    def ordered_classes(self, binding: 'Binding') -> list['ClassDef']:
        """Classes with every base ahead of the classes inheriting from it

        Declaration order is kept otherwise. Bases may also come from layouts
        already registered in the namespace.
        """
        by_name: dict[str, 'ClassDef'] = {}
        for cls in binding.classes:
            if cls.name in by_name:
                raise NamespaceConflict(cls.name)
            by_name[cls.name] = cls

        order: list['ClassDef'] = []
        done: set[str] = set()
        visiting: list[str] = []

        def visit(cls: 'ClassDef'):
            if cls.name in done:
                return
            if cls.name in visiting:
                raise CyclicBaseClass(visiting[visiting.index(cls.name):] + [cls.name])
            visiting.append(cls.name)
            for base in cls.inherits:
                if base in by_name:
                    visit(by_name[base])
                elif self.namespace.get_layout(identifier(base)) is None:
                    raise UnknownBaseClass(cls.name, base)
            visiting.pop()
            done.add(cls.name)
            order.append(cls)

        for cls in binding.classes:
            visit(cls)
        return order

    def generate(self, binding: 'Binding', compiler: str, library: Optional['Library']) -> SymbolTable:
        """Declare every class and accessor of a binding for `compiler`

        With a library, accessors whose symbols resolve are bound and added
        to the table. Without one, only the declarations are produced.
        """
        table = SymbolTable(compiler, library)
        gen = CodeGen()

        for cls in self.ordered_classes(binding):
            layout = self.struct_gen.generate(cls, gen)
            gen.line()
            table.layouts[cls.name] = layout
            table[layout.name] = self.namespace.get_ctype(layout.name)

            for method in cls.methods:
                self._generate_method(cls, method, compiler, library, table, gen)
            gen.line()

        table.declarations = gen.output().rstrip('\n') + '\n'
        return table

    def _generate_method(self, cls: 'ClassDef', method: 'MethodDef', compiler: str,
                         library: Optional['Library'], table: SymbolTable, gen: CodeGen):
        name = accessor_name(cls.name, method)

        try:
            accessor = self.func_gen.generate(cls.name, method, compiler)
        except UnsupportedType as e:
            logger.warning('Cannot declare %r: %s: skipping', name, e)
            table.skipped.append(MissingOverloadSymbol(name, compiler, str(e)))
            return

        if accessor is None:
            logger.info('No symbol defined for %r for compiler %r: skipping', name, compiler)
            table.skipped.append(MissingOverloadSymbol(name, compiler, 'no symbol for compiler'))
            return

        logger.debug('%s', accessor.declaration)
        gen.line(accessor.declaration)

        if library is None:
            return

        if not is_bindable(compiler, method):
            logger.warning('Cannot call %r: ctypes has no __thiscall on this platform: skipping', name)
            table.skipped.append(MissingOverloadSymbol(name, compiler, 'thiscall unsupported', accessor.symbol))
            return

        address = library.resolve(accessor.symbol)
        if address is None:
            logger.warning('Symbol %r for %r not found in %r: skipping', accessor.symbol, name, library)
            table.skipped.append(MissingOverloadSymbol(name, compiler, 'symbol not found', accessor.symbol))
            return

        table[name] = accessor.bind(address)

    def declare(self, binding: 'Binding', compiler: str) -> str:
        """C declaration stream for a binding, without resolving any symbol"""
        return self.generate(binding, compiler, None).declarations


def generate(binding: 'Binding', compiler: str, library: Optional['Library'],
             namespace: Optional[Namespace] = None) -> SymbolTable:
    return Generator(namespace).generate(binding, compiler, library)
