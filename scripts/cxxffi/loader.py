"""
Binding loader

Parses a binding, detects the library and compiler it applies to, and
generates the symbol table:

    binding = cxxffi.loadfile('HelloWorld.ffipp')
    binding.HelloClass__StaticHello_V()

    hello = binding.HelloClass()
    binding.HelloClass__C_LID(hello, 1, 2, 3)
    binding.HelloClass__SayHello_V(hello)
"""

import logging
from typing import Optional, TYPE_CHECKING

from .detector import Detector, Override
from .generator import Generator, SymbolTable
from .namespace import Namespace, default_namespace
from .parser import parse

if TYPE_CHECKING:
    from .ir import Binding
    from .library import LibraryLoader

logger = logging.getLogger(__name__)


def define_binding(binding: 'Binding', override: Override = None, *,
                   namespace: Optional[Namespace] = None,
                   loader: Optional['LibraryLoader'] = None,
                   types: Optional[dict] = None) -> SymbolTable:
    """Generate the symbols of an already parsed binding

    `override` is a library (or library name, or a list of either) tried
    before the binding's own library names.
    """
    if namespace is None:
        namespace = default_namespace()

    library, compiler = Detector(loader, namespace).detect(binding, override)
    logger.info('Loading binding for compiler %r...', compiler)

    return Generator(namespace, types).generate(binding, compiler, library)


def load(text: str, override: Override = None, **kwargs) -> SymbolTable:
    """Load a binding from its source text"""
    return define_binding(parse(text), override, **kwargs)


def loadfile(path, override: Override = None, **kwargs) -> SymbolTable:
    """Load a binding from a file"""
    with open(path, 'r', encoding='utf-8') as f:
        contents = f.read()
    return load(contents, override, **kwargs)
