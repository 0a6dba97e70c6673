"""
Error types

Everything raised by the package derives from BindingError.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


class BindingError(Exception):
    """Base class for binding errors"""


class ParseError(BindingError):
    """Malformed binding text"""

    def __init__(self, line: int, token: str):
        self.line = line
        self.token = token
        super().__init__(f'Error on line {line}: unexpected token {token!r}')


class GenerationError(BindingError):
    """Binding could not be turned into declarations"""


class UnknownBaseClass(GenerationError):
    """A class inherits from a class that was never registered"""

    def __init__(self, class_name: str, base: str):
        self.class_name = class_name
        self.base = base
        super().__init__(f'Class {class_name!r} cannot inherit from unknown class {base!r}.')


class CyclicBaseClass(GenerationError):
    """Inheritance chain loops back on itself"""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__('Cyclic inheritance: ' + ' -> '.join(self.chain))


class DuplicateMember(GenerationError):
    """Two fields of one layout share a name, e.g. a member shadowing a base member"""

    def __init__(self, class_name: str, member: str):
        self.class_name = class_name
        self.member = member
        super().__init__(f'Class {class_name!r} declares field {member!r} more than once.')


class UnsupportedType(GenerationError):
    """A C type spelling has no ctypes equivalent"""

    def __init__(self, type_str: str):
        self.type = type_str
        super().__init__(f'No ctypes equivalent for type {type_str!r}')


class NamespaceConflict(BindingError):
    """Name already declared with a different shape"""

    def __init__(self, name: str, existing: Optional[str] = None, new: Optional[str] = None):
        self.name = name
        self.existing = existing
        self.new = new
        if existing is None:
            message = f'{name!r} is declared more than once'
        else:
            message = f'{name!r} is already declared as:\n{existing}\nand cannot be redeclared as:\n{new}'
        super().__init__(message)


class DetectionError(BindingError):
    """No usable library/compiler pair"""


class NoLibraryFound(DetectionError):
    def __init__(self, candidates: Sequence[str]):
        self.candidates = list(candidates)
        super().__init__(
            f'Binding contained library names ({", ".join(self.candidates)}), '
            f'but none of them could be located.')


class NoCompilerDetected(DetectionError):
    def __init__(self):
        super().__init__('No suitable library-compiler combination was found to load the binding.')


@dataclass(frozen=True)
class MissingOverloadSymbol:
    """Record of an accessor left out of a symbol table"""
    accessor: str
    compiler: str
    reason: str
    symbol: Optional[str] = None
