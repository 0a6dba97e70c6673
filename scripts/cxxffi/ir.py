"""
IR (Intermediate Representation) module

Represents a parsed binding description: the libraries to look in, the probe
symbols used for compiler detection, and the classes to bind.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional


class MethodKind(Enum):
    """Kind of a bound class member"""
    CONSTRUCTOR = 'constructor'
    DESTRUCTOR = 'destructor'
    METHOD = 'method'
    STATIC = 'static'


class DataMember(NamedTuple):
    """Class data member, as a (type, name) pair"""
    type: str
    name: str


@dataclass
class MethodDef:
    """Constructor, destructor or method with its per-compiler symbols"""
    kind: MethodKind
    name: Optional[str] = None
    return_type: Optional[str] = None
    parameters: list[str] = field(default_factory=list)
    symbols: dict[str, str] = field(default_factory=dict)

    @property
    def has_receiver(self) -> bool:
        """Whether the native call takes the instance pointer first"""
        return self.kind is not MethodKind.STATIC


@dataclass
class ClassDef:
    """Native class description"""
    name: str
    inherits: list[str] = field(default_factory=list)
    has_virtuals: bool = False
    data: list[DataMember] = field(default_factory=list)
    methods: list[MethodDef] = field(default_factory=list)

    def _of_kind(self, kind: MethodKind) -> list[MethodDef]:
        return [m for m in self.methods if m.kind is kind]

    @property
    def constructors(self) -> list[MethodDef]:
        return self._of_kind(MethodKind.CONSTRUCTOR)

    @property
    def destructors(self) -> list[MethodDef]:
        return self._of_kind(MethodKind.DESTRUCTOR)

    @property
    def instance_methods(self) -> list[MethodDef]:
        return self._of_kind(MethodKind.METHOD)

    @property
    def static_methods(self) -> list[MethodDef]:
        return self._of_kind(MethodKind.STATIC)


@dataclass
class Binding:
    """Root of a parsed binding description"""
    candidate_libraries: list[str] = field(default_factory=list)
    probe_symbols: dict[str, str] = field(default_factory=dict)
    classes: list[ClassDef] = field(default_factory=list)


class LayoutField(NamedTuple):
    """Field of a generated layout"""
    type: str
    name: str


@dataclass(frozen=True)
class Layout:
    """C-compatible structural description of a class

    Inherited fields come first, then the virtual table pointer (if any),
    then the class's own data members.
    """
    name: str
    fields: tuple[LayoutField, ...]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]
