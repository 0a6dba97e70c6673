"""
Declaration namespace

Every generated struct and function declaration is recorded here by name.
Declaring a name again with the same shape is a no-op; declaring it with a
different shape raises NamespaceConflict. No locking is done: concurrent
loaders must use disjoint names or be serialized by the caller.
"""

import ctypes
import itertools
from typing import Optional

from .errors import NamespaceConflict
from .ir import Layout


class Namespace:
    """Registry of declared names, class layouts and their ctypes types"""

    def __init__(self):
        self._declarations: dict[str, str] = {}
        self._layouts: dict[str, Layout] = {}
        self._ctypes: dict[str, type[ctypes.Structure]] = {}
        self._probe_counter = itertools.count(1)

    def declare(self, name: str, shape: str) -> bool:
        """Record a declaration

        Returns True if the name is new, False if it was already declared
        with an identical shape.
        """
        existing = self._declarations.get(name)
        if existing is None:
            self._declarations[name] = shape
            return True
        if existing != shape:
            raise NamespaceConflict(name, existing, shape)
        return False

    def declaration(self, name: str) -> Optional[str]:
        return self._declarations.get(name)

    def register_layout(self, layout: Layout, ctype: type[ctypes.Structure]):
        """Cache a class layout and its structure type; layouts never change"""
        self._layouts.setdefault(layout.name, layout)
        self._ctypes.setdefault(layout.name, ctype)

    def get_layout(self, name: str) -> Optional[Layout]:
        return self._layouts.get(name)

    def get_ctype(self, name: str) -> Optional[type[ctypes.Structure]]:
        return self._ctypes.get(name)

    def next_probe_id(self) -> int:
        """Monotonically increasing id for probe declarations"""
        return next(self._probe_counter)

    def __contains__(self, name: str) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)


_default: Optional[Namespace] = None


def default_namespace() -> Namespace:
    """Process-wide namespace used when none is passed explicitly"""
    global _default
    if _default is None:
        _default = Namespace()
    return _default
