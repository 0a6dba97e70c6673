"""
Library loading capability

Wraps the dynamic loader behind two calls that report failure by returning
None instead of raising: LibraryLoader.load(name) and Library.resolve(symbol).
"""

import ctypes
import logging
import os
import sys
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Library(Protocol):
    """A loaded shared library"""
    name: str

    def resolve(self, symbol: str) -> Optional[int]:
        """Address of `symbol`, or None if the library does not export it"""
        ...


class LibraryLoader(Protocol):
    def load(self, name: str) -> Optional[Library]:
        """Load a library by name, or return None if it cannot be found"""
        ...

    def default(self) -> Library:
        """The process's own symbol namespace"""
        ...


def library_filename(name: str, platform: str = sys.platform) -> str:
    """Apply the platform's library prefix and suffix to a bare name

    Examples (linux):
        HelloWorld      -> libHelloWorld.so
        libfoo          -> libfoo.so
        ./HelloWorld.so -> ./HelloWorld.so
    """
    if '/' in name or '\\' in name:
        return name

    if platform.startswith('win'):
        return name if '.' in name else name + '.dll'

    suffix = '.dylib' if platform == 'darwin' else '.so'
    if '.' not in name:
        name += suffix
    if not name.startswith('lib'):
        name = 'lib' + name
    return name


class CtypesLibrary:
    """Library backed by ctypes.CDLL"""

    def __init__(self, name: str, dll: ctypes.CDLL):
        self.name = name
        self._dll = dll

    def resolve(self, symbol: str) -> Optional[int]:
        try:
            func = self._dll[symbol]
        except AttributeError:
            return None
        return ctypes.cast(func, ctypes.c_void_p).value

    def __repr__(self) -> str:
        return f'CtypesLibrary({self.name!r})'


class CtypesLoader:
    """Loads libraries through ctypes with platform naming rules"""

    def __init__(self, mode: int = ctypes.DEFAULT_MODE):
        self.mode = mode

    def load(self, name: str) -> Optional[CtypesLibrary]:
        path = library_filename(name)
        try:
            dll = ctypes.CDLL(path, mode=self.mode)
        except OSError as e:
            logger.debug('Could not load %r: %s', path, e)
            return None
        return CtypesLibrary(name, dll)

    def default(self) -> CtypesLibrary:
        if os.name == 'nt':
            return CtypesLibrary('<process>', ctypes.cdll.msvcrt)
        return CtypesLibrary('<process>', ctypes.CDLL(None))
