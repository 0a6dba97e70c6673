"""
Compiler detector

Locates the library a binding lives in and determines which compiler built
it, by checking which compiler's probe symbol the library exports.
"""

import logging
from typing import Iterable, Iterator, Optional, Union, TYPE_CHECKING

from .codegen import identifier
from .errors import NoCompilerDetected, NoLibraryFound
from .library import CtypesLoader
from .namespace import Namespace, default_namespace

if TYPE_CHECKING:
    from .ir import Binding
    from .library import Library, LibraryLoader

logger = logging.getLogger(__name__)

Override = Union[None, str, 'Library', Iterable[Union[str, 'Library']]]


class Detector:
    """Chooses a library and the compiler that produced it"""

    def __init__(self, loader: Optional['LibraryLoader'] = None, namespace: Optional[Namespace] = None):
        self.loader = loader if loader is not None else CtypesLoader()
        self.namespace = namespace if namespace is not None else default_namespace()

    def compiler(self, library: 'Library', probes: dict[str, str]) -> Optional[str]:
        """Name of the compiler whose probe symbol `library` exports, if any"""
        probe_id = self.namespace.next_probe_id()

        for compiler, symbol in probes.items():
            name = f'_TEST_{identifier(compiler)}_{probe_id}'
            self.namespace.declare(name, f'void {name}(void) asm("{symbol}");')

            if library.resolve(symbol) is not None:
                return compiler

        return None

    def _load(self, item) -> Optional['Library']:
        if isinstance(item, str):
            return self.loader.load(item)
        return item

    def libraries(self, candidates: list[str], preloaded: Override = None) -> Iterator['Library']:
        """Libraries to try, in order, loaded only when reached"""
        if preloaded is None:
            overrides = []
        elif isinstance(preloaded, str) or hasattr(preloaded, 'resolve'):
            overrides = [preloaded]
        else:
            overrides = list(preloaded)

        for item in overrides:
            library = self._load(item)
            if library is not None:
                yield library

        for name in candidates:
            library = self.loader.load(name)
            if library is None:
                logger.debug('Library %r could not be loaded', name)
                continue
            yield library

        if not candidates:
            yield self.loader.default()

    def choose(self, candidates: list[str], probes: dict[str, str],
               preloaded: Override = None) -> tuple['Library', str]:
        """First (library, compiler) pair whose probe symbol resolves"""
        found_library = False

        for library in self.libraries(candidates, preloaded):
            found_library = True
            compiler = self.compiler(library, probes)
            if compiler is not None:
                logger.info('Detected compiler %r for %r', compiler, library)
                return library, compiler

        if not found_library:
            raise NoLibraryFound(candidates)
        raise NoCompilerDetected()

    def detect(self, binding: 'Binding', override: Override = None) -> tuple['Library', str]:
        return self.choose(binding.candidate_libraries, binding.probe_symbols, override)


def detect(binding: 'Binding', override: Override = None, *,
           loader: Optional['LibraryLoader'] = None,
           namespace: Optional[Namespace] = None) -> tuple['Library', str]:
    """Choose a library and compiler for a binding"""
    return Detector(loader, namespace).detect(binding, override)
