"""
Binding parser

Parses binding text into a Binding:

    assemblies { HelloWorld HelloWorld64 }
    assembly "HelloWorld"

    test {
        msvc ?StaticHello@HelloClass@@SAXXZ;
        itanium _ZN10HelloClass11StaticHelloEv;
    }

    class HelloClass : Base {
        has_virtuals;

        data {
            int64_t one;
        }

        methods {
            !(int64_t, int32_t) { msvc ??0HelloClass@@QAE@_JH@Z; }
            ~() { msvc ??1HelloClass@@QAE@XZ; }
            static void StaticHello() { msvc ?StaticHello@HelloClass@@SAXXZ; }
            void SayHello() { msvc ?SayHello@HelloClass@@UAEXXZ; }
        }
    }

Each nesting level has its own set of directives, tried in declaration order
at the current position; the first one that matches consumes its span. Nested
blocks are cut out as balanced-brace spans and parsed with their own level's
directives, starting from the absolute line they begin on.
"""

import re
from enum import Enum
from typing import Callable, Optional

from .codegen import normalize_type
from .errors import ParseError
from .ir import Binding, ClassDef, DataMember, MethodDef, MethodKind

_WORD_RE = re.compile(r'\w+')
_SYMBOL_RE = re.compile(r'([^\s;]+)\s+([^\s;]+)\s*;')

# Method signature pieces
_RETURNS = r'(?P<returns>[A-Za-z_][\w:<>,\s]*?[\s*&]+)'
_NAME = r'(?P<name>[A-Za-z_]\w*)'
_PARAMS = r'\(\s*(?P<params>[^)]*)\)'
_SYMBOLS = r'\s*(?=\{)'


class TopDirective(Enum):
    """Top-level directives, in priority order"""
    SPACE = re.compile(r'\s+')
    LINE_COMMENT = re.compile(r'//[^\n]*\n?')
    BLOCK_COMMENT = re.compile(r'/\*.*?\*/', re.DOTALL)
    ASSEMBLIES = re.compile(r'assemblies\s*(?=\{)')
    ASSEMBLY = re.compile(r'assembly\s*"(?P<name>[^"]*)"')
    TEST = re.compile(r'test\s*(?=\{)')
    CLASS = re.compile(
        r'class\s+(?P<name>[A-Za-z_]\w*(?:::[A-Za-z_]\w*)*)\s*'
        r'(?::(?P<inherits>[^{]*))?(?=\{)')


class ClassDirective(Enum):
    """Class body directives, in priority order"""
    SPACE = TopDirective.SPACE.value
    LINE_COMMENT = TopDirective.LINE_COMMENT.value
    BLOCK_COMMENT = TopDirective.BLOCK_COMMENT.value
    HAS_VIRTUALS = re.compile(r'has_virtuals\s*;')
    DATA = re.compile(r'data\s*(?=\{)')
    METHODS = re.compile(r'methods\s*(?=\{)')


class DataDirective(Enum):
    """Data block directives, in priority order"""
    SPACE = TopDirective.SPACE.value
    LINE_COMMENT = TopDirective.LINE_COMMENT.value
    BLOCK_COMMENT = TopDirective.BLOCK_COMMENT.value
    MEMBER = re.compile(
        r'(?P<type>[A-Za-z_][\w:<>,\s]*?[\s*&]+)(?P<name>[A-Za-z_]\w*)'
        r'(?P<dims>(?:\s*\[\s*\d+\s*\])*)\s*;')


class MethodDirective(Enum):
    """Methods block directives, in priority order"""
    SPACE = TopDirective.SPACE.value
    LINE_COMMENT = TopDirective.LINE_COMMENT.value
    BLOCK_COMMENT = TopDirective.BLOCK_COMMENT.value
    CONSTRUCTOR = re.compile(r'!\s*' + _PARAMS + _SYMBOLS)
    DESTRUCTOR = re.compile(r'~\s*' + _PARAMS + _SYMBOLS)
    STATIC = re.compile(r'static\s+' + _RETURNS + _NAME + r'\s*' + _PARAMS + _SYMBOLS)
    METHOD = re.compile(r'(?!static\b)' + _RETURNS + _NAME + r'\s*' + _PARAMS + _SYMBOLS)


SKIPPED = {'SPACE', 'LINE_COMMENT', 'BLOCK_COMMENT'}


def find_block_end(source: str, start: int) -> Optional[int]:
    """Index of the brace closing the one at `start`, or None if unbalanced

    Braces inside comments are not counted.
    """
    comments = (TopDirective.LINE_COMMENT.value, TopDirective.BLOCK_COMMENT.value)
    depth = 0
    pos = start
    while pos < len(source):
        char = source[pos]
        if char == '/':
            match = comments[0].match(source, pos) or comments[1].match(source, pos)
            if match:
                pos = match.end()
                continue
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return None


def strip_comments(text: str) -> str:
    for comment in (TopDirective.BLOCK_COMMENT, TopDirective.LINE_COMMENT):
        text = comment.value.sub(' ', text)
    return text


def parse_symbols(body: str) -> dict[str, str]:
    """Parse "<compiler> <symbol>;" entries"""
    return {compiler: symbol for compiler, symbol in _SYMBOL_RE.findall(strip_comments(body))}


def parse_parameters(params: str) -> list[str]:
    """Split a parameter list into normalized type strings"""
    result = [normalize_type(p) for p in params.split(',') if p.strip()]
    if result == ['void']:
        return []
    return result


class _Scanner:
    """Walks one block of source, dispatching on a directive enum"""

    def __init__(self, source: str, line: int):
        self.source = source
        self.pos = 0
        self.line = line

    def run(self, directives: type[Enum], handle: Callable):
        while self.pos < len(self.source):
            for directive in directives:
                match = directive.value.match(self.source, self.pos)
                if match is None:
                    continue
                end = match.end()
                if directive.name not in SKIPPED:
                    end = handle(directive, match, self)
                    if end is None:
                        continue
                self.advance(end)
                break
            else:
                raise ParseError(self.line, self.token())

    def advance(self, end: int):
        self.line += self.source.count('\n', self.pos, end)
        self.pos = end

    def line_at(self, index: int) -> int:
        """Absolute line of an index at or after the current position"""
        return self.line + self.source.count('\n', self.pos, index)

    def block(self, start: int) -> Optional[tuple[str, int, int]]:
        """Cut out the braced block opening at `start`

        Returns (body, body line, index past the closing brace).
        """
        end = find_block_end(self.source, start)
        if end is None:
            return None
        return self.source[start + 1:end], self.line_at(start + 1), end + 1

    def token(self) -> str:
        match = _WORD_RE.match(self.source, self.pos)
        if match:
            return match.group(0)
        return self.source[self.pos]


class BindingParser:
    """Recursive-descent parser over the directive enums"""

    def parse(self, text: str) -> Binding:
        binding = Binding()

        def handle(directive, match, scanner):
            if directive is TopDirective.ASSEMBLY:
                binding.candidate_libraries.append(match.group('name'))
                return match.end()

            block = scanner.block(match.end())
            if block is None:
                return None
            body, line, end = block
            if directive is TopDirective.ASSEMBLIES:
                binding.candidate_libraries.extend(strip_comments(body).split())
            elif directive is TopDirective.TEST:
                binding.probe_symbols.update(parse_symbols(body))
            else:
                binding.classes.append(self._parse_class(match, body, line))
            return end

        _Scanner(text, 1).run(TopDirective, handle)
        return binding

    def _parse_class(self, header, body: str, line: int) -> ClassDef:
        inherits = header.group('inherits') or ''
        cls = ClassDef(
            name=header.group('name'),
            inherits=[item for item in re.split(r'[,\s]+', inherits) if item],
        )

        def handle(directive, match, scanner):
            if directive is ClassDirective.HAS_VIRTUALS:
                cls.has_virtuals = True
                return match.end()

            block = scanner.block(match.end())
            if block is None:
                return None
            inner, inner_line, end = block
            if directive is ClassDirective.DATA:
                cls.data.extend(self._parse_data(inner, inner_line))
            else:
                cls.methods.extend(self._parse_methods(inner, inner_line))
            return end

        _Scanner(body, line).run(ClassDirective, handle)
        return cls

    def _parse_data(self, body: str, line: int) -> list[DataMember]:
        members = []

        def handle(directive, match, scanner):
            type_str = normalize_type(match.group('type'))
            dims = re.sub(r'\s+', '', match.group('dims'))
            members.append(DataMember(type_str + dims, match.group('name')))
            return match.end()

        _Scanner(body, line).run(DataDirective, handle)
        return members

    def _parse_methods(self, body: str, line: int) -> list[MethodDef]:
        methods = []
        kinds = {
            MethodDirective.CONSTRUCTOR: MethodKind.CONSTRUCTOR,
            MethodDirective.DESTRUCTOR: MethodKind.DESTRUCTOR,
            MethodDirective.STATIC: MethodKind.STATIC,
            MethodDirective.METHOD: MethodKind.METHOD,
        }

        def handle(directive, match, scanner):
            block = scanner.block(match.end())
            if block is None:
                return None
            body, _, end = block
            method = MethodDef(
                kind=kinds[directive],
                parameters=parse_parameters(match.group('params')),
                symbols=parse_symbols(body),
            )
            if directive in (MethodDirective.STATIC, MethodDirective.METHOD):
                method.name = match.group('name')
                method.return_type = normalize_type(match.group('returns'))
            methods.append(method)
            return end

        _Scanner(body, line).run(MethodDirective, handle)
        return methods


def parse(text: str) -> Binding:
    """Parse binding text"""
    return BindingParser().parse(text)


def parse_file(path) -> Binding:
    """Parse a binding file"""
    with open(path, 'r', encoding='utf-8') as f:
        return parse(f.read())
