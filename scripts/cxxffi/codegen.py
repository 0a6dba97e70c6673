"""
Code generation utilities

Provides a line buffer for emitting C declarations and binding text, and
helpers for picking C++ type spellings apart.
"""

import re


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = '    '):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def indent(self):
        self._indent += 1

    def dedent(self):
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for brace blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


_CONST_RE = re.compile(r'\bconst\b')
_VOLATILE_RE = re.compile(r'\bvolatile\b')
_SPACE_RE = re.compile(r'\s+')
_ARRAY_RE = re.compile(r'\[\s*(\d*)\s*\]')


def identifier(name: str) -> str:
    """Make a (possibly namespaced) C++ name usable as a C identifier

    Examples:
        HelloClass -> HelloClass
        ns::Widget -> ns__Widget
    """
    return name.replace(':', '_')


def normalize_type(type_str: str) -> str:
    """Collapse whitespace and attach pointer/reference markers to the type

    Examples:
        "const  char *" -> "const char*"
        "Foo &"         -> "Foo&"
    """
    result = _SPACE_RE.sub(' ', type_str.strip())
    result = re.sub(r'\s*([*&])', r'\1', result)
    return result


def is_pointer(type_str: str) -> bool:
    return '*' in type_str


def is_reference(type_str: str) -> bool:
    return '&' in type_str


def is_const(type_str: str) -> bool:
    return _CONST_RE.search(type_str) is not None


def pointer_depth(type_str: str) -> int:
    """Number of indirections, counting a reference as one"""
    return type_str.count('*') + (1 if is_reference(type_str) else 0)


def strip_qualifiers(type_str: str) -> str:
    """Remove pointer, reference, const and volatile markers

    Examples:
        "const char*"        -> "char"
        "unsigned int const" -> "unsigned int"
        "std::string&"       -> "std::string"
    """
    result = type_str.replace('*', ' ').replace('&', ' ')
    result = _CONST_RE.sub(' ', result)
    result = _VOLATILE_RE.sub(' ', result)
    return _SPACE_RE.sub(' ', result).strip()


def is_array_type(type_str: str) -> bool:
    return _ARRAY_RE.search(type_str) is not None


def extract_array_type(type_str: str) -> str:
    """Extract element type from array type"""
    return type_str[:type_str.index('[')].strip()


def extract_array_sizes(type_str: str) -> list[int]:
    """Extract array dimensions"""
    return [int(m) for m in re.findall(r'\[\s*(\d+)\s*\]', type_str)]


def split_array_suffix(type_str: str) -> tuple[str, str]:
    """Split "float[4]" into ("float", "[4]") for declarator placement"""
    if not is_array_type(type_str):
        return type_str, ''
    idx = type_str.index('[')
    return type_str[:idx].strip(), type_str[idx:].replace(' ', '')
