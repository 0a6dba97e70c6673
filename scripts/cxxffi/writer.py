"""
Binding writer

Renders a Binding back into binding text that the parser accepts.
"""

from .codegen import CodeGen, split_array_suffix
from .ir import Binding, ClassDef, MethodDef, MethodKind

_SIGILS = {
    MethodKind.CONSTRUCTOR: '!',
    MethodKind.DESTRUCTOR: '~',
}


def _signature(method: MethodDef) -> str:
    params = ', '.join(method.parameters)
    if method.kind in _SIGILS:
        return f'{_SIGILS[method.kind]}({params})'
    head = f'{method.return_type} {method.name}({params})'
    if method.kind is MethodKind.STATIC:
        head = 'static ' + head
    return head


class BindingWriter:
    """Writes binding text with a CodeGen buffer"""

    def __init__(self, indent_str: str = '\t'):
        self.indent_str = indent_str

    def write(self, binding: Binding) -> str:
        gen = CodeGen(self.indent_str)

        if binding.candidate_libraries:
            with gen.block('assemblies {'):
                gen.lines(*binding.candidate_libraries)
            gen.line()

        if binding.probe_symbols:
            with gen.block('test {'):
                for compiler, symbol in binding.probe_symbols.items():
                    gen.line(f'{compiler} {symbol};')
            gen.line()

        for cls in binding.classes:
            self._write_class(cls, gen)
            gen.line()

        return gen.output()

    def _write_class(self, cls: ClassDef, gen: CodeGen):
        header = f'class {cls.name}'
        if cls.inherits:
            header += ' : ' + ', '.join(cls.inherits)

        with gen.block(header + ' {'):
            if cls.has_virtuals:
                gen.line('has_virtuals;')

            if cls.data:
                with gen.block('data {'):
                    for member in cls.data:
                        type_str, dims = split_array_suffix(member.type)
                        gen.line(f'{type_str} {member.name}{dims};')

            if cls.methods:
                with gen.block('methods {'):
                    for method in cls.methods:
                        self._write_method(method, gen)

    def _write_method(self, method: MethodDef, gen: CodeGen):
        if not method.symbols:
            gen.line(_signature(method) + ' {}')
            return
        with gen.block(_signature(method) + ' {'):
            for compiler, symbol in method.symbols.items():
                gen.line(f'{compiler} {symbol};')


def dumps(binding: Binding) -> str:
    """Render a Binding as binding text"""
    return BindingWriter().write(binding)
