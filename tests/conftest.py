import itertools

import pytest

from cxxffi import Namespace

HELLO_BINDING = """\
// HelloWorld sample binding
assemblies {
\tHelloWorld
}

test {
\tmsvc ?StaticHello@HelloClass@@SAXXZ;
\titanium _ZN10HelloClass11StaticHelloEv;
}

class HelloClass {
\thas_virtuals;

\tdata {
\t\tint64_t one;
\t\tint32_t two;
\t\tdouble three;
\t}

\tmethods {
\t\t!() {
\t\t\tmsvc ??0HelloClass@@QAE@XZ;
\t\t\titanium _ZN10HelloClassC1Ev;
\t\t}
\t\t!(int64_t, int32_t) {
\t\t\tmsvc ??0HelloClass@@QAE@_JH@Z;
\t\t\titanium _ZN10HelloClassC1Eli;
\t\t}
\t\t~() {
\t\t\tmsvc ??1HelloClass@@QAE@XZ;
\t\t\titanium _ZN10HelloClassD1Ev;
\t\t}
\t\tvoid SayHello() {
\t\t\tmsvc ?SayHello@HelloClass@@UAEXXZ;
\t\t\titanium _ZN10HelloClass8SayHelloEv;
\t\t}
\t\tvoid Say(const char*) {
\t\t\tmsvc ?Say@HelloClass@@UAEXPBD@Z;
\t\t\titanium _ZN10HelloClass3SayEPKc;
\t\t}
\t\tstatic void StaticHello() {
\t\t\tmsvc ?StaticHello@HelloClass@@SAXXZ;
\t\t\titanium _ZN10HelloClass11StaticHelloEv;
\t\t}
\t}
}
"""

_addresses = itertools.count(0x10000, 0x10)


class FakeLibrary:
    """Library exporting a fixed set of symbols"""

    def __init__(self, name, symbols=()):
        self.name = name
        self.symbols = {symbol: next(_addresses) for symbol in symbols}
        self.lookups = []

    def resolve(self, symbol):
        self.lookups.append(symbol)
        return self.symbols.get(symbol)

    def __repr__(self):
        return f'FakeLibrary({self.name!r})'


class FakeLoader:
    """Loader over a dict of fake libraries"""

    def __init__(self, libraries=(), default=None):
        self.libraries = {lib.name: lib for lib in libraries}
        self.default_library = default or FakeLibrary('<process>')
        self.loaded = []

    def load(self, name):
        self.loaded.append(name)
        return self.libraries.get(name)

    def default(self):
        return self.default_library


@pytest.fixture
def namespace():
    return Namespace()


@pytest.fixture
def hello_text():
    return HELLO_BINDING


def all_symbols(binding, compiler):
    """Every symbol a binding names for one compiler"""
    symbols = [binding.probe_symbols[compiler]]
    for cls in binding.classes:
        for method in cls.methods:
            if compiler in method.symbols:
                symbols.append(method.symbols[compiler])
    return symbols
