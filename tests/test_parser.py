import pytest

from cxxffi import MethodKind, ParseError, parse
from cxxffi.parser import find_block_end, parse_file, parse_parameters, parse_symbols


def test_hello_binding(hello_text):
    binding = parse(hello_text)

    assert binding.candidate_libraries == ['HelloWorld']
    assert binding.probe_symbols == {
        'msvc': '?StaticHello@HelloClass@@SAXXZ',
        'itanium': '_ZN10HelloClass11StaticHelloEv',
    }
    assert len(binding.classes) == 1

    cls = binding.classes[0]
    assert cls.name == 'HelloClass'
    assert cls.inherits == []
    assert cls.has_virtuals
    assert [(m.type, m.name) for m in cls.data] == [
        ('int64_t', 'one'), ('int32_t', 'two'), ('double', 'three'),
    ]
    assert len(cls.constructors) == 2
    assert len(cls.destructors) == 1
    assert len(cls.instance_methods) + len(cls.static_methods) == 3
    assert [m.name for m in cls.static_methods] == ['StaticHello']


def test_method_details(hello_text):
    cls = parse(hello_text).classes[0]
    ctor = cls.constructors[1]
    assert ctor.kind is MethodKind.CONSTRUCTOR
    assert ctor.name is None
    assert ctor.return_type is None
    assert ctor.parameters == ['int64_t', 'int32_t']
    assert ctor.symbols['msvc'] == '??0HelloClass@@QAE@_JH@Z'

    say = cls.methods[4]
    assert say.kind is MethodKind.METHOD
    assert say.name == 'Say'
    assert say.return_type == 'void'
    assert say.parameters == ['const char*']


def test_assembly_directives():
    binding = parse('assembly "first"\nassemblies { second\n third }\nassembly "fourth"')
    assert binding.candidate_libraries == ['first', 'second', 'third', 'fourth']


def test_comments_are_skipped():
    binding = parse('/* block\n comment */ // line\nassembly "x" // trailing\n')
    assert binding.candidate_libraries == ['x']
    assert binding.classes == []


def test_inheritance():
    binding = parse('class A { data { int32_t a; } }\nclass B : A { data { int32_t x; } }')
    assert [c.name for c in binding.classes] == ['A', 'B']
    assert binding.classes[1].inherits == ['A']
    assert binding.classes[0].inherits == []


def test_multiple_bases_and_namespaces():
    binding = parse('class ns::Derived:ns::Base, Other {}')
    cls = binding.classes[0]
    assert cls.name == 'ns::Derived'
    assert cls.inherits == ['ns::Base', 'Other']


def test_data_member_forms():
    binding = parse("""
class Shape {
    data {
        unsigned int flags;
        const char * label;
        float matrix[4][4];
        Shape* next;
    }
}
""")
    assert binding.classes[0].data == [
        ('unsigned int', 'flags'),
        ('const char*', 'label'),
        ('float[4][4]', 'matrix'),
        ('Shape*', 'next'),
    ]


def test_return_type_with_pointer():
    binding = parse('class A { methods { const char *name() { itanium _ZN1A4nameEv; } } }')
    method = binding.classes[0].methods[0]
    assert method.return_type == 'const char*'
    assert method.name == 'name'


def test_static_method_with_parameters():
    binding = parse('class A { methods { static A* create(int32_t, double) { msvc ?create@A@@SAPAV1@HN@Z; } } }')
    method = binding.classes[0].methods[0]
    assert method.kind is MethodKind.STATIC
    assert method.return_type == 'A*'
    assert method.parameters == ['int32_t', 'double']


def test_void_parameter_list_is_empty():
    assert parse_parameters('void') == []
    assert parse_parameters(' int ,  const char  * ') == ['int', 'const char*']


def test_method_without_symbols():
    binding = parse('class A { methods { ~() {} } }')
    assert binding.classes[0].methods[0].symbols == {}


def test_parse_symbols():
    assert parse_symbols(' msvc ?a@@YAXXZ;\n gcc _Z1av ; ') == {'msvc': '?a@@YAXXZ', 'gcc': '_Z1av'}


def test_find_block_end():
    assert find_block_end('{ {} }', 0) == 5
    assert find_block_end('{ {}', 0) is None


def test_braces_in_comments_do_not_close_blocks():
    binding = parse(
        'class A {\n'
        '    // closing } of the vtable comes later\n'
        '    data { int32_t x; /* { */ }\n'
        '    methods {\n'
        '        void f() { gcc _Z1fv; // trailing }\n'
        '        }\n'
        '    }\n'
        '}\n'
        'assembly "after"\n')
    cls = binding.classes[0]
    assert cls.data[0].name == 'x'
    assert cls.methods[0].symbols == {'gcc': '_Z1fv'}
    assert binding.candidate_libraries == ['after']


def test_find_block_end_skips_comments():
    assert find_block_end('{ // }\n}', 0) == 7
    assert find_block_end('{ /* } */ }', 0) == 10


def test_error_reports_line_and_token():
    with pytest.raises(ParseError) as info:
        parse('// header\n\nbogus directive')
    assert info.value.line == 3
    assert info.value.token == 'bogus'


def test_error_on_non_word_token():
    with pytest.raises(ParseError) as info:
        parse('assembly "x"\n$')
    assert info.value.line == 2
    assert info.value.token == '$'


def test_error_inside_methods_block_has_absolute_line():
    text = (
        'class HelloClass {\n'
        '    methods {\n'
        '        !() { msvc A; }\n'
        '        void Broken( { msvc B; }\n'
        '    }\n'
        '}\n'
    )
    with pytest.raises(ParseError) as info:
        parse(text)
    assert info.value.line == 4
    assert info.value.token == 'void'


def test_error_inside_data_block_has_absolute_line():
    text = 'assembly "x"\nclass A {\n\n  data {\n    int32_t a;\n    oops\n  }\n}\n'
    with pytest.raises(ParseError) as info:
        parse(text)
    assert info.value.line == 6
    assert info.value.token == 'oops'


def test_unclosed_methods_block():
    text = (
        'class HelloClass {\n'
        '    has_virtuals;\n'
        '    methods {\n'
        '        !() { msvc A; }\n'
        '}\n'
    )
    with pytest.raises(ParseError) as info:
        parse(text)
    assert info.value.line == 1
    assert info.value.token == 'class'


def test_unknown_class_directive():
    with pytest.raises(ParseError) as info:
        parse('class A {\n  virtuals;\n}')
    assert info.value.line == 2
    assert info.value.token == 'virtuals'


def test_parse_file(tmp_path, hello_text):
    path = tmp_path / 'HelloWorld.ffipp'
    path.write_text(hello_text, encoding='utf-8')
    assert parse_file(path) == parse(hello_text)
