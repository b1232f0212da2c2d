import pytest

from jsgettext.nodes import Identifier, String, Template, Member, Call
from jsgettext.nodes import TaggedTemplate, Generic, NodeVisitor
from jsgettext.errors import ParseError, LoaderError
from jsgettext.parser import parse, decode_string, decode_template
from jsgettext.loaders import Source, source_kind

from .base import NODE_EQ_PATCHER, make_source, parse_source


class LocationChecker(NodeVisitor):

    def visit(self, node):
        assert node.location
        super(LocationChecker, self).visit(node)


def expression(src, file_path='src/main.js'):
    _, node, _ = parse_source(src, file_path)
    LocationChecker().visit(node)
    statement, = node.children
    assert statement.kind == 'expression_statement'
    expr, = statement.children
    return expr


def check_expression(src, expected):
    with NODE_EQ_PATCHER:
        assert expression(src) == expected


def test_string_escapes():
    assert decode_string(r"it\'s") == "it's"
    assert decode_string(r'a\nb\tc') == 'a\nb\tc'
    assert decode_string(r'\x41B\u{43}') == 'ABC'
    assert decode_string(r'\0') == '\x00'
    assert decode_string(r'\q\"') == 'q"'
    assert decode_string('line \\\ncontinued') == 'line continued'


def test_string_surrogates():
    assert decode_string('\\' + 'ud83d' + '\\' + 'ude00') == '\U0001F600'
    assert decode_string('\\' + 'ud83d') == '\N{REPLACEMENT CHARACTER}'


def test_template_newlines():
    assert decode_template('a\r\nb\rc') == 'a\nb\nc'


def test_source_kind():
    assert source_kind('src/a.js') == 'js'
    assert source_kind('src/a.jsx') == 'jsx'
    assert source_kind('src/a.ts') == 'ts'
    assert source_kind('src/a.tsx') == 'tsx'
    assert source_kind('src/types.d.ts') == 'ts'
    assert source_kind('src/a.mjs') is None
    assert source_kind('src/a.py') is None


def test_lookup_line():
    source = Source.from_string('a\nbc\n\nd')
    assert source.lookup_line(0) == 1
    assert source.lookup_line(1) == 1
    assert source.lookup_line(2) == 2
    assert source.lookup_line(5) == 3
    assert source.lookup_line(6) == 4


def test_call():
    check_expression(
        '__("Hello, world!");',
        Call(Identifier('__'), [String('Hello, world!')]),
    )


def test_member_call():
    check_expression(
        "i18n.__n('%d file', '%d files', count)",
        Call(Member(Identifier('i18n'), Identifier('__n')),
             [String('%d file'), String('%d files'), Identifier('count')]),
    )


def test_computed_member_call():
    check_expression(
        'obj[name]("text")',
        Call(Member(Identifier('obj'), Identifier('name'), computed=True),
             [String('text')]),
    )


def test_template():
    expr = expression('`a${b}c`')
    assert isinstance(expr, Template)
    assert expr.quasis == ('a', 'c')
    sub, = expr.expressions
    with NODE_EQ_PATCHER:
        assert sub == Generic('template_substitution', [Identifier('b')])


def test_tagged_template():
    check_expression(
        '__`Hello`',
        TaggedTemplate(Identifier('__'), Template(['Hello'], [])),
    )


def test_comments_are_not_nodes():
    check_expression(
        '__(/* before */ "Text" /* after */)',
        Call(Identifier('__'), [String('Text')]),
    )


def test_call_location():
    expr = expression('foo(\n  "bar"\n)')
    assert expr.location.start.line == 1
    assert expr.location.start.column == 1
    assert expr.location.end.line == 3


def test_leading_comments():
    source, _, comments = parse_source(
        """
        // one
        /* two */ __("a");
        """
    )
    offset = source.content.index(b'__("a")')
    assert comments.leading(offset) == [' one', ' two ']
    assert comments.trailing(offset) == []


def test_trailing_comments():
    source, _, comments = parse_source(
        """
        __("a") /* one */ // two
        // next
        __("b")
        """
    )
    end = source.content.index(b'__("a")') + len(b'__("a")')
    assert comments.trailing(end) == [' one ', ' two']
    offset = source.content.index(b'__("b")')
    assert comments.leading(offset) == [' next']


class CallsCollector(NodeVisitor):

    def __init__(self):
        self.calls = []

    def visit_call(self, node):
        self.calls.append(node)
        super(CallsCollector, self).visit_call(node)


def collect_calls(src, file_path):
    _, node, _ = parse_source(src, file_path)
    collector = CallsCollector()
    collector.visit(node)
    return collector.calls


def test_typescript():
    call, = collect_calls(
        """
        interface Props { title: string }
        const title: string = __("Typed") as string;
        """,
        'src/app.ts',
    )
    with NODE_EQ_PATCHER:
        assert call == Call(Identifier('__'), [String('Typed')])


def test_typescript_decorator():
    decorator_call, inner_call = collect_calls(
        """
        @Component({ title: __("Title") })
        class App {}
        """,
        'src/app.ts',
    )
    assert decorator_call.callee.name == 'Component'
    with NODE_EQ_PATCHER:
        assert inner_call == Call(Identifier('__'), [String('Title')])


def test_tsx():
    call, = collect_calls(
        """
        const App = (): JSX.Element => <h1 title="x">{__("Hi")}</h1>;
        """,
        'src/app.tsx',
    )
    assert call.args[0].value == 'Hi'


def test_declaration_file():
    assert collect_calls('declare function __(msgid: string): string;',
                         'src/types.d.ts') == []


def test_syntax_error():
    source = make_source('__("a"', 'src/broken.js')
    with pytest.raises(ParseError) as info:
        parse(source)
    assert info.value.path == 'src/broken.js'
    assert info.value.errors.list
    assert 'src/broken.js' in str(info.value)


def test_unsupported_kind():
    source = Source('main.py', b'', None, 'src/main.py')
    with pytest.raises(LoaderError):
        parse(source)


def test_visit_order():
    calls = collect_calls('a(b(c()), d()); e();', 'src/main.js')
    assert [call.callee.name for call in calls] == ['a', 'b', 'c', 'd', 'e']


def test_deep_nesting():
    src = 'f({});'.format('[' * 1000 + ']' * 1000)
    call, = collect_calls(src, 'src/main.js')
    depth = 0
    node = call.args[0]
    while node.children:
        node, = node.children
        depth += 1
    assert depth == 999
