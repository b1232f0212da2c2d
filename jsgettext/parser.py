import re
from collections import namedtuple, defaultdict

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

from .nodes import Identifier, String, Template, Member, Call, TaggedTemplate
from .nodes import Decorator, ExpressionContainer, Generic
from .errors import Errors, LoaderError, ParseError


JAVASCRIPT = Language(tree_sitter_javascript.language())
TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())
TSX = Language(tree_sitter_typescript.language_tsx())

# the javascript grammar always accepts JSX
LANGUAGES = {
    'js': JAVASCRIPT,
    'jsx': JAVASCRIPT,
    'ts': TYPESCRIPT,
    'tsx': TSX,
}

COMMENT_TYPES = frozenset(['comment', 'html_comment'])

_WHITESPACE = frozenset(b' \t\r\n\x0b\x0c')
_BLANK = frozenset(b' \t\x0b\x0c')
_NEWLINES = frozenset(b'\r\n')


Position = namedtuple('Position', 'offset line column')

Location = namedtuple('Location', 'start end')

Comment = namedtuple('Comment', 'start end text')

ParseResult = namedtuple('ParseResult', 'node comments')


_ESCAPE_RE = re.compile(r'\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}'
                        r'|[0-3][0-7]{0,2}|[4-7][0-7]?|\r\n|[\s\S])')

_SURROGATE_RE = re.compile('[\ud800-\udfff]')

_SIMPLE_ESCAPES = {
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
    # line continuations
    '\r\n': '',
    '\n': '',
    '\r': '',
    '\u2028': '',
    '\u2029': '',
}


def _replace_escape(match):
    value = match.group(1)
    if value in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[value]
    elif value[0] == 'u':
        code = int(value.strip('u{}'), 16)
    elif value[0] == 'x':
        code = int(value[1:], 16)
    elif value[0] in '01234567':
        code = int(value, 8)
    else:
        return value
    try:
        return chr(code)
    except ValueError:
        return '\ufffd'


def decode_string(raw):
    """Resolves JavaScript escape sequences in the body of a string literal.

    Escaped surrogate pairs (``"\\ud83d\\ude00"``) are joined into a single
    character, lone surrogates are replaced with U+FFFD.
    """
    value = _ESCAPE_RE.sub(_replace_escape, raw)
    if _SURROGATE_RE.search(value):
        value = (value.encode('utf-16', 'surrogatepass')
                 .decode('utf-16', 'replace'))
    return value


def decode_template(raw):
    return decode_string(raw.replace('\r\n', '\n').replace('\r', '\n'))


def _strip_delimiters(text):
    if text.startswith('//'):
        return text[2:]
    elif text.startswith('/*') and text.endswith('*/'):
        return text[2:-2]
    elif text.startswith('<!--'):
        return text[4:]
    return text


class Comments(object):
    """Comments of a source file keyed by the byte offset they belong to.

    A comment that starts on the line of the preceding token and is followed
    by a line break trails that token, it belongs to the token's end offset.
    Any other comment leads the next token and belongs to its start offset.
    Runs of adjacent comments are attached together.
    """

    def __init__(self, content, comments):
        self._leading = defaultdict(list)
        self._trailing = defaultdict(list)
        comments = sorted(comments)
        by_start = {c.start: c for c in comments}
        by_end = {c.end: c for c in comments}

        targets, line_breaks = {}, {}
        for comment in reversed(comments):
            pos = comment.end
            while pos < len(content) and content[pos] in _WHITESPACE:
                pos += 1
            gap = content[comment.end:pos]
            line_break = (pos >= len(content) or
                          any(b in _NEWLINES for b in gap))
            following = by_start.get(pos)
            if following is not None:
                targets[comment.start] = targets[following.start]
                line_break = line_break or line_breaks[following.start]
            else:
                targets[comment.start] = pos
            line_breaks[comment.start] = line_break

        anchors = {}
        for comment in comments:
            pos = comment.start
            while pos > 0 and content[pos - 1] in _BLANK:
                pos -= 1
            preceding = by_end.get(pos)
            if preceding is not None:
                anchor = anchors[preceding.start]
            elif pos == 0 or content[pos - 1] in _NEWLINES:
                anchor = None
            else:
                anchor = pos
            anchors[comment.start] = anchor

            if anchor is not None and line_breaks[comment.start]:
                self._trailing[anchor].append(comment.text)
            else:
                self._leading[targets[comment.start]].append(comment.text)

    def leading(self, offset):
        return list(self._leading.get(offset, ()))

    def trailing(self, offset):
        return list(self._trailing.get(offset, ()))


def _location(ts_node):
    start_row, start_column = ts_node.start_point
    end_row, end_column = ts_node.end_point
    return Location(Position(ts_node.start_byte, start_row + 1,
                             start_column + 1),
                    Position(ts_node.end_byte, end_row + 1, end_column + 1))


def _iter_nodes(root):
    stack = [root]
    while stack:
        ts_node = stack.pop()
        yield ts_node
        stack.extend(reversed(ts_node.children))


def _iter_errors(root):
    stack = [root]
    while stack:
        ts_node = stack.pop()
        if ts_node.is_error:
            yield ts_node, 'Syntax error'
        elif ts_node.is_missing:
            yield ts_node, 'Missing {!r}'.format(ts_node.type)
        else:
            stack.extend(child for child in reversed(ts_node.children)
                         if child.has_error or child.is_missing)


class _Converted(object):
    """Converted named children of a syntax node, in source order."""

    def __init__(self, ts_nodes, nodes):
        self.nodes = nodes
        self._by_id = {ts_node.id: node
                       for ts_node, node in zip(ts_nodes, nodes)}

    def __getitem__(self, ts_node):
        node = self._by_id.get(ts_node.id)
        if node is None:
            # anonymous tokens are never converted
            node = Generic(ts_node.type, [], location=_location(ts_node))
        return node


class Converter(object):
    """Turns a tree-sitter syntax tree into the closed node tree.

    Nodes are converted bottom-up with an explicit stack, so the depth of
    the tree is not limited by the interpreter's recursion limit.
    """

    def __init__(self, content):
        self._content = content

    def _text(self, start, end):
        return self._content[start:end].decode('utf-8')

    def _named(self, ts_node):
        return [child for child in ts_node.named_children
                if child.type not in COMMENT_TYPES]

    def convert(self, root):
        results = []
        stack = [(root, None)]
        while stack:
            ts_node, named = stack.pop()
            if named is None:
                named = self._named(ts_node)
                stack.append((ts_node, named))
                stack.extend((child, None) for child in reversed(named))
            else:
                pos = len(results) - len(named)
                children = _Converted(named, results[pos:])
                del results[pos:]
                results.append(self._convert_node(ts_node, children))
        node, = results
        return node

    def _convert_node(self, ts_node, children):
        method = getattr(self, 'convert_{}'.format(ts_node.type), None)
        if method is not None:
            node = method(ts_node, children)
            if node is not None:
                return node
        return Generic(ts_node.type, children.nodes,
                       location=_location(ts_node))

    def convert_identifier(self, ts_node, children):
        return Identifier(self._text(ts_node.start_byte, ts_node.end_byte),
                          location=_location(ts_node))

    def convert_string(self, ts_node, children):
        raw = self._text(ts_node.start_byte + 1, ts_node.end_byte - 1)
        return String(decode_string(raw), location=_location(ts_node))

    def convert_template_string(self, ts_node, children):
        quasis, expressions = [], []
        start = ts_node.start_byte + 1
        for child in ts_node.named_children:
            if child.type == 'template_substitution':
                quasis.append(decode_template(self._text(start,
                                                         child.start_byte)))
                expressions.append(children[child])
                start = child.end_byte
        quasis.append(decode_template(self._text(start,
                                                 ts_node.end_byte - 1)))
        return Template(quasis, expressions, location=_location(ts_node))

    def convert_member_expression(self, ts_node, children):
        obj = ts_node.child_by_field_name('object')
        prop = ts_node.child_by_field_name('property')
        if obj is None or prop is None:
            return None
        name = Identifier(self._text(prop.start_byte, prop.end_byte),
                          location=_location(prop))
        return Member(children[obj], name, location=_location(ts_node))

    def convert_subscript_expression(self, ts_node, children):
        obj = ts_node.child_by_field_name('object')
        index = ts_node.child_by_field_name('index')
        if obj is None or index is None:
            return None
        return Member(children[obj], children[index], computed=True,
                      location=_location(ts_node))

    def convert_call_expression(self, ts_node, children):
        func = ts_node.child_by_field_name('function')
        args = ts_node.child_by_field_name('arguments')
        if func is None or args is None:
            return None
        if args.type == 'template_string':
            return TaggedTemplate(children[func], children[args],
                                  location=_location(ts_node))
        return Call(children[func], children[args].children,
                    location=_location(ts_node))

    def convert_decorator(self, ts_node, children):
        if len(children.nodes) != 1:
            return None
        return Decorator(children.nodes[0], location=_location(ts_node))

    def convert_jsx_expression(self, ts_node, children):
        if len(children.nodes) > 1:
            return None
        expression = children.nodes[0] if children.nodes else None
        return ExpressionContainer(expression, location=_location(ts_node))


def parse(source, errors=None):
    """Parses a source file into a node tree and a table of its comments.

    Raises :class:`ParseError` when the file contains syntax errors, the
    tree of a broken file is never returned.
    """
    errors = Errors() if errors is None else errors
    try:
        language = LANGUAGES[source.kind]
    except KeyError:
        raise LoaderError('Unsupported source kind {!r}: {}'
                          .format(source.kind, source.file_path))

    tree = Parser(language).parse(source.content)
    root = tree.root_node
    if root.has_error:
        with errors.file_ctx(source.file_path):
            for ts_node, message in _iter_errors(root):
                errors.error(_location(ts_node), message)
        raise ParseError(source.file_path, errors)

    comments = []
    for ts_node in _iter_nodes(root):
        if ts_node.type in COMMENT_TYPES:
            text = source.content[ts_node.start_byte:ts_node.end_byte]
            comments.append(Comment(ts_node.start_byte, ts_node.end_byte,
                                    _strip_delimiters(text.decode('utf-8'))))

    node = Converter(source.content).convert(root)
    return ParseResult(node, Comments(source.content, comments))
