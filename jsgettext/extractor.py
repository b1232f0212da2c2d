import os.path

from .calls import recognize, DOMAIN, CONTEXT, MSGID, PLURAL
from .nodes import NodeVisitor, Identifier, String, Template, Member
from .catalog import MessageId


def extract_static_string(node):
    """Returns value of a string literal or of a template literal without
    interpolation, None for everything else"""
    if isinstance(node, String):
        return node.value
    elif isinstance(node, Template) and not node.expressions:
        quasi, = node.quasis
        return quasi
    return None


def callee_name(node):
    if isinstance(node, Identifier):
        return node.name
    elif isinstance(node, Member) and not node.computed:
        return node.property.name
    return None


def reference_path(path, relative_to=None):
    if relative_to is None:
        return path
    try:
        return os.path.relpath(path, relative_to)
    except ValueError:
        return path


class Extractor(NodeVisitor):

    def __init__(self, catalog, source, comments, relative_to=None):
        self._catalog = catalog
        self._source = source
        self._comments = comments
        self._path = reference_path(source.file_path, relative_to)
        self.count = 0

    @classmethod
    def extract(cls, node, catalog, source, comments, relative_to=None):
        self = cls(catalog, source, comments, relative_to=relative_to)
        self.visit(node)
        return self.count

    def _add(self, node, roles, args):
        if len(args) < len(roles):
            return
        values = {}
        for role, arg in zip(roles, args):
            value = extract_static_string(arg)
            if value is None:
                return
            values[role] = value

        message_id = MessageId(values[MSGID], plural=values.get(PLURAL),
                               context=values.get(CONTEXT))
        start, end = node.location
        line = self._source.lookup_line(start.offset)
        comments = [c.strip() for c in
                    self._comments.leading(start.offset) +
                    self._comments.trailing(end.offset)]
        comments = [c for c in comments if c]
        self._catalog.record(values.get(DOMAIN), message_id,
                             references=['{}:{}'.format(self._path, line)],
                             comments=comments)
        self.count += 1

    def visit_call(self, node):
        roles = recognize(callee_name(node.callee))
        if roles is not None:
            self._add(node, roles, node.args)
        super(Extractor, self).visit_call(node)

    def visit_tagged_template(self, node):
        if isinstance(node.tag, Identifier):
            roles = recognize(node.tag.name, tagged=True)
            if roles is not None:
                self._add(node, roles, [node.template])
        super(Extractor, self).visit_tagged_template(node)
