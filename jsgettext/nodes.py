from json.encoder import encode_basestring_ascii


_undefined = object()


class Node(object):
    location = None

    def __init__(self, location=_undefined):
        if location is not _undefined:
            self.location = location

    def accept(self, visitor):
        raise NotImplementedError


class Identifier(Node):

    def __init__(self, name, **kw):
        self.name = name
        super(Identifier, self).__init__(**kw)

    def __repr__(self):
        return self.name

    def accept(self, visitor):
        return visitor.visit_identifier(self)


class String(Node):

    def __init__(self, value, **kw):
        self.value = value
        super(String, self).__init__(**kw)

    def __repr__(self):
        return encode_basestring_ascii(self.value)

    def accept(self, visitor):
        return visitor.visit_string(self)


class Template(Node):
    """Template literal.

    ``quasis`` holds the literal segments with escapes already decoded,
    ``expressions`` the interpolated nodes between them, so a template
    without interpolation has exactly one segment.
    """

    def __init__(self, quasis, expressions, **kw):
        self.quasis = tuple(quasis)
        self.expressions = tuple(expressions)
        super(Template, self).__init__(**kw)

    def __repr__(self):
        parts = [self.quasis[0]]
        for expr, quasi in zip(self.expressions, self.quasis[1:]):
            parts.append('${{{!r}}}'.format(expr))
            parts.append(quasi)
        return '`{}`'.format(''.join(parts))

    def accept(self, visitor):
        return visitor.visit_template(self)


class Member(Node):

    def __init__(self, object, property, computed=False, **kw):
        self.object = object
        self.property = property
        self.computed = computed
        super(Member, self).__init__(**kw)

    def __repr__(self):
        if self.computed:
            return '{!r}[{!r}]'.format(self.object, self.property)
        return '{!r}.{!r}'.format(self.object, self.property)

    def accept(self, visitor):
        return visitor.visit_member(self)


class Call(Node):

    def __init__(self, callee, args, **kw):
        self.callee = callee
        self.args = tuple(args)
        super(Call, self).__init__(**kw)

    def __repr__(self):
        return '{!r}({})'.format(self.callee,
                                 ', '.join(map(repr, self.args)))

    def accept(self, visitor):
        return visitor.visit_call(self)


class TaggedTemplate(Node):

    def __init__(self, tag, template, **kw):
        self.tag = tag
        self.template = template
        super(TaggedTemplate, self).__init__(**kw)

    def __repr__(self):
        return '{!r}{!r}'.format(self.tag, self.template)

    def accept(self, visitor):
        return visitor.visit_tagged_template(self)


class Decorator(Node):

    def __init__(self, expression, **kw):
        self.expression = expression
        super(Decorator, self).__init__(**kw)

    def __repr__(self):
        return '@{!r}'.format(self.expression)

    def accept(self, visitor):
        return visitor.visit_decorator(self)


class ExpressionContainer(Node):

    def __init__(self, expression, **kw):
        self.expression = expression
        super(ExpressionContainer, self).__init__(**kw)

    def __repr__(self):
        if self.expression is None:
            return '{}'
        return '{{{!r}}}'.format(self.expression)

    def accept(self, visitor):
        return visitor.visit_expression_container(self)


class Generic(Node):

    def __init__(self, kind, children, **kw):
        self.kind = kind
        self.children = tuple(children)
        super(Generic, self).__init__(**kw)

    def __repr__(self):
        return '<{} {}>'.format(self.kind, ' '.join(map(repr, self.children)))

    def accept(self, visitor):
        return visitor.visit_generic(self)


class NodeVisitor(object):
    """Walks the tree with an explicit stack.

    ``visit`` called from inside a ``visit_*`` method schedules the node,
    scheduled children are visited in source order after the current node
    returns.
    """
    _scheduled = None

    def visit(self, node):
        if self._scheduled is not None:
            self._scheduled.append(node)
            return
        stack = [node]
        try:
            while stack:
                self._scheduled = []
                stack.pop().accept(self)
                stack.extend(reversed(self._scheduled))
        finally:
            self._scheduled = None

    def visit_identifier(self, node):
        pass

    def visit_string(self, node):
        pass

    def visit_template(self, node):
        for expr in node.expressions:
            self.visit(expr)

    def visit_member(self, node):
        self.visit(node.object)
        if node.computed:
            self.visit(node.property)

    def visit_call(self, node):
        self.visit(node.callee)
        for arg in node.args:
            self.visit(arg)

    def visit_tagged_template(self, node):
        self.visit(node.tag)
        self.visit(node.template)

    def visit_decorator(self, node):
        self.visit(node.expression)

    def visit_expression_container(self, node):
        if node.expression is not None:
            self.visit(node.expression)

    def visit_generic(self, node):
        for child in node.children:
            self.visit(child)
