import unittest
from contextlib import contextmanager, ExitStack
from textwrap import dedent
from unittest.mock import patch

from jsgettext.nodes import Node
from jsgettext.parser import parse
from jsgettext.loaders import Source


def _ne(self, other):
    return not self.__eq__(other)


def _node_eq(self, other):
    if type(self) is not type(other):
        return False
    d1 = dict(self.__dict__)
    d1.pop('location', None)
    d2 = dict(other.__dict__)
    d2.pop('location', None)
    return d1 == d2


NODE_EQ_PATCHER = patch.multiple(Node, __eq__=_node_eq, __ne__=_ne)


@contextmanager
def _nested(*managers):
    with ExitStack() as stack:
        for manager in managers:
            stack.enter_context(manager)
        yield


def make_source(src, file_path='src/main.js'):
    return Source.from_string(dedent(src).strip() + '\n', file_path)


def parse_source(src, file_path='src/main.js'):
    source = make_source(src, file_path)
    node, comments = parse(source)
    return source, node, comments


class TestCase(unittest.TestCase):
    ctx = tuple()

    def run(self, result=None):
        with _nested(*self.ctx):
            return super(TestCase, self).run(result)
