from contextlib import contextmanager
from collections import namedtuple


Error = namedtuple('Error', ['file', 'location', 'message'])


class UserError(Exception):
    pass


class LoaderError(UserError):
    pass


class OutputError(UserError):
    pass


class ParseError(UserError):

    def __init__(self, path, errors):
        self.path = path
        self.errors = errors
        super(ParseError, self).__init__(path)

    def __str__(self):
        lines = ['Failed to parse {}'.format(self.path)]
        for error in self.errors.list:
            start = error.location.start
            lines.append('{}:{}:{}: {}'.format(error.file, start.line,
                                               start.column, error.message))
        return '\n'.join(lines)


class Errors(object):

    def __init__(self):
        self.list = []
        self._stack = [None]

    @contextmanager
    def file_ctx(self, path):
        self._stack.append(path)
        try:
            yield
        finally:
            self._stack.pop()

    def error(self, location, message):
        self.list.append(Error(self._stack[-1], location, message))

    def __bool__(self):
        return bool(self.list)
