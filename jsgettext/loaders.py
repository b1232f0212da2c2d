import os
import codecs
import logging
from bisect import bisect_right

from .errors import LoaderError


log = logging.getLogger(__name__)

EXTENSIONS = {
    '.ts': 'ts',
    '.tsx': 'tsx',
    '.js': 'js',
    '.jsx': 'jsx',
}

DECLARATION_SUFFIX = '.d.ts'


def source_kind(path):
    """Returns parser kind for a file name, or None for unsupported files.

    Declaration files (``*.d.ts``) have no mode of their own, the regular
    TypeScript grammar parses them.
    """
    if path.endswith(DECLARATION_SUFFIX):
        return 'ts'
    _, ext = os.path.splitext(path)
    return EXTENSIONS.get(ext)


class Source(object):

    def __init__(self, name, content, kind, file_path):
        self.name = name
        self.content = content
        self.kind = kind
        self.file_path = file_path
        self._line_starts = None

    @classmethod
    def from_string(cls, text, file_path='<memory>.js', kind=None):
        kind = kind or source_kind(file_path)
        return cls(os.path.basename(file_path), text.encode('utf-8'), kind,
                   file_path)

    def lookup_line(self, offset):
        """Returns 1-based line number of the byte at ``offset``"""
        if self._line_starts is None:
            starts = [0]
            pos = self.content.find(b'\n')
            while pos != -1:
                starts.append(pos + 1)
                pos = self.content.find(b'\n', pos + 1)
            self._line_starts = starts
        return bisect_right(self._line_starts, offset)


class FileSystemLoader(object):
    _encoding = 'utf-8'

    def load(self, file_path):
        kind = source_kind(file_path)
        if kind is None:
            raise LoaderError('Unsupported file type: {}'.format(file_path))
        try:
            with open(file_path, 'rb') as f:
                content = f.read()
        except (IOError, OSError) as e:
            raise LoaderError('Failed to read {}: {}'.format(file_path, e))
        if content.startswith(codecs.BOM_UTF8):
            content = content[len(codecs.BOM_UTF8):]
        try:
            content.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise LoaderError('Failed to decode {}: {}'.format(file_path, e))
        return Source(os.path.basename(file_path), content, kind, file_path)


def _is_excluded(path, exclude):
    return any(item in path for item in exclude)


def find_sources(path, exclude=()):
    """Yields paths of supported source files under ``path``.

    Files are skipped when their path below ``path``, with a leading
    separator, contains any of the ``exclude`` substrings, so the location
    of the project itself never excludes anything. Directories are walked
    in sorted order.
    """
    try:
        os.listdir(path)
    except OSError as e:
        raise LoaderError('Failed to read directory {}: {}'.format(path, e))

    def onerror(error):
        log.warning('Skipping unreadable directory %s: %s',
                    error.filename, error.strerror)

    for dir_path, dir_names, file_names in os.walk(path, onerror=onerror):
        dir_names.sort()
        for file_name in sorted(file_names):
            file_path = os.path.join(dir_path, file_name)
            relative = os.sep + os.path.relpath(file_path, path)
            if _is_excluded(relative, exclude):
                continue
            if source_kind(file_name) is None:
                continue
            if not os.path.isfile(file_path):
                continue
            yield file_path
