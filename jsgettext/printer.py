MAX_LINE_LENGTH = 80

HEADER = (
    'msgid ""',
    'msgstr ""',
    '"Content-Type: text/plain; charset=utf-8\\n"',
    '"Plural-Forms: nplurals=2; plural=(n != 1);\\n"',
)

TRANSLATOR_COMMENT = ' '
EXTRACTED_COMMENT = '.'
REFERENCE = ':'
FLAG = ','


def escape(text):
    return (text.replace('"', '\\"')
            .replace('\r\n', ' ')
            .replace('\r', ' ')
            .replace('\n', ' '))


def format_message(key, text):
    """Formats ``key "text"`` pair, long values are split into several
    quoted lines of at most 80 columns each"""
    text = escape(text)
    if len(key) + len(text) + 3 <= MAX_LINE_LENGTH:
        return '{} "{}"'.format(key, text)

    lines = ['{} ""'.format(key)]
    line = ''
    for word in text.split(' '):
        # two quotes and a trailing space
        if len(line) + len(word) + 1 > MAX_LINE_LENGTH - 3:
            lines.append('"{}"'.format(line))
            line = ''
        line += word + ' '
    lines.append('"{}"'.format(line[:-1]))
    return '\n'.join(lines)


def format_comment(prefix, text):
    line_prefix = '#{} '.format(prefix)
    if (len(line_prefix) + len(text) <= MAX_LINE_LENGTH and
            '\n' not in text and '\r' not in text):
        return line_prefix + text

    lines = []
    line = line_prefix
    for word in text.split():
        if line != line_prefix and \
                len(line) + len(word) + 1 > MAX_LINE_LENGTH:
            lines.append(line.rstrip())
            line = line_prefix
        line += word + ' '
    # the last line keeps the space after its final word
    lines.append(line if line != line_prefix else line.rstrip())
    return '\n'.join(lines)


class Printer(object):

    def __init__(self):
        self._buffer = list(HEADER)

    @classmethod
    def dumps(cls, domain):
        printer = cls()
        for message_id, meta in domain.sorted_messages():
            printer._newline()
            printer.print_meta(meta)
            printer.print_message(message_id)
        return '\n'.join(printer._buffer) + '\n'

    def _newline(self):
        self._buffer.append('')

    def _print(self, line):
        self._buffer.append(line)

    def print_meta(self, meta):
        for comment in sorted(meta.translator_comments):
            self._print(format_comment(TRANSLATOR_COMMENT, comment))
        for comment in sorted(meta.extracted_comments):
            self._print(format_comment(EXTRACTED_COMMENT, comment))
        # references are never wrapped
        for reference in sorted(meta.references):
            self._print('#{} {}'.format(REFERENCE, reference))
        for flag in sorted(meta.flags):
            self._print(format_comment(FLAG, flag))

    def print_message(self, message_id):
        if message_id.context is not None:
            self._print(format_message('msgctxt', message_id.context))
        self._print(format_message('msgid', message_id.singular))
        if message_id.plural is not None:
            self._print(format_message('msgid_plural', message_id.plural))
            self._print('msgstr[0] ""')
            self._print('msgstr[1] ""')
        else:
            self._print('msgstr ""')
