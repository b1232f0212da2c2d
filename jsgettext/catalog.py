import threading
from collections import namedtuple


DEFAULT_DOMAIN = 'default'


_MessageId = namedtuple('MessageId', 'context singular plural')


class MessageId(_MessageId):
    __slots__ = ()

    def __new__(cls, singular, plural=None, context=None):
        return super(MessageId, cls).__new__(cls, context, singular, plural)

    def __getnewargs__(self):
        return (self.singular, self.plural, self.context)

    def sort_key(self):
        # absent context and plural sort before any present value
        return (self.context is not None, self.context or '',
                self.singular,
                self.plural is not None, self.plural or '')


class MessageMeta(object):

    def __init__(self):
        self.references = set()
        self.extracted_comments = set()
        self.translator_comments = set()
        self.flags = set()

    def __repr__(self):
        return '<MessageMeta references={!r}>'.format(sorted(self.references))


class Domain(object):

    def __init__(self, name):
        self.name = name
        self.messages = {}

    def add(self, message_id):
        try:
            return self.messages[message_id]
        except KeyError:
            meta = self.messages[message_id] = MessageMeta()
            return meta

    def sorted_messages(self):
        keys = sorted(self.messages, key=MessageId.sort_key)
        return [(key, self.messages[key]) for key in keys]

    def __len__(self):
        return len(self.messages)


class Catalog(object):
    """Messages of all domains collected during one extraction run.

    Safe to fill from several threads: every modification happens under a
    single lock.
    """

    def __init__(self, default_domain=None):
        self.default_domain = default_domain or DEFAULT_DOMAIN
        self.domains = {}
        self._lock = threading.Lock()

    def _add(self, domain, message_id):
        name = self.default_domain if domain is None else domain
        try:
            entry = self.domains[name]
        except KeyError:
            entry = self.domains[name] = Domain(name)
        return entry.add(message_id)

    def add_message(self, domain, message_id):
        with self._lock:
            return self._add(domain, message_id)

    def record(self, domain, message_id, references=(), comments=()):
        with self._lock:
            meta = self._add(domain, message_id)
            meta.references.update(references)
            meta.extracted_comments.update(comments)
            return meta

    def get(self, name=None):
        return self.domains.get(self.default_domain if name is None else name)

    def __iter__(self):
        return iter([self.domains[name] for name in sorted(self.domains)])
