DOMAIN = 'domain'
CONTEXT = 'context'
MSGID = 'msgid'
PLURAL = 'plural'


SINGULAR = (MSGID,)
SINGULAR_PLURAL = (MSGID, PLURAL)
CONTEXT_SINGULAR = (CONTEXT, MSGID)
CONTEXT_SINGULAR_PLURAL = (CONTEXT, MSGID, PLURAL)
DOMAIN_SINGULAR = (DOMAIN, MSGID)
DOMAIN_SINGULAR_PLURAL = (DOMAIN, MSGID, PLURAL)
DOMAIN_CONTEXT_SINGULAR = (DOMAIN, CONTEXT, MSGID)
DOMAIN_CONTEXT_SINGULAR_PLURAL = (DOMAIN, CONTEXT, MSGID, PLURAL)


# name -> positional argument roles
CALLS = {
    '__': SINGULAR,
    'gettext': SINGULAR,
    '__n': SINGULAR_PLURAL,
    'ngettext': SINGULAR_PLURAL,
    '__p': CONTEXT_SINGULAR,
    'pgettext': CONTEXT_SINGULAR,
    '__np': CONTEXT_SINGULAR_PLURAL,
    'npgettext': CONTEXT_SINGULAR_PLURAL,
    '__d': DOMAIN_SINGULAR,
    'dgettext': DOMAIN_SINGULAR,
    '__dn': DOMAIN_SINGULAR_PLURAL,
    'dngettext': DOMAIN_SINGULAR_PLURAL,
    '__dp': DOMAIN_CONTEXT_SINGULAR,
    'dpgettext': DOMAIN_CONTEXT_SINGULAR,
    '__dnp': DOMAIN_CONTEXT_SINGULAR_PLURAL,
    'dnpgettext': DOMAIN_CONTEXT_SINGULAR_PLURAL,
}

TAGGED_CALLS = {
    '__': SINGULAR,
}


def recognize(name, tagged=False):
    """Returns argument roles of a translation function, None for others"""
    table = TAGGED_CALLS if tagged else CALLS
    return table.get(name)
