"""This module contains general utility code that is used throughout
the library.
"""
from urllib.parse import urlencode

__all__ = ['appendArgs', 'force_text', 'queryPairs']


def appendArgs(url, args):
    """Append query arguments to a HTTP(s) URL. If the URL already has
    query arguments, these arguments will be added, and the existing
    arguments will be preserved. Duplicate arguments will not be
    detected or collapsed (both will appear in the output).

    @param url: The url to which the arguments will be appended
    @type url: str

    @param args: The query arguments to add to the URL. If a
        dictionary is passed, the items will be sorted before
        appending them to the URL. If a sequence of pairs is passed,
        the order of the sequence will be preserved.
    @type args: Union[Dict[str, str], List[Tuple[str, str]]]

    @returns: The URL with the parameters added
    @rtype: str
    """
    if hasattr(args, 'items'):
        args = sorted(args.items())
    else:
        args = list(args)

    if len(args) == 0:
        return url

    if '?' in url:
        sep = '&'
    else:
        sep = '?'

    return '%s%s%s' % (url, sep, urlencode(args))


def queryPairs(query):
    """Flatten a query parameter collection into a list of pairs.

    @param query: Mapping of keys to a value or a list of values, or a
        sequence of (key, value) pairs.

    @rtype: List[Tuple[str, str]]
    """
    if hasattr(query, 'items'):
        items = query.items()
    else:
        items = query

    pairs = []
    for key, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((key, v) for v in value)
        else:
            pairs.append((key, value))
    return pairs


def force_text(value):
    """
    Return a text object representing value in UTF-8 encoding.
    """
    if isinstance(value, str):
        # It's already a text, just return it.
        return value
    elif isinstance(value, bytes):
        # It's a byte string, decode it.
        return value.decode('utf-8')
    else:
        # It's not a string, convert it.
        return str(value)
