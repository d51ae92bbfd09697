"""Parsing of the key-value form used in direct responses."""
import logging

from .oidutil import force_text

__all__ = ['KVFormError', 'kvToSeq', 'kvToDict']


_LOGGER = logging.getLogger(__name__)


class KVFormError(ValueError):
    pass


def kvToSeq(data, strict=False):
    """
    Parse newline-terminated key:value pair string into a sequence.

    Each line is split on its first colon only. Lines without a colon
    are ignored, unless C{strict} is set.

    @type data: Union[str, bytes]

    @rtype: List[Tuple[str, str]]

    @raises KVFormError: In strict mode, for any malformed input.
    """
    def err(msg):
        formatted = 'kvToSeq warning: %s: %r' % (msg, data)
        if strict:
            raise KVFormError(formatted)
        else:
            _LOGGER.debug(formatted)

    data = force_text(data)

    lines = data.split('\n')
    if lines[-1]:
        err('Does not end in a newline')
    else:
        del lines[-1]

    pairs = []
    line_num = 0
    for line in lines:
        line_num += 1

        # Ignore blank lines
        if not line.strip():
            continue

        pair = line.split(':', 1)
        if len(pair) == 2:
            k, v = pair
            k_s = k.strip()
            if k_s != k:
                fmt = ('In line %d, ignoring leading or trailing '
                       'whitespace in key %r')
                err(fmt % (line_num, k))

            if not k_s:
                err('In line %d, got empty key' % (line_num,))

            v_s = v.strip()
            if v_s != v:
                fmt = ('In line %d, ignoring leading or trailing '
                       'whitespace in value %r')
                err(fmt % (line_num, v))

            pairs.append((k_s, v_s))
        else:
            err('Line %d does not contain a colon' % line_num)

    return pairs


def kvToDict(s, strict=False):
    """Parse key-value form into a dictionary. Later keys override earlier ones."""
    return dict(kvToSeq(s, strict=strict))
