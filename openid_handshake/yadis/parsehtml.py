"""Utilities to parse YADIS header from HTML."""
from lxml import etree

from openid_handshake.yadis.constants import YADIS_HEADER_NAME

__all__ = ['findHTMLMeta', 'MetaNotFound', 'HTMLParseError']


class MetaNotFound(Exception):
    """Yadis meta tag not found in the HTML page."""


class HTMLParseError(MetaNotFound):
    """The HTML page can not be parsed."""


def xpath_lower_case(context, values):
    """Return lower cased values in XPath."""
    return [v.lower() for v in values]


# Find YADIS meta tag anywhere in the page, case insensitive to the header name.
# Compiled once, it holds no state.
_yadis_meta = etree.XPath('//meta[lower-case(@http-equiv)="{}"]'.format(YADIS_HEADER_NAME.lower()),
                          extensions={(None, 'lower-case'): xpath_lower_case})


def findHTMLMeta(stream):
    """Look for a meta http-equiv tag with the YADIS header name.

    @param stream: Source of the html text
    @type stream: Readable text or binary I/O file object

    @return: The URI from which to fetch the XRDS document
    @rtype: str

    @raises MetaNotFound: If the page contains no usable yadis meta tag.
    @raises HTMLParseError: If the page can not be parsed.
    """
    parser = etree.HTMLParser()
    try:
        html = etree.parse(stream, parser)
    except (ValueError, etree.XMLSyntaxError) as error:
        raise HTMLParseError("Couldn't parse HTML page: %s" % error) from error

    # Empty input yields a document with no content
    if html.getroot() is None:
        raise MetaNotFound('Empty HTML page.')

    yadis_headers = _yadis_meta(html)
    if not yadis_headers:
        raise MetaNotFound('Yadis meta tag not found.')

    yadis_header = yadis_headers[0]
    yadis_url = yadis_header.get('content')
    if yadis_url is None:
        raise MetaNotFound('Attribute "content" missing in yadis meta tag.')
    return yadis_url
