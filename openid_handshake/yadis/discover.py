"""Yadis discovery of a XRDS document.

The document is requested by content negotiation. If the response is not
a XRDS document, the discovery follows the location given either in the
C{X-XRDS-Location} header or in the equivalent HTML meta tag.
"""
import logging
import time
from io import BytesIO
from urllib.parse import urljoin

from openid_handshake import fetchers
from openid_handshake.errors import DiscoveryFailure, DiscoveryLoopExceeded, TransportError
from openid_handshake.yadis.constants import YADIS_ACCEPT_HEADER, YADIS_CONTENT_TYPE, YADIS_HEADER_NAME
from openid_handshake.yadis.parsehtml import HTMLParseError, MetaNotFound, findHTMLMeta

__all__ = ['discover', 'DiscoveryResult', 'MAX_REDIRECTS', 'ALLOWED_TIME']

_LOGGER = logging.getLogger(__name__)

# Maximal number of Yadis redirections followed
MAX_REDIRECTS = 5
# Seconds allowed for the whole discovery
ALLOWED_TIME = 20


class DiscoveryResult(object):
    """Contains the result of performing Yadis discovery on a URI

    @ivar request_uri: The URI from which discovery started.
    @ivar xrds_uri: The URI requested in the last step.
    @ivar normalized_uri: The URI of the XRDS document, after HTTP redirects.
    @ivar content_type: The content type of the XRDS document.
    @ivar response_text: The XRDS document.
    @type response_text: bytes
    @ivar hops: Number of Yadis redirections followed.
    """

    def __init__(self, request_uri):
        self.request_uri = request_uri
        self.xrds_uri = None
        self.normalized_uri = None
        self.content_type = None
        self.response_text = None
        self.hops = 0

    def __repr__(self):
        return '<%s %s from %s>' % (self.__class__.__name__, self.normalized_uri, self.request_uri)


def _nextLocation(resp):
    """Classify the response.

    @return: C{None} if the response is a XRDS document, URI of the next
        step otherwise.
    @raises DiscoveryFailure: If there is no further step.
    """
    content_type = resp.headers.get('content-type', '').lower()
    if content_type.startswith(YADIS_CONTENT_TYPE):
        return None

    location = resp.headers.get(YADIS_HEADER_NAME)
    if location:
        return urljoin(resp.final_url, location)

    if content_type.startswith('text/html'):
        try:
            location = findHTMLMeta(BytesIO(resp.body or b''))
        except HTMLParseError as error:
            raise DiscoveryFailure(str(error), resp) from error
        except MetaNotFound as error:
            _LOGGER.debug('No Yadis location in HTML from %s: %s', resp.final_url, error)
        else:
            if location:
                return urljoin(resp.final_url, location)

    raise DiscoveryFailure('Could not locate Yadis document!', resp)


def discover(uri, fetcher=None, max_redirects=MAX_REDIRECTS, allowed_time=ALLOWED_TIME):
    """Discover the XRDS document for a URI.

    @param uri: normalized identity URL
    @type uri: str

    @param fetcher: Fetcher to use, default fetcher if C{None}.
    @type fetcher: L{openid_handshake.fetchers.HTTPFetcher}

    @param max_redirects: Number of Yadis redirections allowed.
    @param allowed_time: Seconds allowed for the whole chain of requests.

    @rtype: L{DiscoveryResult}

    @raises TransportError: When a request fails.
    @raises DiscoveryLoopExceeded: When the redirections loop or exceed the limit.
    @raises DiscoveryFailure: When no XRDS document is located.
    """
    fetcher = fetchers.wrapFetcher(fetcher)
    result = DiscoveryResult(uri)
    stop = time.monotonic() + allowed_time
    visited = set()
    current = uri

    while True:
        off = stop - time.monotonic()
        if off <= 0:
            raise DiscoveryFailure('Timed out discovering %r' % (uri,))

        visited.add(current)
        _LOGGER.debug('Yadis discovery of %s, step %d: fetching %s', uri, result.hops, current)
        try:
            resp = fetcher.fetch(current, headers={'Accept': YADIS_ACCEPT_HEADER}, timeout=off)
        except fetchers.HTTPFetchingError as error:
            raise TransportError(current, error.why) from error

        if resp.status != 200:
            raise DiscoveryFailure(
                'HTTP Response status from identity URL host is not 200. '
                'Got status %r' % (resp.status,), resp)

        location = _nextLocation(resp)
        if location is None:
            result.xrds_uri = current
            result.normalized_uri = resp.final_url or current
            result.content_type = resp.headers.get('content-type')
            result.response_text = resp.body
            _LOGGER.debug('Yadis document for %s found at %s', uri, result.normalized_uri)
            return result

        if location in visited:
            raise DiscoveryLoopExceeded('Yadis redirection loop at %r' % (location,), resp)
        if result.hops >= max_redirects:
            raise DiscoveryLoopExceeded('More than %d Yadis redirections from %r' % (max_redirects, uri), resp)
        result.hops += 1
        current = location
