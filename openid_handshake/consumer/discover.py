"""Functions to discover the OpenID provider endpoint of an identifier."""
import logging

from openid_handshake.constants import IDENTIFIER_SELECT
from openid_handshake.errors import EmptyIdentifier, NoEndpointDiscovered
from openid_handshake.fetchers import HTTPResponse
from openid_handshake.yadis import xri
from openid_handshake.yadis.discover import ALLOWED_TIME, MAX_REDIRECTS
from openid_handshake.yadis.discover import discover as yadisDiscover
from openid_handshake.yadis.xrds import extractIdentifiers

__all__ = ['OpenIDServiceEndpoint', 'normalizeIdentifier', 'discover']

_LOGGER = logging.getLogger(__name__)


class OpenIDServiceEndpoint(object):
    """Object representing an OpenID service endpoint.

    @ivar server_url: the OpenID provider endpoint
    @ivar claimed_id: the claimed identifier, empty if the identifier
        is to be selected at the provider.
    """

    def __init__(self, server_url='', claimed_id=''):
        self.server_url = server_url
        self.claimed_id = claimed_id

    def isIdentifierSelect(self):
        return not self.claimed_id

    def getClaimedID(self):
        """Return the identifier sent as C{openid.claimed_id}."""
        if self.isIdentifierSelect():
            return IDENTIFIER_SELECT
        return self.claimed_id

    def __eq__(self, other):
        return (type(self) == type(other) and self.server_url == other.server_url
                and self.claimed_id == other.claimed_id)

    def __ne__(self, other):
        return not (self == other)

    def __repr__(self):
        return '<%s server_url=%r claimed_id=%r>' % (self.__class__.__name__, self.server_url, self.claimed_id)


def normalizeIdentifier(identifier):
    """Normalize the user supplied identifier to a URL which can be fetched.

    XRIs are turned into URLs of the XRI proxy resolver, URLs get
    the C{http} scheme if they have none. The fragment is removed.

    @type identifier: str
    @rtype: str
    @raises EmptyIdentifier: If the identifier is empty.
    """
    identifier = xri.stripXRIScheme(identifier)
    if not identifier:
        raise EmptyIdentifier()

    if identifier[0] in xri.XRI_AUTHORITIES:
        identifier = xri.toProxyURL(identifier)
    elif not (identifier.startswith('http://') or identifier.startswith('https://')):
        identifier = 'http://' + identifier

    return identifier.split('#', 1)[0]


def discover(identifier, fetcher=None, max_redirects=MAX_REDIRECTS, allowed_time=ALLOWED_TIME):
    """Discover the OpenID provider endpoint for an identifier.

    @param identifier: The identifier supplied by the user.
    @type identifier: str

    @rtype: L{OpenIDServiceEndpoint}

    @raises EmptyIdentifier: If the identifier is empty.
    @raises openid_handshake.errors.TransportError: If a request fails.
    @raises openid_handshake.errors.DiscoveryFailure: If the XRDS document
        is not found or lists no provider endpoint.
    """
    uri = normalizeIdentifier(identifier)
    result = yadisDiscover(uri, fetcher=fetcher, max_redirects=max_redirects, allowed_time=allowed_time)
    server_url, claimed_id = extractIdentifiers(result.response_text)
    if not server_url:
        # Keep the XRDS document for diagnostics
        response = HTTPResponse(result.normalized_uri, 200, {'Content-Type': result.content_type},
                                result.response_text)
        raise NoEndpointDiscovered(http_response=response)

    _LOGGER.debug('Discovered provider %s for %s, claimed identifier %r', server_url, uri, claimed_id)
    return OpenIDServiceEndpoint(server_url, claimed_id)
