"""OpenID 2.0 relying party.

OVERVIEW
========

The handshake has two steps, each with its own entry point.

  1. The user enters an identifier.  C{L{Consumer.begin}} discovers the
     OpenID provider of the identifier and returns the URL to which the
     user is redirected to authenticate::

        consumer = Consumer()
        url = consumer.begin('example.com/user', 'http://rp.example.com', '/openid/return')

  2. The provider sends the user back to the return URL with an
     assertion in the query.  C{L{Consumer.complete}} verifies the
     assertion directly with the provider::

        granted, claimed_id = consumer.complete(request.GET)

     A successful return always contains a definitive answer, any
     failure is raised as a subclass of
     C{L{openid_handshake.errors.OpenIDError}}.

The module functions C{L{redirectURL}} and C{L{validate}} are shortcuts
using a consumer with the default settings.
"""
import logging
from collections import namedtuple
from urllib.parse import urlencode

from openid_handshake import fetchers
from openid_handshake.constants import IDENTIFIER_SELECT, OPENID2_NS
from openid_handshake.consumer.discover import discover
from openid_handshake.errors import DifferingEndpoint, IncorrectMode, NamespaceMismatch, NoOpEndpoint, TransportError
from openid_handshake.kvform import kvToDict
from openid_handshake.oidutil import appendArgs, queryPairs
from openid_handshake.yadis.discover import ALLOWED_TIME, MAX_REDIRECTS

__all__ = ['Consumer', 'VerificationResult', 'buildRedirectURL', 'verify', 'redirectURL', 'validate']

_LOGGER = logging.getLogger(__name__)

VerificationResult = namedtuple('VerificationResult', ['granted', 'claimed_id'])


def buildRedirectURL(op_endpoint, claimed_id, realm, return_path):
    """Build the C{checkid_setup} request URL.

    @param op_endpoint: The OpenID provider endpoint.
    @param claimed_id: The claimed identifier, identifier select is used if empty.
    @param realm: The realm of the relying party, e.g. C{'http://example.com'}.
    @param return_path: Path appended to the realm to get the return URL.

    @rtype: str
    """
    if not claimed_id:
        claimed_id = IDENTIFIER_SELECT

    args = {
        'openid.ns': OPENID2_NS,
        'openid.mode': 'checkid_setup',
        'openid.claimed_id': claimed_id,
        'openid.identity': claimed_id,
        'openid.realm': realm,
        'openid.return_to': realm + return_path,
    }
    return appendArgs(op_endpoint, args)


def verify(query, fetcher=None, expected_op_endpoint=None, timeout=None):
    """Verify an assertion by a direct C{check_authentication} request.

    @param query: Query parameters received on the return URL. Either
        a mapping of keys to values or lists of values, or a sequence of
        pairs.

    @param fetcher: Fetcher to use, default fetcher if C{None}.
    @type fetcher: L{openid_handshake.fetchers.HTTPFetcher}

    @param expected_op_endpoint: If set, the assertion must come from
        this provider endpoint.

    @rtype: L{VerificationResult}

    @raises NoOpEndpoint: If the assertion has no provider endpoint.
    @raises DifferingEndpoint: If the provider endpoint is not the expected one.
    @raises IncorrectMode: If the query is not a positive assertion.
    @raises TransportError: If the request fails.
    @raises NamespaceMismatch: If the provider response is not an OpenID 2.0
        response or is not valid UTF-8.
    """
    pairs = queryPairs(query)
    args = {}
    for key, value in pairs:
        args.setdefault(key, value)

    op_endpoint = args.get('openid.op_endpoint')
    if not op_endpoint:
        raise NoOpEndpoint()
    if expected_op_endpoint is not None and op_endpoint != expected_op_endpoint:
        raise DifferingEndpoint()
    if args.get('openid.mode') != 'id_res':
        raise IncorrectMode('Incorrect mode: %r' % (args.get('openid.mode'),))

    check_args = []
    for key, value in pairs:
        if key != 'openid.mode':
            check_args.append((key, value))
        elif ('openid.mode', 'check_authentication') not in check_args:
            check_args.append(('openid.mode', 'check_authentication'))

    fetcher = fetchers.wrapFetcher(fetcher)
    try:
        resp = fetcher.fetch(op_endpoint, body=urlencode(check_args).encode('utf-8'),
                             headers={'Content-Type': 'application/x-www-form-urlencoded'}, timeout=timeout)
    except fetchers.HTTPFetchingError as error:
        raise TransportError(op_endpoint, error.why) from error

    if resp.status != 200:
        _LOGGER.warning('Bad status code from server %s: %s', op_endpoint, resp.status)

    try:
        response = kvToDict(resp.body or b'')
    except UnicodeDecodeError as error:
        _LOGGER.warning('Undecodable response from server %s: %s', op_endpoint, error)
        raise NamespaceMismatch() from error
    if response.get('ns') != OPENID2_NS:
        raise NamespaceMismatch()

    granted = response.get('is_valid') == 'true'
    claimed_id = args.get('openid.claimed_id', '')
    if granted:
        _LOGGER.info('Server %s confirmed the assertion for %s', op_endpoint, claimed_id)
    else:
        _LOGGER.info('Server %s responds that check_authentication call is not valid', op_endpoint)
    return VerificationResult(granted, claimed_id)


class Consumer(object):
    """Relying party of the OpenID handshake.

    Consumers keep no state between calls, one instance may serve any
    number of concurrent handshakes.

    @ivar fetcher: Fetcher used for all requests, default fetcher if C{None}.
    @ivar max_redirects: Number of Yadis redirections allowed during discovery.
    @ivar allowed_time: Seconds allowed for the discovery and for the verification.
    """

    def __init__(self, fetcher=None, max_redirects=MAX_REDIRECTS, allowed_time=ALLOWED_TIME):
        self.fetcher = fetcher
        self.max_redirects = max_redirects
        self.allowed_time = allowed_time

    def discover(self, identifier):
        """Return the L{OpenIDServiceEndpoint<openid_handshake.consumer.discover.OpenIDServiceEndpoint>}
        of the identifier."""
        return discover(identifier, fetcher=self.fetcher, max_redirects=self.max_redirects,
                        allowed_time=self.allowed_time)

    def begin(self, identifier, realm, return_path):
        """Discover the identifier and return the URL to redirect the user to.

        @param identifier: The identifier supplied by the user.
        @param realm: The realm of the relying party, e.g. C{'http://example.com'}.
        @param return_path: Path appended to the realm to get the return URL.

        @rtype: str

        @raises openid_handshake.errors.OpenIDError: If the discovery fails.
        """
        endpoint = self.discover(identifier)
        return buildRedirectURL(endpoint.server_url, endpoint.getClaimedID(), realm, return_path)

    def complete(self, query, op_endpoint=None):
        """Verify the assertion in the query.

        @see: L{verify}
        @rtype: L{VerificationResult}
        """
        return verify(query, fetcher=self.fetcher, expected_op_endpoint=op_endpoint, timeout=self.allowed_time)


def redirectURL(identifier, realm, return_path, fetcher=None):
    """Return the URL the user is redirected to, using the default settings.

    Example::

        url = redirectURL('http://steamcommunity.com/openid', 'http://localhost', '/')
    """
    return Consumer(fetcher).begin(identifier, realm, return_path)


def validate(query, fetcher=None):
    """Verify the assertion in the query, using the default settings.

    Example::

        granted, claimed_id = validate(request.GET)
    """
    return Consumer(fetcher).complete(query)
