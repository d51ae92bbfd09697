"""Exceptions raised by the relying party.

Every failure of the two entry points is an instance of C{L{OpenIDError}}.
Each subclass stands for one kind of failure and carries a default
message, so C{str(error)} always describes what went wrong.
"""

__all__ = ['OpenIDError', 'EmptyIdentifier', 'TransportError', 'DiscoveryFailure', 'DiscoveryLoopExceeded',
           'NoEndpointDiscovered', 'VerificationError', 'NoOpEndpoint', 'DifferingEndpoint', 'IncorrectMode',
           'NamespaceMismatch']


class OpenIDError(Exception):
    """Base class for all relying party errors.

    @cvar message: Default description used when no message is given.
    """

    message = 'OpenID error.'

    def __init__(self, message=None, *args):
        if message is None:
            message = self.message
        super(OpenIDError, self).__init__(message, *args)

    @property
    def kind(self):
        """Name of the error kind, e.g. C{'NamespaceMismatch'}."""
        return type(self).__name__

    def __str__(self):
        return 'openid: %s' % self.args[0]


class EmptyIdentifier(OpenIDError, ValueError):
    """The user supplied identifier is empty."""

    message = 'Identifier is empty.'


class TransportError(OpenIDError):
    """A network failure occured while talking to a remote host.

    @ivar url: The URL of the request that failed.
    @ivar why: The exception raised by the fetcher.
    """

    message = 'Transport error.'

    def __init__(self, url, why):
        super(TransportError, self).__init__('Error fetching %s: %s' % (url, why))
        self.url = url
        self.why = why


class DiscoveryFailure(OpenIDError):
    """Yadis discovery did not produce an XRDS document.

    @ivar http_response: The last response obtained, kept for diagnostics.
        C{None} if no response was obtained.
    @type http_response: L{openid_handshake.fetchers.HTTPResponse}
    """

    message = 'Could not locate Yadis document.'

    def __init__(self, message=None, http_response=None):
        super(DiscoveryFailure, self).__init__(message)
        self.http_response = http_response


class DiscoveryLoopExceeded(DiscoveryFailure):
    """The chain of Yadis redirections is longer than allowed."""

    message = 'Too many Yadis redirections.'


class NoEndpointDiscovered(DiscoveryFailure):
    """The XRDS document does not list an OpenID provider endpoint."""

    message = 'No OpenID provider endpoint found in the XRDS document.'


class VerificationError(OpenIDError):
    """The assertion can not be verified."""

    message = 'Assertion verification failed.'


class NoOpEndpoint(VerificationError):
    message = 'No op endpoint provided.'


class DifferingEndpoint(VerificationError):
    message = 'The client gave an endpoint that differed from expected.'


class IncorrectMode(VerificationError):
    message = 'Incorrect mode.'


class NamespaceMismatch(VerificationError):
    message = "ns in verification response was not 'http://specs.openid.net/auth/2.0'"
