"""This module contains the HTTP fetcher interface and its implementations."""
import sys
from urllib.error import HTTPError as UrllibHTTPError
from urllib.request import Request, urlopen

import requests
from requests.structures import CaseInsensitiveDict

import openid_handshake

__all__ = ['fetch', 'getDefaultFetcher', 'setDefaultFetcher', 'HTTPResponse',
           'HTTPFetcher', 'createHTTPFetcher', 'HTTPFetchingError',
           'RequestsFetcher', 'UrllibFetcher', 'ExceptionWrappingFetcher', 'wrapFetcher']

USER_AGENT = "python-openid-handshake/%s (%s)" % (openid_handshake.__version__, sys.platform)
MAX_RESPONSE_KB = 1024
# Seconds allowed for a single request
DEFAULT_TIMEOUT = 20


def fetch(url, body=None, headers=None, timeout=None):
    """Invoke the fetch method on the default fetcher. Most users
    should need only this method.

    @raises Exception: any exceptions that may be raised by the default fetcher
    """
    fetcher = getDefaultFetcher()
    return fetcher.fetch(url, body, headers, timeout)


def createHTTPFetcher():
    """Create a default HTTP fetcher instance."""
    return RequestsFetcher()


# Contains the currently set HTTP fetcher. If it is set to None, the
# library will call createHTTPFetcher() to set it. Do not access this
# variable outside of this module.
_default_fetcher = None


def getDefaultFetcher():
    """Return the default fetcher instance
    if no fetcher has been set, it will create a default fetcher.

    @return: the default fetcher
    @rtype: HTTPFetcher
    """
    global _default_fetcher

    if _default_fetcher is None:
        setDefaultFetcher(createHTTPFetcher())

    return _default_fetcher


def setDefaultFetcher(fetcher, wrap_exceptions=True):
    """Set the default fetcher

    @param fetcher: The fetcher to use as the default HTTP fetcher
    @type fetcher: HTTPFetcher

    @param wrap_exceptions: Whether to wrap exceptions thrown by the
        fetcher with HTTPFetchingError so that they may be caught
        easier. By default, exceptions will be wrapped. In general,
        unwrapped fetchers are useful for debugging of fetching errors
        or if your fetcher raises well-known exceptions that you would
        like to catch.
    @type wrap_exceptions: bool
    """
    global _default_fetcher
    if fetcher is None or not wrap_exceptions:
        _default_fetcher = fetcher
    else:
        _default_fetcher = ExceptionWrappingFetcher(fetcher)


class HTTPResponse(object):
    """Response of a single HTTP request.

    @ivar final_url: URL of the response, after HTTP redirects were followed.
    @ivar status: HTTP status code
    @ivar headers: Response headers, case-insensitive.
    @type headers: requests.structures.CaseInsensitiveDict
    @ivar body: Response body, at most C{MAX_RESPONSE_KB} kilobytes.
    @type body: bytes
    """
    headers = None
    status = None
    body = None
    final_url = None

    def __init__(self, final_url=None, status=None, headers=None, body=None):
        self.final_url = final_url
        self.status = status
        self.headers = CaseInsensitiveDict(headers or {})
        self.body = body

    def __repr__(self):
        return "<%s status %s for %s>" % (self.__class__.__name__,
                                          self.status,
                                          self.final_url)


class HTTPFetcher(object):
    """
    This class is the interface for HTTP fetchers. This interface is
    only important if you need to write a new fetcher for some reason,
    e.g. to substitute a fake transport in tests.
    """

    def fetch(self, url, body=None, headers=None, timeout=None):
        """
        This performs an HTTP POST or GET, following redirects along
        the way. If a body is specified, then the request will be a
        POST. Otherwise, it will be a GET.

        @type body: bytes

        @param headers: HTTP headers to include with the request
        @type headers: Dict[str, str]

        @param timeout: Number of seconds the request may take, default
            is used if C{None}.
        @type timeout: float

        @return: An object representing the server's HTTP response. If
            there are network or protocol errors, an exception will be
            raised. HTTP error responses, like 404 or 500, do not
            cause exceptions.

        @rtype: L{HTTPResponse}

        @raise Exception: Different implementations will raise
            different errors based on the underlying HTTP library.
        """
        raise NotImplementedError


def _allowedURL(url):
    return url.startswith('http://') or url.startswith('https://')


def _requestHeaders(headers, library_name):
    headers = dict(headers or {})
    headers.setdefault('User-Agent', "%s %s" % (USER_AGENT, library_name))
    return headers


class HTTPFetchingError(Exception):
    """Exception that is wrapped around all exceptions that are raised
    by the underlying fetcher when using the ExceptionWrappingFetcher

    @ivar why: The exception that caused this exception
    """

    def __init__(self, why=None):
        Exception.__init__(self, why)
        self.why = why


class ExceptionWrappingFetcher(HTTPFetcher):
    """Fetcher wrapper which wraps all exceptions to `HTTPFetchingError`."""

    def __init__(self, fetcher):
        self.fetcher = fetcher

    def fetch(self, *args, **kwargs):
        try:
            return self.fetcher.fetch(*args, **kwargs)
        except Exception as error:
            raise HTTPFetchingError(why=error) from error


class UrllibFetcher(HTTPFetcher):
    """An C{L{HTTPFetcher}} that uses urllib."""

    # Parameterized for the benefit of testing frameworks
    urlopen = staticmethod(urlopen)

    def fetch(self, url, body=None, headers=None, timeout=None):
        assert body is None or isinstance(body, bytes)

        if not _allowedURL(url):
            raise ValueError('Bad URL scheme: %r' % (url,))

        if timeout is None:
            timeout = DEFAULT_TIMEOUT

        req = Request(url, data=body, headers=_requestHeaders(headers, 'Python-urllib'))
        try:
            f = self.urlopen(req, timeout=timeout)
            try:
                return self._makeResponse(f)
            finally:
                f.close()
        except UrllibHTTPError as why:
            try:
                return self._makeResponse(why)
            finally:
                why.close()

    def _makeResponse(self, urllib_response):
        resp = HTTPResponse()
        resp.body = urllib_response.read(MAX_RESPONSE_KB * 1024)
        resp.final_url = urllib_response.geturl()
        resp.headers = CaseInsensitiveDict(urllib_response.info().items())

        if hasattr(urllib_response, 'code'):
            resp.status = urllib_response.code
        else:
            resp.status = 200

        return resp


class RequestsFetcher(HTTPFetcher):
    """A fetcher that uses C{requests} for performing HTTP requests.

    @ivar session: Session used for requests.
    @type session: requests.Session
    """

    chunk_size = 8192

    def __init__(self, session=None):
        if session is None:
            session = requests.Session()
        self.session = session

    def fetch(self, url, body=None, headers=None, timeout=None):
        """Perform an HTTP request

        @raises Exception: Any exception that can be raised by 'requests'

        @see: C{L{HTTPFetcher.fetch}}
        """
        assert body is None or isinstance(body, bytes)

        if body:
            method = 'POST'
        else:
            method = 'GET'

        if timeout is None:
            timeout = DEFAULT_TIMEOUT

        headers = _requestHeaders(headers, 'requests/%s' % requests.__version__)
        with self.session.request(method, url, data=body, headers=headers, timeout=timeout,
                                  stream=True) as response:
            content = self._readBody(response)
            return HTTPResponse(response.url, response.status_code, response.headers, content)

    def _readBody(self, response):
        limit = MAX_RESPONSE_KB * 1024
        chunks = []
        size = 0
        for chunk in response.iter_content(self.chunk_size):
            chunks.append(chunk)
            size += len(chunk)
            if size >= limit:
                break
        return b''.join(chunks)[:limit]


def wrapFetcher(fetcher=None):
    """Return a fetcher which raises only C{HTTPFetchingError}.

    @param fetcher: Fetcher to wrap. If C{None}, the default fetcher is used.
    """
    if fetcher is None:
        fetcher = getDefaultFetcher()
    if isinstance(fetcher, ExceptionWrappingFetcher):
        return fetcher
    return ExceptionWrappingFetcher(fetcher)
