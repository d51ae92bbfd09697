"""Test utilities."""
from openid_handshake.fetchers import HTTPFetcher, HTTPResponse
from openid_handshake.yadis.xrds import XRD_NS_2_0, XRDS_NS

SERVICE_TEMPLATE = '<Service{priority}>{types}<URI>{uri}</URI></Service>'


def makeXRDS(*services):
    """Return XRDS document with services given as (type URI, URI) or (type URI, URI, priority)."""
    chunks = []
    for service in services:
        type_uri, uri = service[:2]
        priority = ' priority="%s"' % service[2] if len(service) > 2 else ''
        chunks.append(SERVICE_TEMPLATE.format(priority=priority, types='<Type>%s</Type>' % type_uri, uri=uri))
    document = ('<?xml version="1.0" encoding="UTF-8"?>'
                '<xrds:XRDS xmlns:xrds="{}" xmlns="{}"><XRD>{}</XRD></xrds:XRDS>').format(
        XRDS_NS, XRD_NS_2_0, ''.join(chunks))
    return document.encode('utf-8')


class MockFetcher(HTTPFetcher):
    """Fetcher returning prepared responses and recording the requests.

    @ivar responses: Maps URL to a response or an exception to raise.
        Unknown URLs get a 404 response.
    @ivar requests: List of (url, body, headers) of performed requests.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requests = []

    def add(self, url, status=200, headers=None, body=b''):
        self.responses[url] = HTTPResponse(url, status, headers, body)

    def fetch(self, url, body=None, headers=None, timeout=None):
        self.requests.append((url, body, headers))
        response = self.responses.get(url)
        if response is None:
            return HTTPResponse(url, 404, {}, b'')
        if isinstance(response, Exception):
            raise response
        return response
