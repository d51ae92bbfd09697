"""Parsing of XRDS documents.

Parsing is tolerant: elements are matched by their local name, so
documents with missing or unusual namespaces still yield their services,
and a document which is not XML at all yields no services.
"""
import logging
from collections import namedtuple

from lxml import etree

from openid_handshake.constants import OPENID_2_0_TYPE, OPENID_IDP_2_0_TYPE

__all__ = ['ServiceDescriptor', 'parseServices', 'extractIdentifiers', 'XRDS_NS', 'XRD_NS_2_0']

_LOGGER = logging.getLogger(__name__)

XRDS_NS = 'xri://$xrds'
XRD_NS_2_0 = 'xri://$xrd*($v*2.0)'

ServiceDescriptor = namedtuple('ServiceDescriptor', ['types', 'uri', 'priority'])
ServiceDescriptor.__doc__ = """One C{Service} element of an XRDS document.

@ivar types: Content of the C{Type} elements, in document order.
@type types: Tuple[str, ...]
@ivar uri: Content of the first C{URI} element, empty string if missing.
@type uri: str
@ivar priority: The C{priority} attribute, C{None} if missing or invalid.
@type priority: Optional[int]
"""


def _localName(element):
    # Comments and processing instructions have no tag name
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element, localname):
    return [child for child in element if _localName(child) == localname]


def _text(element):
    return (element.text or '').strip()


def _priority(service):
    value = service.get('priority')
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        _LOGGER.debug('Ignoring invalid service priority %r', value)
        return None


def _parser():
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def parseServices(document):
    """Return the services listed in a XRDS document, in document order.

    @param document: The XRDS document
    @type document: bytes

    @rtype: List[ServiceDescriptor]
    """
    try:
        root = etree.fromstring(document, _parser())
    except (ValueError, etree.XMLSyntaxError) as error:
        _LOGGER.debug('Unable to parse XRDS document: %s', error)
        return []

    if root is None or _localName(root) != 'XRDS':
        _LOGGER.debug('Root element is not XRDS.')
        return []

    services = []
    for xrd in _children(root, 'XRD'):
        for service in _children(xrd, 'Service'):
            types = tuple(_text(t) for t in _children(service, 'Type'))
            uris = _children(service, 'URI')
            uri = _text(uris[0]) if uris else ''
            services.append(ServiceDescriptor(types, uri, _priority(service)))
    return services


def _hasType(service, type_uri):
    return any(t.startswith(type_uri) for t in service.types)


def extractIdentifiers(document):
    """Extract OpenID provider endpoint and claimed identifier from a XRDS document.

    Services are evaluated in document order and the last service of
    each kind wins, the C{priority} attributes are not considered.

    @param document: The XRDS document
    @type document: bytes

    @return: The provider endpoint and the claimed identifier, each is
        an empty string if not found.
    @rtype: Tuple[str, str]
    """
    op_endpoint = ''
    claimed_id = ''
    for service in parseServices(document):
        if _hasType(service, OPENID_IDP_2_0_TYPE):
            op_endpoint = service.uri
        elif _hasType(service, OPENID_2_0_TYPE):
            claimed_id = service.uri
    return op_endpoint, claimed_id
