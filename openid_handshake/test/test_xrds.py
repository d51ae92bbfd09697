"""Tests for `openid_handshake.yadis.xrds` module."""
import unittest

from testfixtures import LogCapture

from openid_handshake.constants import OPENID_2_0_TYPE, OPENID_IDP_2_0_TYPE
from openid_handshake.yadis.xrds import ServiceDescriptor, extractIdentifiers, parseServices

from .support import makeXRDS

# A document as served by a real provider
PROVIDER_XRDS = b"""<?xml version="1.0" encoding="UTF-8"?>
<xrds:XRDS xmlns:xrds="xri://$xrds" xmlns="xri://$xrd*($v*2.0)">
  <XRD>
    <Service priority="0">
      <Type>http://specs.openid.net/auth/2.0/server</Type>
      <Type>http://openid.net/extensions/sreg/1.1</Type>
      <URI>https://op.example.com/openid/login</URI>
    </Service>
  </XRD>
</xrds:XRDS>
"""

USER_XRDS = b"""<?xml version="1.0" encoding="UTF-8"?>
<xrds:XRDS xmlns:xrds="xri://$xrds" xmlns="xri://$xrd*($v*2.0)">
  <XRD>
    <!-- OpenID 2.0 -->
    <Service priority="10">
      <Type>http://specs.openid.net/auth/2.0/signon</Type>
      <URI>http://user.example.com/</URI>
      <LocalID>http://user.op.example.com/</LocalID>
    </Service>
    <Service priority="20">
      <Type>http://specs.openid.net/auth/2.0/server</Type>
      <URI>http://op.example.com/server</URI>
    </Service>
  </XRD>
</xrds:XRDS>
"""


class ParseServicesTest(unittest.TestCase):
    """Test `parseServices` function."""

    def test_provider(self):
        self.assertEqual(parseServices(PROVIDER_XRDS), [
            ServiceDescriptor((OPENID_IDP_2_0_TYPE, 'http://openid.net/extensions/sreg/1.1'),
                              'https://op.example.com/openid/login', 0)])

    def test_user(self):
        self.assertEqual(parseServices(USER_XRDS), [
            ServiceDescriptor((OPENID_2_0_TYPE, ), 'http://user.example.com/', 10),
            ServiceDescriptor((OPENID_IDP_2_0_TYPE, ), 'http://op.example.com/server', 20)])

    def test_no_namespaces(self):
        document = b'<XRDS><XRD><Service><Type>urn:x</Type><URI>urn:y</URI></Service></XRD></XRDS>'
        self.assertEqual(parseServices(document), [ServiceDescriptor(('urn:x', ), 'urn:y', None)])

    def test_multiple_xrd(self):
        document = (b'<XRDS><XRD><Service><Type>urn:a</Type><URI>urn:1</URI></Service></XRD>'
                    b'<XRD><Service><Type>urn:b</Type><URI>urn:2</URI></Service></XRD></XRDS>')
        self.assertEqual(parseServices(document), [ServiceDescriptor(('urn:a', ), 'urn:1', None),
                                                   ServiceDescriptor(('urn:b', ), 'urn:2', None)])

    def test_missing_uri(self):
        document = b'<XRDS><XRD><Service><Type>urn:x</Type></Service></XRD></XRDS>'
        self.assertEqual(parseServices(document), [ServiceDescriptor(('urn:x', ), '', None)])

    def test_invalid_priority(self):
        document = b'<XRDS><XRD><Service priority="high"><Type>urn:x</Type><URI>urn:y</URI></Service></XRD></XRDS>'
        with LogCapture() as logbook:
            self.assertEqual(parseServices(document), [ServiceDescriptor(('urn:x', ), 'urn:y', None)])
        logbook.check(('openid_handshake.yadis.xrds', 'DEBUG', "Ignoring invalid service priority 'high'"))

    def test_not_xrds(self):
        with LogCapture() as logbook:
            self.assertEqual(parseServices(b'<html><body>Not XRDS</body></html>'), [])
        logbook.check(('openid_handshake.yadis.xrds', 'DEBUG', 'Root element is not XRDS.'))

    def test_not_xml(self):
        self.assertEqual(parseServices(b'This is not XML'), [])

    def test_empty(self):
        self.assertEqual(parseServices(b''), [])

    def test_entities_not_resolved(self):
        document = (b'<?xml version="1.0"?><!DOCTYPE XRDS [<!ENTITY uri "http://evil.example.com/">]>'
                    b'<XRDS><XRD><Service><Type>urn:x</Type><URI>&uri;</URI></Service></XRD></XRDS>')
        services = parseServices(document)
        self.assertNotIn('http://evil.example.com/', [s.uri for s in services])


class ExtractIdentifiersTest(unittest.TestCase):
    """Test `extractIdentifiers` function."""

    def test_provider(self):
        self.assertEqual(extractIdentifiers(PROVIDER_XRDS), ('https://op.example.com/openid/login', ''))

    def test_user(self):
        self.assertEqual(extractIdentifiers(USER_XRDS), ('http://op.example.com/server', 'http://user.example.com/'))

    def test_last_service_wins(self):
        document = makeXRDS((OPENID_IDP_2_0_TYPE, 'http://first.example.com/', 0),
                            (OPENID_2_0_TYPE, 'http://first.example.com/user', 0),
                            (OPENID_IDP_2_0_TYPE, 'http://second.example.com/', 100),
                            (OPENID_2_0_TYPE, 'http://second.example.com/user', 100))
        self.assertEqual(extractIdentifiers(document),
                         ('http://second.example.com/', 'http://second.example.com/user'))

    def test_type_prefix(self):
        document = makeXRDS((OPENID_IDP_2_0_TYPE + '/extended', 'http://op.example.com/'))
        self.assertEqual(extractIdentifiers(document), ('http://op.example.com/', ''))

    def test_other_services(self):
        document = makeXRDS(('http://openid.net/signon/1.1', 'http://op1.example.com/'))
        self.assertEqual(extractIdentifiers(document), ('', ''))

    def test_server_type_precedence(self):
        document = makeXRDS((OPENID_IDP_2_0_TYPE, 'http://op.example.com/'))
        document = document.replace(b'</Type>', b'</Type><Type>%s</Type>' % OPENID_2_0_TYPE.encode('utf-8'))
        self.assertEqual(extractIdentifiers(document), ('http://op.example.com/', ''))

    def test_malformed(self):
        self.assertEqual(extractIdentifiers(b'<XRDS><XRD><Service>'), ('', ''))
        self.assertEqual(extractIdentifiers(b''), ('', ''))
