"""
This package contains the relying party side of the OpenID handshake.

The C{L{openid_handshake.consumer.consumer}} module holds the entry points,
C{L{openid_handshake.consumer.discover}} resolves identifiers to endpoints.
"""
