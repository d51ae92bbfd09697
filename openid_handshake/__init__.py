"""
This package is a client-side implementation of the OpenID 2.0
authentication handshake.  It resolves a user-supplied identifier to an
OpenID provider endpoint using Yadis discovery, builds the redirect URL
for the C{checkid_setup} request and verifies the returned assertion
with a direct C{check_authentication} call.

For the relying party API, see the C{L{openid_handshake.consumer.consumer}}
module.
"""

__version__ = '1.0.0'

# Parse the version info
try:
    version_info = tuple(map(int, __version__.split('.')))
except ValueError:
    version_info = (None, None, None)
else:
    if len(version_info) != 3:
        version_info = (None, None, None)
