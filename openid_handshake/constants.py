"""Basic constants of the OpenID 2.0 protocol."""

# Namespace of OpenID 2.0 messages
# Defined in OpenID specification http://openid.net/specs/openid-authentication-2_0.html#requesting_authentication
OPENID2_NS = 'http://specs.openid.net/auth/2.0'

# Claimed identifier used when the user selects the identifier at the provider
IDENTIFIER_SELECT = 'http://specs.openid.net/auth/2.0/identifier_select'

# XRDS service types
OPENID_IDP_2_0_TYPE = 'http://specs.openid.net/auth/2.0/server'
OPENID_2_0_TYPE = 'http://specs.openid.net/auth/2.0/signon'
