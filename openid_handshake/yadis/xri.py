"""Utility functions for handling XRIs.

XRIs are only supported as the identifier: they are resolved through an
HTTP proxy and the result is not verified.

@see: XRI Syntax v2.0 at the
      U{OASIS XRI Technical Committee<http://www.oasis-open.org/committees/tc_home.php?wg_abbrev=xri>}
"""
__all__ = ['XRI_AUTHORITIES', 'XRI_PROXY_URL', 'stripXRIScheme', 'toProxyURL']

# Global context symbols and the cross-reference opening
XRI_AUTHORITIES = ['!', '=', '@', '+', '$', '(']

XRI_PROXY_URL = 'http://xri.net/'


def stripXRIScheme(identifier):
    """Remove the C{xri://} prefix, if present."""
    if identifier.startswith('xri://'):
        return identifier[6:]
    return identifier


def toProxyURL(xri, proxy_url=XRI_PROXY_URL):
    """Return the URL which resolves the XRI through the proxy.

    Example::

        toProxyURL("=example") == "http://xri.net/=example"
    """
    return proxy_url + stripXRIScheme(xri)
