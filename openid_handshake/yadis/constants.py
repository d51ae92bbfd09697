__all__ = ['YADIS_HEADER_NAME', 'YADIS_CONTENT_TYPE', 'YADIS_ACCEPT_HEADER']

YADIS_HEADER_NAME = 'X-XRDS-Location'
YADIS_CONTENT_TYPE = 'application/xrds+xml'

# Only the XRDS document is requested, other responses are classified
# by the discovery itself.
YADIS_ACCEPT_HEADER = YADIS_CONTENT_TYPE
