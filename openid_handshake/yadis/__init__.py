"""Yadis service discovery: content negotiation, XRDS parsing and XRI helpers."""
