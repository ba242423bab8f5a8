"""Top-level package for Django configuration.

This package exposes project configuration for the booking engine. It
contains settings modules for different environments and entry points
for WSGI and ASGI.
"""
