"""
Web application package for the Exhibitor bootstrap.

This package contains the Starlette application that hosts the supervisor
lifecycle and exposes the published supervisor to request handlers.
"""
