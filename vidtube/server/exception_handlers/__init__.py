"""
Exception handlers for the VidTube server.

This package contains the exception handlers that render every failure as
the standard error envelope, and a setup function to register them with
the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
