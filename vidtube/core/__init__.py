"""
Core utilities and configuration for VidTube.

This package provides core functionality including logging configuration,
monitoring, security helpers, the database layer and the media storage client.
"""

from vidtube.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
