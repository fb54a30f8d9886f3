"""
Version 1 of the VidTube REST API.

One router module per resource; ``main`` mounts them under ``/api/v1``.
"""
