"""VidTube HTTP server: FastAPI application, routers and request dependencies."""
