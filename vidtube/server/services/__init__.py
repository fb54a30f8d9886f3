"""
Request-scoped services and FastAPI dependencies.

- auth: current-user resolution and session cookies
- media: media storage client singleton and upload helpers
- params: id validation and pagination parameters
- deps: ``Annotated`` dependency aliases used by the routers
"""
