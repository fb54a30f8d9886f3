"""
API-facing data models.

- io: Pydantic request/response schemas shared by the routers
"""
