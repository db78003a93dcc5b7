"""API layer module.

Contains FastAPI routers, request/response schemas and middleware.
"""
