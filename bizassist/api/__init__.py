"""
HTTP API - FastAPI application and routers
"""
