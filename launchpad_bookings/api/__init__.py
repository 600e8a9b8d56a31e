"""
FastAPI routers and request dependencies.
"""
