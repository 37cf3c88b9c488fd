"""
API package - FastAPI routes and schemas.
"""

from journeyflow.api.routes import journey

__all__ = ["journey"]
