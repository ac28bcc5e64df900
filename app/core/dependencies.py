"""
FastAPI dependencies for application-scoped resources.
"""

from fastapi import Request

from app.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings
