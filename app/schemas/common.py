"""
Shared response schemas.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Generic response carrying a human-readable message"""
    message: str
