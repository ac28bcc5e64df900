"""
Database models for the application.
"""

from app.core.database import Base
from app.models.geo import State, City, Store, Timings
from app.models.otp import OtpVerification
from app.models.rating import Rating

__all__ = [
    "Base",
    "State",
    "City",
    "Store",
    "Timings",
    "OtpVerification",
    "Rating",
]
