"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import catalog, otp, rating

api_router = APIRouter()

# Include routers
api_router.include_router(catalog.router)  # States, cities, stores, timings
api_router.include_router(otp.router)  # Email OTP issuance & verification
api_router.include_router(rating.router)  # Rating submission & aggregates

__all__ = ["api_router", "catalog", "otp", "rating"]
