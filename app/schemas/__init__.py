"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.common import MessageResponse

from app.schemas.geo import (
    # Response schemas
    StateResponse,
    CityResponse,
    StoreResponse,
    StoreTimingsResponse,
    StateDescriptionResponse,
    # Request schemas
    CitiesByStateRequest,
    StoresByCityRequest,
    StoresByCityNameRequest,
    StoresByStateRequest,
    StoreTimingsRequest,
    StateDescriptionRequest,
)

from app.schemas.otp import (
    SendOtpRequest,
    VerifyOtpRequest,
)

from app.schemas.rating import (
    SubmitRatingRequest,
    RatingResponse,
    RatingSummaryResponse,
    RatingPageResponse,
)

__all__ = [
    "MessageResponse",

    # Catalog schemas
    "StateResponse",
    "CityResponse",
    "StoreResponse",
    "StoreTimingsResponse",
    "StateDescriptionResponse",
    "CitiesByStateRequest",
    "StoresByCityRequest",
    "StoresByCityNameRequest",
    "StoresByStateRequest",
    "StoreTimingsRequest",
    "StateDescriptionRequest",

    # OTP schemas
    "SendOtpRequest",
    "VerifyOtpRequest",

    # Rating schemas
    "SubmitRatingRequest",
    "RatingResponse",
    "RatingSummaryResponse",
    "RatingPageResponse",
]
