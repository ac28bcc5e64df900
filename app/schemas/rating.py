"""
Pydantic schemas for rating submission, aggregates and listings.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.timeutils import to_naive_utc


class SubmitRatingRequest(BaseModel):
    """Schema for submitting or updating a rating."""
    StoreID: Optional[int] = Field(None, description="Rated store")
    email: Optional[EmailStr] = Field(None, description="Verified submitter email")
    rating: Optional[int] = Field(None, description="Score from 1 to 5")
    name: Optional[str] = Field(None, max_length=255)
    mobile: Optional[str] = Field(None, max_length=20)
    submitted_at: Optional[datetime] = Field(None, description="Defaults to server time")

    @field_validator("submitted_at")
    @classmethod
    def normalize_submitted_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Store client timestamps as naive UTC, like server-side defaults."""
        if value is None:
            return None
        return to_naive_utc(value)


class RatingResponse(BaseModel):
    """Schema for a single rating in listings (contact details omitted)."""
    id: int
    store_id: int
    name: Optional[str] = None
    rating: int
    submitted_at: datetime

    class Config:
        from_attributes = True


class RatingSummaryResponse(BaseModel):
    """Average and count of ratings for a store."""
    averageRating: str = Field(..., description="Average formatted to one decimal place")
    ratingCount: int


class RatingPageResponse(BaseModel):
    """Paginated ratings for a store, newest first."""
    ratings: List[RatingResponse]
    total: int
    page: int
    limit: int
    totalPages: int
