"""
Rating API endpoints.

Submission requires an email verified through the OTP endpoints; each email
holds at most one rating per store.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.rating_repository import RatingRepository, RATING_MIN, RATING_MAX
from app.schemas.common import MessageResponse
from app.schemas.rating import (
    SubmitRatingRequest,
    RatingResponse,
    RatingSummaryResponse,
    RatingPageResponse,
)

router = APIRouter(tags=["Ratings"])


@router.post("/api/submitRating", response_model=MessageResponse)
def submit_rating(request: SubmitRatingRequest, db: Session = Depends(get_db)):
    """
    Submit a rating, or replace the one this email gave the store earlier.

    Raises:
        HTTPException 400: If a required field is missing or the score is out of range
        HTTPException 403: If the email has not been verified
        HTTPException 404: If the store does not exist
    """
    if not request.StoreID or not request.email or request.rating is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="StoreID, email and rating are required"
        )

    if not RATING_MIN <= request.rating <= RATING_MAX:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Rating must be between {RATING_MIN} and {RATING_MAX}"
        )

    _, created = RatingRepository.submit(db, request)

    if created:
        return MessageResponse(message="Rating submitted successfully")
    return MessageResponse(message="Rating updated successfully")


@router.get("/getRatings/{store_id}", response_model=RatingSummaryResponse)
def get_ratings(store_id: int, db: Session = Depends(get_db)):
    """Get the average rating and rating count of a store."""
    average, count = RatingRepository.get_summary(db, store_id)
    return RatingSummaryResponse(averageRating=average, ratingCount=count)


@router.get("/getAllRatings/{store_id}", response_model=RatingPageResponse)
def get_all_ratings(
    store_id: int,
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Get a page of a store's ratings, newest first, with the total count."""
    ratings, total = RatingRepository.get_page(db, store_id, page, limit)

    return RatingPageResponse(
        ratings=[RatingResponse.model_validate(r) for r in ratings],
        total=total,
        page=page,
        limit=limit,
        totalPages=(total + limit - 1) // limit,
    )
