"""
Repository layer for store ratings.
Handles the per-(email, store) upsert, aggregates and paginated listings.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.timeutils import utcnow
from app.models.rating import Rating
from app.schemas.rating import SubmitRatingRequest
from app.services.geo_repository import StoreRepository
from app.services.otp_repository import OtpRepository

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5


class RatingRepository:
    """Repository for Rating operations"""

    @staticmethod
    def get_by_email_and_store(db: Session, email: str, store_id: int) -> Optional[Rating]:
        """Get the rating an email left for a store"""
        return db.query(Rating).filter(
            Rating.email == email,
            Rating.store_id == store_id
        ).first()

    @staticmethod
    def has_rated(db: Session, email: str, store_id: Optional[int] = None) -> bool:
        """Check whether an email has rated the given store, or any store when store_id is None"""
        query = db.query(Rating.id).filter(Rating.email == email)
        if store_id is not None:
            query = query.filter(Rating.store_id == store_id)
        return query.first() is not None

    @staticmethod
    def submit(db: Session, data: SubmitRatingRequest, now: Optional[datetime] = None) -> Tuple[Rating, bool]:
        """
        Insert or update the rating for (email, store).

        Args:
            db: Database session
            data: Validated submission with StoreID, email and rating present
            now: Fallback submission time when the client sent none

        Returns:
            Tuple of the stored rating and whether it was newly created

        Raises:
            HTTPException 404: If the store does not exist
            HTTPException 403: If the email has not verified an OTP
        """
        if StoreRepository.get_by_id(db, data.StoreID) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Store with ID {data.StoreID} not found"
            )

        if not OtpRepository.is_verified(db, data.email):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Please verify your email first"
            )

        submitted_at = data.submitted_at or now or utcnow()

        existing = RatingRepository.get_by_email_and_store(db, data.email, data.StoreID)
        if existing:
            RatingRepository._apply(existing, data, submitted_at)
            db.commit()
            db.refresh(existing)
            return existing, False

        db_rating = Rating(
            store_id=data.StoreID,
            email=data.email,
            name=data.name,
            mobile=data.mobile,
            rating=data.rating,
            submitted_at=submitted_at,
        )
        db.add(db_rating)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent submission for the same pair won the insert
            db.rollback()
            existing = RatingRepository.get_by_email_and_store(db, data.email, data.StoreID)
            if existing is None:
                raise
            RatingRepository._apply(existing, data, submitted_at)
            db.commit()
            db.refresh(existing)
            return existing, False

        db.refresh(db_rating)
        logger.info(f"Rating {data.rating} recorded for store {data.StoreID}")
        return db_rating, True

    @staticmethod
    def _apply(rating: Rating, data: SubmitRatingRequest, submitted_at: datetime) -> None:
        rating.rating = data.rating
        rating.name = data.name
        rating.mobile = data.mobile
        rating.submitted_at = submitted_at

    @staticmethod
    def get_summary(db: Session, store_id: int) -> Tuple[str, int]:
        """
        Get the average and count of ratings for a store.

        Returns:
            Average formatted to one decimal place ("0.0" when unrated) and the count
        """
        average, count = db.query(
            func.avg(Rating.rating),
            func.count(Rating.id)
        ).filter(Rating.store_id == store_id).one()

        return f"{float(average or 0):.1f}", int(count or 0)

    @staticmethod
    def get_page(db: Session, store_id: int, page: int = 1, limit: int = 10) -> Tuple[List[Rating], int]:
        """Get one page of a store's ratings, newest first, with the total count"""
        query = db.query(Rating).filter(Rating.store_id == store_id)

        total = query.count()
        ratings = query.order_by(Rating.submitted_at.desc(), Rating.id.desc())\
            .offset((page - 1) * limit).limit(limit).all()

        return ratings, total
