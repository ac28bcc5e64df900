"""
Repository layer for one-time passcodes.

Lifecycle per email: no code -> issued -> verified (used) or expired.
Issuing again overwrites the stored code, expiry and used flag, so the only
row for an email is always the most recent issuance.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.timeutils import utcnow
from app.models.otp import OtpVerification

logger = logging.getLogger(__name__)

OTP_MIN = 100000
OTP_MAX = 999999


def generate_otp() -> str:
    """Return a 6-digit code drawn uniformly from [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def normalize_otp(code) -> str:
    """Compare codes as decimal strings whether the client sent a number or text."""
    return str(code).strip()


class OtpRepository:
    """Repository for OTP issuance and verification"""

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[OtpVerification]:
        """Get the current OTP row for an email"""
        return db.query(OtpVerification).filter(OtpVerification.email == email).first()

    @staticmethod
    def issue(
        db: Session,
        email: str,
        expiry_minutes: int,
        now: Optional[datetime] = None,
    ) -> OtpVerification:
        """
        Issue a fresh code for an email, replacing any earlier one.

        Args:
            db: Database session
            email: Address the code belongs to
            expiry_minutes: Validity window
            now: Issuance time (defaults to current UTC time)

        Returns:
            The stored OTP row, holding the plaintext code to be mailed
        """
        now = now or utcnow()
        code = generate_otp()
        expires_at = now + timedelta(minutes=expiry_minutes)

        record = OtpRepository.get_by_email(db, email)
        if record is None:
            record = OtpVerification(email=email, otp=code, created_at=now, expires_at=expires_at, used=False)
            db.add(record)
            try:
                db.commit()
            except IntegrityError:
                # Another request inserted this email first; overwrite its row
                db.rollback()
                record = OtpRepository.get_by_email(db, email)
                if record is None:
                    raise
                OtpRepository._overwrite(record, code, now, expires_at)
                db.commit()
        else:
            OtpRepository._overwrite(record, code, now, expires_at)
            db.commit()

        db.refresh(record)
        logger.info(f"OTP issued for {email}, expires at {expires_at.isoformat()}")
        return record

    @staticmethod
    def _overwrite(record: OtpVerification, code: str, now: datetime, expires_at: datetime) -> None:
        record.otp = code
        record.created_at = now
        record.expires_at = expires_at
        record.used = False

    @staticmethod
    def verify(
        db: Session,
        email: str,
        code,
        now: Optional[datetime] = None,
    ) -> OtpVerification:
        """
        Verify a submitted code against the current OTP for an email.

        A matching, unexpired code may be verified again until it expires.

        Raises:
            HTTPException 404: If no OTP was ever issued for the email
            HTTPException 400: If the code has expired or does not match
        """
        now = now or utcnow()

        record = OtpRepository.get_by_email(db, email)
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No OTP found for this email"
            )

        if now > record.expires_at:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="OTP has expired"
            )

        if normalize_otp(record.otp) != normalize_otp(code):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid OTP"
            )

        if not record.used:
            record.used = True
            db.commit()
            db.refresh(record)

        logger.info(f"OTP verified for {email}")
        return record

    @staticmethod
    def is_verified(db: Session, email: str) -> bool:
        """Check whether the email has a verified (used) OTP"""
        return db.query(OtpVerification).filter(
            OtpVerification.email == email,
            OtpVerification.used == True
        ).first() is not None
