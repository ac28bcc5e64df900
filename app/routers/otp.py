"""
OTP API endpoints.

Issues a one-time code to an email address and verifies it. A verified email
may then submit store ratings.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.dependencies import get_app_settings
from app.core.mailer import Mailer, get_mailer
from app.services.otp_repository import OtpRepository
from app.services.rating_repository import RatingRepository
from app.schemas.common import MessageResponse
from app.schemas.otp import SendOtpRequest, VerifyOtpRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["OTP"])


@router.post("/sendOTP", response_model=MessageResponse)
def send_otp(
    request: SendOtpRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_app_settings),
):
    """
    Issue a new OTP and email it.

    Emails that already submitted a rating are refused; with the per-store
    guard only a rating for the requested store counts. The stored code is not
    rolled back when the email cannot be sent.

    Raises:
        HTTPException 400: If email is missing or the email has already rated
        MailDeliveryError: If the SMTP transport fails (rendered as 500)
    """
    if not request.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is required"
        )

    guard_store_id = request.StoreID if settings.RATING_GUARD_SCOPE == "store" else None
    if settings.RATING_GUARD_SCOPE == "global" or guard_store_id is not None:
        if RatingRepository.has_rated(db, request.email, guard_store_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already submitted a rating"
            )

    record = OtpRepository.issue(db, request.email, settings.OTP_EXPIRY_MINUTES)
    mailer.send_otp(record.email, record.otp, settings.OTP_EXPIRY_MINUTES)

    return MessageResponse(message="OTP sent successfully")


@router.post("/verifyOTP", response_model=MessageResponse)
def verify_otp(request: VerifyOtpRequest, db: Session = Depends(get_db)):
    """
    Verify the current OTP for an email.

    A correct code can be verified again until it expires.

    Raises:
        HTTPException 400: If a field is missing, the code is wrong or expired
        HTTPException 404: If no OTP was issued for the email
    """
    if not request.email or request.otp is None or str(request.otp).strip() == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and OTP are required"
        )

    OtpRepository.verify(db, request.email, request.otp)
    return MessageResponse(message="OTP verified successfully")
