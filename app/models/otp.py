"""
OTP verification model.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from app.core.database import Base


class OtpVerification(Base):
    """
    One-time code issued to an email address.

    Table: otp_verification
    Holds a single row per email; a new issuance overwrites the previous code.
    """
    __tablename__ = "otp_verification"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    otp = Column(String(6), nullable=False)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<OtpVerification(email='{self.email}', expires_at={self.expires_at}, used={self.used})>"
