"""
Pydantic schemas for OTP issuance and verification.
"""

from typing import Optional, Union
from pydantic import BaseModel, EmailStr, Field


class SendOtpRequest(BaseModel):
    """Schema for requesting a new OTP."""
    email: Optional[EmailStr] = Field(None, description="Address the code is sent to")
    StoreID: Optional[int] = Field(
        None, description="Store about to be rated (used when the rating guard is per store)"
    )


class VerifyOtpRequest(BaseModel):
    """Schema for verifying a previously issued OTP."""
    email: Optional[EmailStr] = Field(None, description="Address the code was sent to")
    otp: Optional[Union[str, int]] = Field(None, description="6-digit code, as string or number")
