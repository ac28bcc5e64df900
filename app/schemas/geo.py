"""
Pydantic schemas for the State, City, Store catalog and store timings.
Request and response models for the catalog endpoints.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field


# ============================================================================
# Response Schemas
# ============================================================================

class StateResponse(BaseModel):
    """Schema for state response"""
    state_id: int
    state_name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class CityResponse(BaseModel):
    """Schema for city response"""
    city_id: int
    city_name: str
    state_id: int

    class Config:
        from_attributes = True


class StoreResponse(BaseModel):
    """Schema for store response"""
    store_id: int
    store_name: str
    address: Optional[str] = None
    city_id: int

    class Config:
        from_attributes = True


class StoreTimingsResponse(BaseModel):
    """Today's schedule for a store"""
    storeid: int = Field(..., description="Requested store ID")
    day: str = Field(..., description="Lower-case English weekday name")
    timings: str = Field(..., description="Schedule string for the day")
    closed: bool = Field(..., description="Whether the store is marked closed")


class StateDescriptionResponse(BaseModel):
    """Free-text description of a state"""
    state_id: int
    state_name: str
    description: str


# ============================================================================
# Request Schemas
# ============================================================================
# Fields are optional so that a missing value is reported with a 400 and a
# specific message instead of a generic validation error.

class CitiesByStateRequest(BaseModel):
    state_id: Optional[int] = Field(None, description="State ID")


class StoresByCityRequest(BaseModel):
    cityid: Optional[int] = Field(None, description="City ID")


class StoresByCityNameRequest(BaseModel):
    cityname: Optional[str] = Field(None, max_length=100, description="City name")


class StoresByStateRequest(BaseModel):
    stateid: Optional[Union[int, str]] = Field(
        None, description="State ID, or a state name for older clients"
    )
    statename: Optional[str] = Field(None, max_length=100, description="State name")


class StoreTimingsRequest(BaseModel):
    storeid: Optional[int] = Field(None, description="Store ID")


class StateDescriptionRequest(BaseModel):
    """Any one of the three keys identifies the state"""
    state_id: Optional[int] = None
    state_name: Optional[str] = Field(None, max_length=100)
    city_name: Optional[str] = Field(None, max_length=100)
