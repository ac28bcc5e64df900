"""
Catalog API endpoints.

Read-only lookups of states, cities, stores, state descriptions and today's
store timings.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.geo_repository import (
    StateRepository,
    CityRepository,
    StoreRepository,
    TimingsRepository,
)
from app.schemas.geo import (
    StateResponse,
    CityResponse,
    StoreResponse,
    StoreTimingsResponse,
    StateDescriptionResponse,
    CitiesByStateRequest,
    StoresByCityRequest,
    StoresByCityNameRequest,
    StoresByStateRequest,
    StoreTimingsRequest,
    StateDescriptionRequest,
)

router = APIRouter(tags=["Catalog"])


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


@router.get("/autoform", response_model=List[StoreResponse])
def get_all_stores(db: Session = Depends(get_db)):
    """
    Get every store, ordered by name.

    An empty catalog is returned as an empty list.
    """
    return StoreRepository.get_all(db)


@router.get("/getallstate", response_model=List[StateResponse])
def get_all_states(db: Session = Depends(get_db)):
    """Get every state, ordered by name."""
    return StateRepository.get_all(db)


@router.get("/getallcities", response_model=List[CityResponse])
def get_all_cities(db: Session = Depends(get_db)):
    """Get every city, ordered by name."""
    return CityRepository.get_all(db)


@router.post("/getCitiesByState", response_model=List[CityResponse])
def get_cities_by_state(request: CitiesByStateRequest, db: Session = Depends(get_db)):
    """
    Get the cities of a state, ordered by name.

    Raises:
        HTTPException 400: If state_id is missing
        HTTPException 404: If the state has no cities
    """
    if not request.state_id:
        raise _bad_request("State ID is required")

    cities = CityRepository.get_by_state(db, request.state_id)
    if not cities:
        raise _not_found("No cities found for the given state ID")
    return cities


@router.post("/getStore", response_model=List[StoreResponse])
def get_stores_by_city(request: StoresByCityRequest, db: Session = Depends(get_db)):
    """
    Get the stores of a city, ordered by name.

    Raises:
        HTTPException 400: If cityid is missing
        HTTPException 404: If the city has no stores
    """
    if not request.cityid:
        raise _bad_request("City ID is required")

    stores = StoreRepository.get_by_city_id(db, request.cityid)
    if not stores:
        raise _not_found("No stores found for the given city ID")
    return stores


@router.post("/getStorebyname", response_model=List[StoreResponse])
def get_stores_by_city_name(request: StoresByCityNameRequest, db: Session = Depends(get_db)):
    """Get the stores of a city looked up by name."""
    if not request.cityname or not request.cityname.strip():
        raise _bad_request("City name is required")

    stores = StoreRepository.get_by_city_name(db, request.cityname.strip())
    if not stores:
        raise _not_found("No stores found for the given city name")
    return stores


@router.post("/getStorebyState", response_model=List[StoreResponse])
def get_stores_by_state(request: StoresByStateRequest, db: Session = Depends(get_db)):
    """
    Get the stores of a state.

    The state is identified by `stateid` or `statename`. A non-numeric
    `stateid` is treated as a state name.
    """
    stateid = request.stateid
    if isinstance(stateid, str):
        stateid = stateid.strip()
        if stateid.isdigit():
            stateid = int(stateid)

    if isinstance(stateid, int) and stateid:
        stores = StoreRepository.get_by_state_id(db, stateid)
    elif stateid or (request.statename and request.statename.strip()):
        stores = StoreRepository.get_by_state_name(db, stateid or request.statename.strip())
    else:
        raise _bad_request("State ID or state name is required")

    if not stores:
        raise _not_found("No stores found for the given state")
    return stores


@router.post("/getStoreTimings", response_model=StoreTimingsResponse)
def get_store_timings(request: StoreTimingsRequest, db: Session = Depends(get_db)):
    """
    Get today's opening schedule for a store.

    Raises:
        HTTPException 400: If storeid is missing
        HTTPException 404: If the store has no schedule for today
    """
    if not request.storeid:
        raise _bad_request("Store ID is required")

    timings = TimingsRepository.get_today(db, request.storeid)
    if timings is None:
        raise _not_found("No timings found for this store")

    return StoreTimingsResponse(storeid=request.storeid, **timings)


@router.post("/getStateDescription", response_model=StateDescriptionResponse)
def get_state_description(request: StateDescriptionRequest, db: Session = Depends(get_db)):
    """Get the description of a state identified by id, name, or one of its cities."""
    if not (request.state_id or request.state_name or request.city_name):
        raise _bad_request("State ID, state name or city name is required")

    state = StateRepository.find(
        db,
        state_id=request.state_id or None,
        state_name=request.state_name,
        city_name=request.city_name,
    )
    if state is None or not state.description:
        raise _not_found("No description found")

    return StateDescriptionResponse(
        state_id=state.state_id,
        state_name=state.state_name,
        description=state.description,
    )
