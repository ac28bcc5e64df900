"""
Repository layer for the State, City, Store catalog and store timings.
Read-only queries over reference data maintained outside this API.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.geo import State, City, Store, Timings


class Weekday(str, Enum):
    """Lower-case English weekday names, Monday first."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


# Timings keeps one column per weekday
TIMINGS_COLUMNS = {
    Weekday.MONDAY: Timings.monday,
    Weekday.TUESDAY: Timings.tuesday,
    Weekday.WEDNESDAY: Timings.wednesday,
    Weekday.THURSDAY: Timings.thursday,
    Weekday.FRIDAY: Timings.friday,
    Weekday.SATURDAY: Timings.saturday,
    Weekday.SUNDAY: Timings.sunday,
}


class StateRepository:
    """Repository for State operations"""

    @staticmethod
    def get_all(db: Session) -> List[State]:
        """Get all states ordered by name"""
        return db.query(State).order_by(State.state_name).all()

    @staticmethod
    def get_by_id(db: Session, state_id: int) -> Optional[State]:
        """Get state by ID"""
        return db.query(State).filter(State.state_id == state_id).first()

    @staticmethod
    def get_by_name(db: Session, state_name: str) -> Optional[State]:
        """Get state by name"""
        return db.query(State).filter(State.state_name == state_name).first()

    @staticmethod
    def get_by_city_name(db: Session, city_name: str) -> Optional[State]:
        """Get the state a named city belongs to"""
        return (
            db.query(State)
            .join(City, City.state_id == State.state_id)
            .filter(City.city_name == city_name)
            .first()
        )

    @staticmethod
    def find(
        db: Session,
        state_id: Optional[int] = None,
        state_name: Optional[str] = None,
        city_name: Optional[str] = None,
    ) -> Optional[State]:
        """Resolve a state from whichever identifier was supplied, in that order of preference"""
        if state_id is not None:
            return StateRepository.get_by_id(db, state_id)
        if state_name:
            return StateRepository.get_by_name(db, state_name)
        if city_name:
            return StateRepository.get_by_city_name(db, city_name)
        return None


class CityRepository:
    """Repository for City operations"""

    @staticmethod
    def get_all(db: Session) -> List[City]:
        """Get all cities ordered by name"""
        return db.query(City).order_by(City.city_name).all()

    @staticmethod
    def get_by_state(db: Session, state_id: int) -> List[City]:
        """Get cities of a state ordered by name"""
        return (
            db.query(City)
            .filter(City.state_id == state_id)
            .order_by(City.city_name)
            .all()
        )


class StoreRepository:
    """Repository for Store operations"""

    @staticmethod
    def get_all(db: Session) -> List[Store]:
        """Get all stores ordered by name"""
        return db.query(Store).order_by(Store.store_name).all()

    @staticmethod
    def get_by_id(db: Session, store_id: int) -> Optional[Store]:
        """Get store by ID"""
        return db.query(Store).filter(Store.store_id == store_id).first()

    @staticmethod
    def get_by_city_id(db: Session, city_id: int) -> List[Store]:
        """Get stores of a city ordered by name"""
        return (
            db.query(Store)
            .filter(Store.city_id == city_id)
            .order_by(Store.store_name)
            .all()
        )

    @staticmethod
    def get_by_city_name(db: Session, city_name: str) -> List[Store]:
        """Get stores of every city with the given name"""
        city_ids = db.query(City.city_id).filter(City.city_name == city_name)
        return (
            db.query(Store)
            .filter(Store.city_id.in_(city_ids.scalar_subquery()))
            .order_by(Store.store_name)
            .all()
        )

    @staticmethod
    def get_by_state_id(db: Session, state_id: int) -> List[Store]:
        """Get stores in any city of a state"""
        city_ids = db.query(City.city_id).filter(City.state_id == state_id)
        return (
            db.query(Store)
            .filter(Store.city_id.in_(city_ids.scalar_subquery()))
            .order_by(Store.store_name)
            .all()
        )

    @staticmethod
    def get_by_state_name(db: Session, state_name: str) -> List[Store]:
        """Get stores in any city of the named state"""
        city_ids = (
            db.query(City.city_id)
            .join(State, State.state_id == City.state_id)
            .filter(State.state_name == state_name)
        )
        return (
            db.query(Store)
            .filter(Store.city_id.in_(city_ids.scalar_subquery()))
            .order_by(Store.store_name)
            .all()
        )


class TimingsRepository:
    """Repository for store opening schedules"""

    @staticmethod
    def get_for_day(db: Session, store_id: int, day: Weekday) -> Optional[dict]:
        """
        Get a store's schedule for one weekday.

        Returns:
            Dict with timings and closed flag, or None when the store has no
            timings row or no schedule for that day
        """
        row = (
            db.query(TIMINGS_COLUMNS[day].label("timings"), Timings.closed)
            .filter(Timings.store_id == store_id)
            .first()
        )
        if row is None or row.timings is None:
            return None

        return {"timings": row.timings, "closed": bool(row.closed)}

    @staticmethod
    def get_today(db: Session, store_id: int, today: Optional[date] = None) -> Optional[dict]:
        """Get a store's schedule for the current weekday"""
        day = Weekday.for_date(today or date.today())
        timings = TimingsRepository.get_for_day(db, store_id, day)
        if timings is None:
            return None

        return {"day": day.value, **timings}
