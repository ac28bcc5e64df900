"""
State, City, Store and Timings models.
Reference data for the store locator; maintained outside this API.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class State(Base):
    """State/Region model"""
    __tablename__ = "states"

    state_id = Column("StateID", Integer, primary_key=True, index=True, autoincrement=True)
    state_name = Column("statename", String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)

    # Relationships
    cities = relationship("City", back_populates="state")

    def __repr__(self):
        return f"<State(state_id={self.state_id}, name='{self.state_name}')>"


class City(Base):
    """City model - belongs to exactly one state"""
    __tablename__ = "cities"

    city_id = Column("CityID", Integer, primary_key=True, index=True, autoincrement=True)
    city_name = Column("cityname", String(100), nullable=False, index=True)
    state_id = Column("StateID", Integer, ForeignKey("states.StateID"), nullable=False, index=True)

    # Relationships
    state = relationship("State", back_populates="cities")
    stores = relationship("Store", back_populates="city")

    def __repr__(self):
        return f"<City(city_id={self.city_id}, name='{self.city_name}')>"


class Store(Base):
    """Store model - physical retail outlets (stored in the autoform table)"""
    __tablename__ = "autoform"

    store_id = Column("StoreID", Integer, primary_key=True, index=True, autoincrement=True)
    store_name = Column("storename", String(255), nullable=False, index=True)
    address = Column(Text, nullable=True)
    city_id = Column("CityID", Integer, ForeignKey("cities.CityID"), nullable=False, index=True)

    # Relationships
    city = relationship("City", back_populates="stores")
    timings = relationship("Timings", back_populates="store", uselist=False)

    def __repr__(self):
        return f"<Store(store_id={self.store_id}, name='{self.store_name}')>"


class Timings(Base):
    """
    Opening schedule for a store.

    One row per store with one column per weekday; the column for today is
    picked at request time.
    """
    __tablename__ = "timings"

    store_id = Column("StoreID", Integer, ForeignKey("autoform.StoreID"), primary_key=True)
    monday = Column(String(100), nullable=True)
    tuesday = Column(String(100), nullable=True)
    wednesday = Column(String(100), nullable=True)
    thursday = Column(String(100), nullable=True)
    friday = Column(String(100), nullable=True)
    saturday = Column(String(100), nullable=True)
    sunday = Column(String(100), nullable=True)
    closed = Column("Closed", Boolean, default=False, nullable=False)

    # Relationships
    store = relationship("Store", back_populates="timings")

    def __repr__(self):
        return f"<Timings(store_id={self.store_id}, closed={self.closed})>"
