"""
Rating model.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Rating(Base):
    """Store rating submitted by a verified email address"""
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    store_id = Column("StoreID", Integer, ForeignKey("autoform.StoreID"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    mobile = Column(String(20), nullable=True)
    rating = Column(Integer, nullable=False)
    submitted_at = Column(DateTime, nullable=False)

    # Relationships
    store = relationship("Store")

    # One rating per email per store
    __table_args__ = (
        UniqueConstraint('email', 'StoreID', name='uq_rating_email_store'),
    )

    def __repr__(self):
        return f"<Rating(store_id={self.store_id}, email='{self.email}', rating={self.rating})>"
