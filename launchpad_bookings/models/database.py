"""
SQLAlchemy database models for the launch pad bookings service.
"""
from sqlalchemy import Column, String, Date, DateTime, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Booking(Base):
    """SQLAlchemy model for bookings table."""
    __tablename__ = 'bookings'

    id = Column(String(36), primary_key=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    gender = Column(String(20), nullable=False)
    birthday = Column(Date, nullable=False)
    launch_pad_id = Column(String(255), nullable=False, index=True)
    destination_id = Column(String(255), nullable=False, index=True)
    launch_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_booking_pad_date', 'launch_pad_id', 'launch_date'),
    )

    def __repr__(self):
        return f"<Booking(id='{self.id}', launch_pad_id='{self.launch_pad_id}', launch_date='{self.launch_date}')>"
