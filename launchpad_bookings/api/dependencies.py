"""
FastAPI dependencies for database sessions and services.
"""
from typing import Generator
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from launchpad_bookings.database import DatabaseManager, get_database_manager, get_db_session
from launchpad_bookings.repositories import BookingRepository
from launchpad_bookings.services import AvailabilityService, BookingService


def get_db() -> Generator[Session, None, None]:
    """Dependency to get a request-scoped database session, committed on success."""
    session = get_db_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db_manager() -> DatabaseManager:
    """Dependency to get the database manager."""
    return get_database_manager()


def get_availability_service(request: Request) -> AvailabilityService:
    """Dependency to get the availability service built at startup."""
    return request.app.state.availability_service


def get_booking_service(
    request: Request,
    db: Session = Depends(get_db),
    availability: AvailabilityService = Depends(get_availability_service)
) -> BookingService:
    """Dependency to get a booking service bound to the request session."""
    return BookingService(
        BookingRepository(db),
        availability,
        clock=getattr(request.app.state, "clock", None)
    )
