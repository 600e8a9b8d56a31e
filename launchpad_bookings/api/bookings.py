"""
Booking endpoints for the FastAPI application.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError

from launchpad_bookings.api.dependencies import get_booking_service
from launchpad_bookings.api.responses import ErrorResponse
from launchpad_bookings.logging_config import get_logger
from launchpad_bookings.models.schemas import (
    BookingCreate,
    BookingFilters,
    BookingResponse,
    CreateBookingResponse,
    ListBookingsResponse,
)
from launchpad_bookings.services import BookingService
from launchpad_bookings.services.errors import (
    AvailabilityCheckError,
    BookingNotFoundError,
    DateUnavailableError,
)
from launchpad_bookings.spacex.errors import LaunchPadNotFoundError, caused_by

logger = get_logger(__name__, component="bookings_api")

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred"
    )


@router.post(
    "",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking",
    description="Book a launch pad for a date that has no scheduled launches.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Launch pad not found"},
        409: {"model": ErrorResponse, "description": "Date is unavailable"},
    }
)
async def create_booking(
    booking_in: BookingCreate,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Create a booking after checking launch pad availability."""
    try:
        booking = await booking_service.create_booking(booking_in)
    except DateUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="date is unavailable"
        )
    except AvailabilityCheckError as e:
        if caused_by(e, LaunchPadNotFoundError):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="launch pad with ID not found"
            )
        logger.error("Unable to create booking", error=str(e))
        raise _internal_error()
    except SQLAlchemyError as e:
        logger.error("Database error creating booking", error=str(e))
        raise _internal_error()

    return CreateBookingResponse(booking=BookingResponse.model_validate(booking))


@router.get(
    "",
    response_model=ListBookingsResponse,
    summary="List bookings",
    description="List bookings with pagination and optional filters."
)
async def list_bookings(
    offset: int = Query(0, ge=0, description="Number of bookings to skip"),
    limit: int = Query(10, ge=0, le=100, description="Number of bookings to return"),
    launch_date: Optional[date] = Query(None, description="Filter by launch date, YYYY-MM-DD"),
    launch_pad_id: Optional[str] = Query(None, description="Filter by launch pad ID"),
    destination_id: Optional[str] = Query(None, description="Filter by destination ID"),
    booking_service: BookingService = Depends(get_booking_service)
):
    """List bookings."""
    filters = BookingFilters(
        launch_date=launch_date,
        launch_pad_id=launch_pad_id or None,
        destination_id=destination_id or None
    )
    try:
        bookings = booking_service.list_bookings(filters, offset=offset, limit=limit)
    except SQLAlchemyError as e:
        logger.error("Database error listing bookings", error=str(e))
        raise _internal_error()

    return ListBookingsResponse(
        bookings=[BookingResponse.model_validate(booking) for booking in bookings]
    )


@router.get(
    "/{booking_id}",
    response_model=CreateBookingResponse,
    summary="Get a booking",
    responses={404: {"model": ErrorResponse, "description": "Booking not found"}}
)
async def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Get a booking by ID."""
    try:
        booking = booking_service.get_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking '{booking_id}' not found"
        )
    except SQLAlchemyError as e:
        logger.error("Database error getting booking", error=str(e))
        raise _internal_error()

    return CreateBookingResponse(booking=BookingResponse.model_validate(booking))


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a booking",
    responses={404: {"model": ErrorResponse, "description": "Booking not found"}}
)
async def delete_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Delete a booking by ID."""
    try:
        booking_service.delete_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking '{booking_id}' not found"
        )
    except SQLAlchemyError as e:
        logger.error("Database error deleting booking", error=str(e))
        raise _internal_error()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
