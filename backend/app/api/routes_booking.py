import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from app.api import get_current_user, get_repository
from app.core.errors import BadRequestError, ForbiddenError, NotFoundError
from app.models.domain import User
from app.models.schemas import (
    BookingListResponse,
    BookingResponse,
    CreateBookingRequest,
)
from app.services.booking_service import BookingService
from app.storage.repository import SqlRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def get_booking_service(
    repository: SqlRepository = Depends(get_repository),
) -> BookingService:
    return BookingService(repository=repository)


@router.get("", response_model=BookingListResponse)
def list_own_bookings(
    user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    return BookingListResponse(bookings=service.list_bookings_from_user(user))


@router.get("/listings", response_model=BookingListResponse)
def list_bookings_for_owned_listings(
    user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    return BookingListResponse(bookings=service.list_bookings_for_user_listings(user))


@router.post(
    "/listings/{listing_id}",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    listing_id: int,
    payload: Optional[CreateBookingRequest] = Body(None),
    user: User = Depends(get_current_user),
    repository: SqlRepository = Depends(get_repository),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    listing = repository.get_listing(listing_id)
    if not listing:
        raise NotFoundError("No listing found with that id.")
    if listing.user_id == user.id:
        logger.warning("User %s tried to book own listing %s", user.username, listing_id)
        raise BadRequestError("Users are not allowed to book their own listings.")
    booking = service.create_booking(
        new_booking=payload.new_booking if payload else None,
        listing=listing,
        user=user,
    )
    return BookingResponse(booking=booking)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = service.fetch_booking_by_id(booking_id)
    if user.username not in (booking.username, booking.host_username):
        raise ForbiddenError("Only the guest or the host can view this booking.")
    return BookingResponse(booking=booking)
