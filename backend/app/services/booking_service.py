import logging
import math
from datetime import date
from decimal import Decimal
from typing import Any, List

from app.core.errors import NotFoundError
from app.models.domain import Listing, User
from app.models.schemas import BookingSchema, NewBooking
from app.storage.repository import SqlRepository

logger = logging.getLogger(__name__)

SERVICE_FEE_MULTIPLIER = Decimal("1.1")


def calculate_total_cost(start_date: date, end_date: date, nightly_price: Any) -> int:
    """Days are counted inclusively, so a same-day booking is charged as one day."""
    days = (end_date - start_date).days + 1
    return math.ceil(days * Decimal(str(nightly_price)) * SERVICE_FEE_MULTIPLIER)


class BookingService:
    def __init__(self, repository: SqlRepository):
        self.repository = repository

    def fetch_booking_by_id(self, booking_id: int) -> BookingSchema:
        booking = self.repository.get_booking(booking_id)
        if not booking:
            logger.debug("Booking %s not found", booking_id)
            raise NotFoundError("No booking found with that id.")
        return BookingSchema.from_domain(booking)

    def list_bookings_from_user(self, user: User) -> List[BookingSchema]:
        bookings = self.repository.list_bookings_by_creator(user.username)
        return [BookingSchema.from_domain(b) for b in bookings]

    def list_bookings_for_user_listings(self, user: User) -> List[BookingSchema]:
        bookings = self.repository.list_bookings_by_host(user.username)
        return [BookingSchema.from_domain(b) for b in bookings]

    def create_booking(
        self,
        new_booking: Any,
        listing: Listing,
        user: User,
    ) -> BookingSchema:
        # Listing ownership is checked by the caller.
        payload = NewBooking.from_payload(new_booking)

        creator = self.repository.get_user_by_username(user.username)
        if not creator:
            raise NotFoundError("No user found with that username.")

        booking_id = self.repository.save_booking(
            payment_method=payload.payment_method,
            start_date=payload.start_date,
            end_date=payload.end_date,
            guests=payload.guests,
            total_cost=calculate_total_cost(
                payload.start_date, payload.end_date, listing.price
            ),
            listing_id=listing.id,
            user_id=creator.id,
        )
        logger.info(
            "Booking %s created for listing %s by %s", booking_id, listing.id, user.username
        )
        return self.fetch_booking_by_id(booking_id)
