from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Select, select, text
from sqlalchemy.orm import Session, aliased

from app.models.domain import Booking, Listing, User
from app.storage.tables import BookingRow, ListingRow, UserRow

Creator = aliased(UserRow, name="creator")
Host = aliased(UserRow, name="host")


def _enriched_bookings() -> Select:
    """Bookings joined to the creator and, through the listing, to the host."""
    return (
        select(BookingRow, Creator.username, Host.username)
        .join(Creator, Creator.id == BookingRow.user_id)
        .join(ListingRow, ListingRow.id == BookingRow.listing_id)
        .join(Host, Host.id == ListingRow.user_id)
    )


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(BookingRow.created_at.desc(), BookingRow.id.desc())


def _to_booking(row: BookingRow, username: str, host_username: str) -> Booking:
    return Booking(
        id=row.id,
        payment_method=row.payment_method,
        start_date=row.start_date,
        end_date=row.end_date,
        guests=row.guests,
        total_cost=row.total_cost,
        listing_id=row.listing_id,
        user_id=row.user_id,
        username=username,
        host_username=host_username,
        created_at=row.created_at,
    )


class SqlRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def ping(self) -> None:
        self.session.execute(text("SELECT 1"))

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        stmt = _enriched_bookings().where(BookingRow.id == booking_id)
        result = self.session.execute(stmt).first()
        return _to_booking(*result) if result else None

    def list_bookings_by_creator(self, username: str) -> List[Booking]:
        stmt = _newest_first(_enriched_bookings().where(Creator.username == username))
        return [_to_booking(*r) for r in self.session.execute(stmt).all()]

    def list_bookings_by_host(self, username: str) -> List[Booking]:
        stmt = _newest_first(_enriched_bookings().where(Host.username == username))
        return [_to_booking(*r) for r in self.session.execute(stmt).all()]

    def save_booking(
        self,
        payment_method: str,
        start_date: date,
        end_date: date,
        guests: int,
        total_cost: int,
        listing_id: int,
        user_id: int,
    ) -> int:
        row = BookingRow(
            payment_method=payment_method,
            start_date=start_date,
            end_date=end_date,
            guests=guests,
            total_cost=total_cost,
            listing_id=listing_id,
            user_id=user_id,
        )
        self.session.add(row)
        self.session.commit()
        return row.id

    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self.session.scalars(
            select(UserRow).where(UserRow.username == username)
        ).first()
        return User(id=row.id, username=row.username) if row else None

    def get_listing(self, listing_id: int) -> Optional[Listing]:
        row = self.session.get(ListingRow, listing_id)
        return Listing(id=row.id, user_id=row.user_id, price=row.price) if row else None

    def add_user(self, username: str) -> User:
        row = UserRow(username=username)
        self.session.add(row)
        self.session.commit()
        return User(id=row.id, username=row.username)

    def add_listing(self, user_id: int, price: Decimal | int | float) -> Listing:
        row = ListingRow(user_id=user_id, price=Decimal(str(price)))
        self.session.add(row)
        self.session.commit()
        return Listing(id=row.id, user_id=row.user_id, price=row.price)

