from datetime import date
from decimal import Decimal

import pytest

from app.core.errors import BadRequestError, NotFoundError
from app.services.booking_service import calculate_total_cost
from app.storage.tables import UserRow


def _book(service, listing, user, start="2021-03-05", end="2021-03-07", **extra):
    return service.create_booking(
        new_booking={"startDate": start, "endDate": end, **extra},
        listing=listing,
        user=user,
    )


def test_total_cost_counts_both_endpoints():
    assert calculate_total_cost(date(2021, 7, 5), date(2021, 7, 6), 100) == 220


def test_total_cost_same_day_is_one_day():
    assert calculate_total_cost(date(2021, 7, 5), date(2021, 7, 5), 100) == 110


def test_total_cost_rounds_up():
    assert calculate_total_cost(date(2021, 7, 1), date(2021, 7, 3), Decimal("33.33")) == 110


def test_create_booking_applies_defaults_and_enrichment(service, users, listings):
    booking = service.create_booking(
        new_booking={"startDate": "2021-07-05", "endDate": "2021-07-06"},
        listing=listings["lebron"],
        user=users["jlo"],
    )

    assert booking.id
    assert booking.total_cost == 220
    assert booking.payment_method == "card"
    assert booking.guests == 1
    assert booking.username == "jlo"
    assert booking.host_username == "lebron"
    assert booking.user_id == users["jlo"].id
    assert booking.listing_id == listings["lebron"].id
    assert booking.created_at is not None


def test_create_booking_keeps_supplied_optionals(service, users, listings):
    booking = _book(
        service, listings["lebron"], users["jlo"], paymentMethod="paypal", guests=3
    )

    assert booking.payment_method == "paypal"
    assert booking.guests == 3


def test_create_booking_accepts_iso_datetimes(service, users, listings):
    booking = _book(
        service,
        listings["lebron"],
        users["jlo"],
        start="2021-07-05T00:00:00.000Z",
        end="2021-07-06T00:00:00.000Z",
    )

    assert booking.start_date == date(2021, 7, 5)
    assert booking.end_date == date(2021, 7, 6)


@pytest.mark.parametrize(
    "payload, missing",
    [
        ({"endDate": "2021-07-06"}, "startDate"),
        ({"startDate": "2021-07-05"}, "endDate"),
        ({}, "startDate"),
        (None, "startDate"),
        ("x", "startDate"),
        (["2021-07-05"], "startDate"),
    ],
)
def test_create_booking_requires_dates(service, users, listings, payload, missing):
    with pytest.raises(BadRequestError) as exc_info:
        service.create_booking(
            new_booking=payload, listing=listings["lebron"], user=users["jlo"]
        )

    assert exc_info.value.message == f"Missing {missing} in newBooking."


def test_create_booking_rejects_unparseable_date(service, users, listings):
    with pytest.raises(BadRequestError):
        _book(service, listings["lebron"], users["jlo"], start="not-a-date")


def test_create_booking_does_not_reject_reversed_range(service, users, listings):
    booking = _book(
        service, listings["lebron"], users["jlo"], start="2021-07-06", end="2021-07-05"
    )

    assert booking.total_cost == 0


def test_fetch_booking_by_id_missing(service, users):
    with pytest.raises(NotFoundError):
        service.fetch_booking_by_id(999)


def test_list_bookings_from_user_newest_first(service, users, listings):
    first = _book(service, listings["lebron"], users["jlo"])
    second = _book(service, listings["serena"], users["jlo"])
    _book(service, listings["serena"], users["lebron"])

    bookings = service.list_bookings_from_user(users["jlo"])

    assert [b.id for b in bookings] == [second.id, first.id]
    assert {b.host_username for b in bookings} == {"lebron", "serena"}
    assert all(b.username == "jlo" for b in bookings)


def test_list_bookings_for_user_listings(service, users, listings):
    first = _book(service, listings["lebron"], users["jlo"])
    second = _book(service, listings["lebron"], users["serena"])
    _book(service, listings["serena"], users["jlo"])

    bookings = service.list_bookings_for_user_listings(users["lebron"])

    assert [b.id for b in bookings] == [second.id, first.id]
    assert all(b.host_username == "lebron" for b in bookings)
    assert service.list_bookings_for_user_listings(users["jlo"]) == []


def test_enrichment_reflects_current_usernames(service, session, users, listings):
    booking = _book(service, listings["lebron"], users["jlo"])

    session.get(UserRow, users["lebron"].id).username = "king_james"
    session.commit()

    assert service.fetch_booking_by_id(booking.id).host_username == "king_james"
