from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from app.core.errors import BadRequestError
from app.models.domain import Booking

DEFAULT_PAYMENT_METHOD = "card"
DEFAULT_GUESTS = 1
REQUIRED_FIELDS = ("start_date", "end_date")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewBooking(CamelModel):
    start_date: date
    end_date: date
    payment_method: str = DEFAULT_PAYMENT_METHOD
    guests: int = DEFAULT_GUESTS

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def truncate_datetimes(cls, value: Any) -> Any:
        # Clients commonly send JS Date.toISOString() values.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    @field_validator("payment_method", mode="before")
    @classmethod
    def default_payment_method(cls, value: Any) -> Any:
        return value or DEFAULT_PAYMENT_METHOD

    @field_validator("guests", mode="before")
    @classmethod
    def default_guests(cls, value: Any) -> Any:
        return value or DEFAULT_GUESTS

    @classmethod
    def from_payload(cls, payload: Any) -> "NewBooking":
        """Validate a raw ``newBooking`` payload.

        Anything that is not a mapping is treated as an empty payload.
        Raises ``BadRequestError`` naming the first missing required field, or
        describing the first invalid value.
        """
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            payload = {}
        for name in REQUIRED_FIELDS:
            alias = to_camel(name)
            if alias not in payload and name not in payload:
                raise BadRequestError(f"Missing {alias} in newBooking.")
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            error = exc.errors()[0]
            location = ".".join(str(part) for part in error["loc"])
            raise BadRequestError(
                f"Invalid {location} in newBooking: {error['msg']}"
            ) from exc


class CreateBookingRequest(CamelModel):
    new_booking: Any = None


class BookingSchema(CamelModel):
    id: int
    payment_method: str
    start_date: date
    end_date: date
    guests: int
    total_cost: int
    listing_id: int
    user_id: int
    username: str
    host_username: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, obj: Booking) -> "BookingSchema":
        return cls(
            id=obj.id,
            payment_method=obj.payment_method,
            start_date=obj.start_date,
            end_date=obj.end_date,
            guests=obj.guests,
            total_cost=obj.total_cost,
            listing_id=obj.listing_id,
            user_id=obj.user_id,
            username=obj.username,
            host_username=obj.host_username,
            created_at=obj.created_at,
        )


class BookingResponse(BaseModel):
    booking: BookingSchema


class BookingListResponse(BaseModel):
    bookings: List[BookingSchema]
