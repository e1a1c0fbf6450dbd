from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class User:
    id: int
    username: str


@dataclass
class Listing:
    id: int
    user_id: int
    price: Decimal


@dataclass
class Booking:
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
