from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field, model_validator

from src.models.campsite import CamelModel, CampsiteDetail, Money, RecordId

# Charged once per reservation regardless of its length
BASE_RESERVATION_FEE = Decimal("10")

def calculate_total_nights(checkin_date, checkout_date):
    """Whole days between checkin and checkout; a partial day does not count."""
    delta = checkout_date - checkin_date
    if delta.days < 0:
        # Truncate toward zero so a span of -1.5 days counts as -1
        return -((-delta).days)
    return delta.days

def calculate_total_cost(fee_per_night, total_nights):
    return Decimal(fee_per_night) * total_nights + BASE_RESERVATION_FEE

class UserProfile(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str

class ReservationIn(CamelModel):
    """Body accepted when booking a campsite."""
    campsite_id: RecordId
    user_profile_id: RecordId
    checkin_date: datetime
    checkout_date: datetime

    @model_validator(mode="after")
    def drop_timezone(self):
        # Timestamps are stored as naive local times
        self.checkin_date = self.checkin_date.replace(tzinfo=None)
        self.checkout_date = self.checkout_date.replace(tzinfo=None)
        return self

    @property
    def total_nights(self):
        return calculate_total_nights(self.checkin_date, self.checkout_date)

class Reservation(CamelModel):
    id: int
    campsite_id: int
    campsite: Optional[CampsiteDetail] = None
    user_profile_id: int
    user_profile: Optional[UserProfile] = None
    checkin_date: datetime
    checkout_date: datetime
    total_nights: int = Field(..., description="Whole nights between checkin and checkout")
    total_cost: Optional[Money] = Field(None, description="Nightly fee times nights plus the base reservation fee")
