from decimal import Decimal
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Largest value a 32-bit INTEGER id column can hold
MAX_ID = 2**31 - 1

# Ids referenced from request bodies
RecordId = Annotated[int, Field(ge=1, le=MAX_ID)]

# Money values go out as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")]

class CamelModel(BaseModel):
    """Base model that reads ORM objects and speaks camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

class CampsiteType(CamelModel):
    id: int
    campsite_type_name: str
    max_reservation_days: int
    fee_per_night: Money

class CampsiteIn(CamelModel):
    """Body accepted when creating or replacing a campsite."""
    nickname: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    campsite_type_id: RecordId

class Campsite(CamelModel):
    id: int
    nickname: str
    image_url: Optional[str] = None
    campsite_type_id: int

class CampsiteDetail(Campsite):
    campsite_type: Optional[CampsiteType] = None
