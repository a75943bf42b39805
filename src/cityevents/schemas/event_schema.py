import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    date: datetime.date
    url: str = Field(..., max_length=500)
    # JSON uses camelCase "cityId"; Python code uses city_id
    city_id: int = Field(..., alias="cityId")

    model_config = ConfigDict(populate_by_name=True)


class EventUpdate(EventBase):
    # Accepted for symmetry with EventOut; the path id is authoritative
    id: Optional[int] = None


class EventOut(EventBase):
    id: int

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
