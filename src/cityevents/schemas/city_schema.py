from pydantic import BaseModel, ConfigDict, Field


class CityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CityCreate(CityBase):
    pass


class CityOut(CityBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
