from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StoreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    street_number: int
    street_name: str = Field(min_length=1, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    country_code: str = Field(min_length=2, max_length=2)  # ISO 3166-1 alpha-2
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Store(BaseModel):
    id: int
    name: str
    street_number: int
    street_name: str
    city: str
    country_code: str

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class StoreId(BaseModel):
    id: int
