from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
import datetime

from .product_schemas import Barcode


class PriceReportCreate(BaseModel):
    """A price seen by a user, sent together with where they saw it."""
    name: str = Field(min_length=1, max_length=200)
    barcode: Barcode
    price: float = Field(ge=0)
    store_id: int = Field(alias='storeID')
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = ConfigDict(populate_by_name=True)


class Comparison(BaseModel):
    """A price for the same product at a nearby store, relative to the reported price."""
    name: str
    price: float
    absolute_price_change: Optional[float] = None
    relative_price_change: Optional[float] = None  # fraction of the observed price
    date: Optional[datetime.date] = None
    store_name: Optional[str] = None
    distance: Optional[float] = None  # meters

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
