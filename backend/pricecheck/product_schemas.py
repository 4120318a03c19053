from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional
import datetime

from .barcode import validate_ean13
from .errors import ValidationError


def check_barcode(value: str) -> str:
    """Pydantic-side barcode check; pydantic expects ValueError."""
    try:
        return validate_ean13(value)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc


Barcode = Annotated[str, AfterValidator(check_barcode)]


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0)
    barcode: Barcode


class Product(BaseModel):
    id: int
    name: str
    price: Optional[float] = None
    barcode: str
    scanned_at: Optional[datetime.date] = None

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
