from datetime import date
from decimal import Decimal

from pydantic import Field, field_validator

from app.config import settings
from app.schemas.common import CamelModel, validate_optional_url


def _current_year() -> int:
    return date.today().year


class PropertyCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., gt=0, max_digits=20, decimal_places=2)
    id_owner: str = Field(..., min_length=1)
    image: str = ""
    year: int = Field(default_factory=_current_year, ge=1900, le=2100)

    @field_validator("image")
    @classmethod
    def check_image(cls, value: str) -> str:
        return validate_optional_url(value)


class PropertyUpdate(CamelModel):
    """Partial update payload. idOwner and codeInternal are not updatable."""

    name: str | None = Field(None, max_length=100)
    address: str | None = Field(None, max_length=200)
    price: Decimal | None = Field(None, gt=0, max_digits=20, decimal_places=2)
    image: str | None = None
    year: int | None = Field(None, ge=1900, le=2100)

    @field_validator("image")
    @classmethod
    def check_image(cls, value: str | None) -> str | None:
        return validate_optional_url(value)


class PropertyResponse(CamelModel):
    id: str
    id_owner: str
    name: str
    address: str
    price: Decimal
    image: str
    year: int
    code_internal: int
    owner_name: str


class PropertySearchFilter(CamelModel):
    name: str | None = None
    address: str | None = None
    min_price: Decimal | None = Field(None, ge=0, max_digits=20, decimal_places=2)
    max_price: Decimal | None = Field(None, ge=0, max_digits=20, decimal_places=2)
    page: int = Field(1, ge=1)
    page_size: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size
