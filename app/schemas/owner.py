from datetime import date

from pydantic import Field

from app.schemas.common import CamelModel

PHONE_PATTERN = r"^\+?[0-9\s()\-]{7,20}$"


class OwnerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    birthday: date


class OwnerUpdate(CamelModel):
    # Empty strings are accepted and treated as "not supplied" by the service.
    name: str | None = Field(None, max_length=100)
    address: str | None = Field(None, max_length=200)
    phone: str | None = Field(None, pattern=r"^$|" + PHONE_PATTERN)
    birthday: date | None = None


class OwnerResponse(CamelModel):
    id: str
    name: str
    address: str
    phone: str
    birthday: date
