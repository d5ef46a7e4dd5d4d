from typing import Generic, TypeVar

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from app.errors import ErrorKind

T = TypeVar("T")

_http_url = TypeAdapter(AnyHttpUrl)


class CamelModel(BaseModel):
    """Snake case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    data: T | None = None
    total: int | None = None
    page: int | None = None
    page_size: int | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T, message: str = "Operation completed successfully"):
        return cls(success=True, message=message, data=data)

    @classmethod
    def paged(cls, data: T, total: int, page: int, page_size: int, message: str = "Data retrieved successfully"):
        return cls(success=True, message=message, data=data, total=total, page=page, page_size=page_size)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str):
        return cls(success=False, message=message, error_kind=kind)


def validate_optional_url(value: str | None) -> str | None:
    """Accept None, an empty string, or an absolute http(s) URL."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return value
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("image must be a valid URL") from None
    return value
