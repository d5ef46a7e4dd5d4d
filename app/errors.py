from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class OwnerHasPropertiesError(Exception):
    """Raised when deleting an owner that is still referenced by properties."""

    def __init__(self, owner_id: str, property_count: int):
        self.owner_id = owner_id
        self.property_count = property_count
        super().__init__(
            f"Owner {owner_id} is referenced by {property_count} existing properties"
        )


class DatabaseUnavailableError(RuntimeError):
    """Raised when the store is used before a client is connected."""
