from decimal import Decimal

from bson import Decimal128, ObjectId
from pydantic import BaseModel

from app.database import parse_object_id


def decimal_from_bson(value) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


class Property(BaseModel):
    id: str | None = None
    name: str
    address: str
    price: Decimal
    id_owner: str
    image: str = ""
    year: int
    code_internal: int = 0

    @classmethod
    def from_document(cls, doc: dict) -> "Property":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            address=doc.get("address", ""),
            price=decimal_from_bson(doc.get("price")),
            id_owner=str(doc.get("idOwner", "")),
            image=doc.get("image") or "",
            year=int(doc.get("year", 0)),
            code_internal=int(doc.get("codeInternal", 0)),
        )

    def to_document(self) -> dict:
        doc = {
            "name": self.name,
            "address": self.address,
            "price": Decimal128(self.price),
            "idOwner": owner_reference(self.id_owner),
            "image": self.image,
            "year": self.year,
            "codeInternal": self.code_internal,
        }
        oid = parse_object_id(self.id)
        if oid is not None:
            doc["_id"] = oid
        return doc


def owner_reference(value: str) -> ObjectId | str:
    """Stored form of an owner reference used in property queries."""
    oid = parse_object_id(value)
    return oid if oid is not None else value
