from datetime import date, datetime, time, timezone

from pydantic import BaseModel

from app.database import parse_object_id


def date_to_bson(value: date) -> datetime:
    # BSON has no date type; store midnight UTC.
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def date_from_bson(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class Owner(BaseModel):
    id: str | None = None
    name: str
    address: str
    phone: str = ""
    birthday: date

    @classmethod
    def from_document(cls, doc: dict) -> "Owner":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            address=doc.get("address", ""),
            phone=doc.get("phone", ""),
            birthday=date_from_bson(doc.get("birthday")),
        )

    def to_document(self) -> dict:
        doc = {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "birthday": date_to_bson(self.birthday),
        }
        oid = parse_object_id(self.id)
        if oid is not None:
            doc["_id"] = oid
        return doc
