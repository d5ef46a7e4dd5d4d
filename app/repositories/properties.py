import re

from bson import Decimal128
from pymongo import ASCENDING
from pymongo.asynchronous.collection import AsyncCollection

from app.database import parse_object_id
from app.models.property import Property
from app.schemas.property import PropertySearchFilter


def _contains(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


def build_property_filter(search: PropertySearchFilter) -> dict:
    """Translate a search filter into a MongoDB query document.

    Text filters are case-insensitive literal substrings; price bounds are
    inclusive. Absent or empty filters add no clause, and no clauses means
    every property matches.
    """
    clauses = []
    if search.name:
        clauses.append({"name": _contains(search.name)})
    if search.address:
        clauses.append({"address": _contains(search.address)})

    price = {}
    if search.min_price is not None:
        price["$gte"] = Decimal128(search.min_price)
    if search.max_price is not None:
        price["$lte"] = Decimal128(search.max_price)
    if price:
        clauses.append({"price": price})

    if not clauses:
        return {}
    return {"$and": clauses}


class PropertyRepository:
    def __init__(self, properties: AsyncCollection):
        self.properties = properties

    async def get_all(self) -> list[Property]:
        docs = await self.properties.find({}).sort("_id", ASCENDING).to_list(length=None)
        return [Property.from_document(doc) for doc in docs]

    async def get_by_id(self, property_id: str) -> Property | None:
        oid = parse_object_id(property_id)
        if oid is None:
            return None
        doc = await self.properties.find_one({"_id": oid})
        return Property.from_document(doc) if doc else None

    async def get_filtered(self, search: PropertySearchFilter) -> tuple[list[Property], int]:
        query = build_property_filter(search)
        total = await self.properties.count_documents(query)
        # Sorting by _id keeps page windows stable between calls.
        cursor = (
            self.properties.find(query)
            .sort("_id", ASCENDING)
            .skip(search.skip)
            .limit(search.page_size)
        )
        docs = await cursor.to_list(length=None)
        return [Property.from_document(doc) for doc in docs], total

    async def create(self, prop: Property) -> Property:
        doc = prop.to_document()
        doc.pop("_id", None)
        result = await self.properties.insert_one(doc)
        return prop.model_copy(update={"id": str(result.inserted_id)})

    async def update(self, property_id: str, prop: Property) -> Property | None:
        oid = parse_object_id(property_id)
        if oid is None:
            return None
        doc = prop.to_document()
        doc["_id"] = oid
        result = await self.properties.replace_one({"_id": oid}, doc)
        if result.matched_count == 0:
            return None
        return prop.model_copy(update={"id": property_id})

    async def delete(self, property_id: str) -> bool:
        oid = parse_object_id(property_id)
        if oid is None:
            return False
        result = await self.properties.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def exists(self, property_id: str) -> bool:
        oid = parse_object_id(property_id)
        if oid is None:
            return False
        return await self.properties.count_documents({"_id": oid}, limit=1) > 0

