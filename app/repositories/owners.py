from pymongo import ASCENDING
from pymongo.asynchronous.collection import AsyncCollection
from structlog import get_logger

from app.database import parse_object_id
from app.errors import OwnerHasPropertiesError
from app.models.owner import Owner

logger = get_logger()


class OwnerRepository:
    """CRUD over the Owners collection.

    Malformed ids are treated as missing records: lookups return None and
    write/exists checks return False.
    """

    def __init__(self, owners: AsyncCollection, properties: AsyncCollection):
        self.owners = owners
        self.properties = properties

    async def get_all(self) -> list[Owner]:
        docs = await self.owners.find({}).sort("name", ASCENDING).to_list(length=None)
        return [Owner.from_document(doc) for doc in docs]

    async def get_by_id(self, owner_id: str) -> Owner | None:
        oid = parse_object_id(owner_id)
        if oid is None:
            return None
        doc = await self.owners.find_one({"_id": oid})
        return Owner.from_document(doc) if doc else None

    async def get_names(self, owner_ids) -> dict[str, str]:
        """Fetch owner names in one round trip, keyed by id string.

        Only the name is read, so an owner document with other fields missing
        or corrupt still resolves. Documents without a usable name are left
        out and read as missing owners.
        """
        oids = {oid for oid in (parse_object_id(i) for i in owner_ids) if oid is not None}
        if not oids:
            return {}
        docs = await self.owners.find({"_id": {"$in": list(oids)}}, {"name": 1}).to_list(length=None)
        return {
            str(doc["_id"]): doc["name"]
            for doc in docs
            if isinstance(doc.get("name"), str) and doc["name"]
        }

    async def get_name(self, owner_id: str) -> str | None:
        oid = parse_object_id(owner_id)
        if oid is None:
            return None
        return (await self.get_names([oid])).get(str(oid))

    async def create(self, owner: Owner) -> Owner:
        doc = owner.to_document()
        doc.pop("_id", None)
        result = await self.owners.insert_one(doc)
        return owner.model_copy(update={"id": str(result.inserted_id)})

    async def update(self, owner_id: str, owner: Owner) -> Owner | None:
        oid = parse_object_id(owner_id)
        if oid is None:
            return None
        doc = owner.to_document()
        doc["_id"] = oid
        result = await self.owners.replace_one({"_id": oid}, doc)
        if result.matched_count == 0:
            return None
        return owner.model_copy(update={"id": owner_id})

    async def delete(self, owner_id: str) -> bool:
        oid = parse_object_id(owner_id)
        if oid is None:
            return False
        referencing = await self.properties.count_documents({"idOwner": oid})
        if referencing > 0:
            logger.warning("Owner delete blocked", owner_id=owner_id, property_count=referencing)
            raise OwnerHasPropertiesError(owner_id, referencing)
        result = await self.owners.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def exists(self, owner_id: str) -> bool:
        oid = parse_object_id(owner_id)
        if oid is None:
            return False
        return await self.owners.count_documents({"_id": oid}, limit=1) > 0
