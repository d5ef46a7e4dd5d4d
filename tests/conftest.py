from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import Decimal128, ObjectId

from app.models.owner import Owner
from app.models.property import Property


class FakeCursor:
    """Chainable stand-in for a pymongo cursor that applies skip/limit to a list."""

    def __init__(self, docs):
        self.docs = list(docs)
        self.sorted_by = None
        self.skipped = 0
        self.limited = None

    def sort(self, key, direction=1):
        self.sorted_by = (key, direction)
        return self

    def skip(self, count):
        self.skipped = count
        return self

    def limit(self, count):
        self.limited = count
        return self

    async def to_list(self, length=None):
        stop = None if self.limited is None else self.skipped + self.limited
        return self.docs[self.skipped:stop]


def fake_collection(docs=()):
    collection = MagicMock()
    collection.cursor = FakeCursor(docs)
    collection.find = MagicMock(return_value=collection.cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=len(docs))
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.replace_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


def property_document(name="Casa Campestre", address="Calle 25 Sur", price="100", owner_id=None, code=123456):
    return {
        "_id": ObjectId(),
        "name": name,
        "address": address,
        "price": Decimal128(price),
        "idOwner": owner_id or ObjectId(),
        "image": "",
        "year": 2020,
        "codeInternal": code,
    }


def make_owner(name="Juan Pérez", owner_id=None):
    return Owner(
        id=owner_id or str(ObjectId()),
        name=name,
        address="Calle 72 #45-67, Bogotá",
        phone="+57 300 123 4567",
        birthday=date(1980, 5, 15),
    )


def make_property(name="A", price="100", owner_id=None, code=123456):
    return Property(
        id=str(ObjectId()),
        name=name,
        address="Carrera 13 #85-40",
        price=Decimal(price),
        id_owner=owner_id or str(ObjectId()),
        image="",
        year=2020,
        code_internal=code,
    )


@pytest.fixture
def owner_repo():
    repo = MagicMock()
    repo.get_all = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_names = AsyncMock(return_value={})
    repo.get_name = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.update = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    repo.exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def property_repo():
    repo = MagicMock()
    repo.get_all = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_filtered = AsyncMock(return_value=([], 0))
    repo.create = AsyncMock(side_effect=lambda prop: prop.model_copy(update={"id": str(ObjectId())}))
    repo.update = AsyncMock(side_effect=lambda property_id, prop: prop.model_copy(update={"id": property_id}))
    repo.delete = AsyncMock(return_value=True)
    repo.exists = AsyncMock(return_value=True)
    return repo
