from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from app.database import get_database, owners_collection, properties_collection
from app.repositories.owners import OwnerRepository
from app.repositories.properties import PropertyRepository
from app.services.owners import OwnerService
from app.services.properties import PropertyService


def get_owner_repository(db: AsyncDatabase = Depends(get_database)) -> OwnerRepository:
    return OwnerRepository(owners_collection(db), properties_collection(db))


def get_property_repository(db: AsyncDatabase = Depends(get_database)) -> PropertyRepository:
    return PropertyRepository(properties_collection(db))


def get_owner_service(owners: OwnerRepository = Depends(get_owner_repository)) -> OwnerService:
    return OwnerService(owners)


def get_property_service(
    properties: PropertyRepository = Depends(get_property_repository),
    owners: OwnerRepository = Depends(get_owner_repository),
) -> PropertyService:
    return PropertyService(properties, owners)
