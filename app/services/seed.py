from datetime import date
from decimal import Decimal

from pymongo.asynchronous.database import AsyncDatabase
from structlog import get_logger

from app.database import owners_collection, properties_collection
from app.models.owner import Owner
from app.models.property import Property
from app.repositories.owners import OwnerRepository
from app.repositories.properties import PropertyRepository

logger = get_logger()

SAMPLE_OWNERS = [
    Owner(name="Juan Pérez", address="Calle 72 #45-67, Bogotá", phone="+57 300 123 4567", birthday=date(1980, 5, 15)),
    Owner(name="María García", address="Carrera 50 #30-20, Medellín", phone="+57 301 987 6543", birthday=date(1975, 8, 22)),
    Owner(name="Carlos Rodríguez", address="Avenida 80 #25-40, Cali", phone="+57 302 456 7890", birthday=date(1985, 12, 3)),
]

# (owner index, name, address, price, image, year, code)
SAMPLE_PROPERTIES = [
    (0, "Apartamento Moderno Chapinero", "Carrera 13 #85-40, Chapinero, Bogotá", "450000000",
     "https://images.unsplash.com/photo-1545324418-cc1a3fa10c00?w=500", 2020, 100001),
    (1, "Casa Campestre Envigado", "Calle 25 Sur #48-30, Envigado", "800000000",
     "https://images.unsplash.com/photo-1564013799919-ab600027ffc6?w=500", 2018, 100002),
    (2, "Penthouse Granada", "Avenida 9N #10-25, Granada, Cali", "650000000",
     "https://images.unsplash.com/photo-1600596542815-ffad4c1539a9?w=500", 2021, 100003),
    (0, "Estudio Usaquén", "Calle 119 #6-20, Usaquén, Bogotá", "280000000",
     "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=500", 2019, 100004),
]


async def seed_sample_data(db: AsyncDatabase) -> bool:
    """Insert sample owners and properties when the Owners collection is empty.

    Returns True when data was inserted.
    """
    owners = OwnerRepository(owners_collection(db), properties_collection(db))
    properties = PropertyRepository(properties_collection(db))

    if await owners_collection(db).count_documents({}, limit=1) > 0:
        logger.info("Skipping sample data, owners already present")
        return False

    created = [await owners.create(owner) for owner in SAMPLE_OWNERS]
    for owner_index, name, address, price, image, year, code in SAMPLE_PROPERTIES:
        await properties.create(
            Property(
                name=name,
                address=address,
                price=Decimal(price),
                id_owner=created[owner_index].id,
                image=image,
                year=year,
                code_internal=code,
            )
        )
    logger.info("Inserted sample data", owners=len(created), properties=len(SAMPLE_PROPERTIES))
    return True
