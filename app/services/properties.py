"""Property orchestration: owner checks, internal codes and owner-name enrichment.

Every public method returns an ApiResponse envelope; store failures are
logged and reported as ErrorKind.INTERNAL instead of propagating.
"""
from pymongo.errors import DuplicateKeyError
from structlog import get_logger

from app.config import settings
from app.errors import ErrorKind
from app.models.property import Property
from app.repositories.owners import OwnerRepository
from app.repositories.properties import PropertyRepository
from app.schemas.common import ApiResponse
from app.schemas.property import PropertyCreate, PropertyResponse, PropertySearchFilter, PropertyUpdate
from app.services.codes import PropertyCodeGenerator, code_generator
from app.services.patching import apply_partial_update

logger = get_logger()

OWNER_NOT_FOUND = "owner not found"
PROPERTY_NOT_FOUND_MESSAGE = "Property not found"


def to_response(prop: Property, owner_name: str | None) -> PropertyResponse:
    return PropertyResponse(
        id=prop.id,
        id_owner=prop.id_owner,
        name=prop.name,
        address=prop.address,
        price=prop.price,
        image=prop.image,
        year=prop.year,
        code_internal=prop.code_internal,
        owner_name=owner_name or OWNER_NOT_FOUND,
    )


def _is_code_collision(error: DuplicateKeyError) -> bool:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    return "codeInternal" in key_pattern


class PropertyService:
    def __init__(
        self,
        properties: PropertyRepository,
        owners: OwnerRepository,
        codes: PropertyCodeGenerator = code_generator,
        max_code_attempts: int = settings.CODE_MAX_ATTEMPTS,
    ):
        self.properties = properties
        self.owners = owners
        self.codes = codes
        self.max_code_attempts = max(1, max_code_attempts)

    async def enrich(self, props: list[Property]) -> list[PropertyResponse]:
        """Attach owner names, fetching all owners of the page in one query."""
        if not props:
            return []
        names = await self.owners.get_names({p.id_owner for p in props})
        missing = [p.id for p in props if p.id_owner not in names]
        if missing:
            logger.warning("Properties reference missing owners", property_ids=missing)
        return [to_response(p, names.get(p.id_owner)) for p in props]

    async def list_all(self) -> ApiResponse[list[PropertyResponse]]:
        try:
            props = await self.properties.get_all()
            data = await self.enrich(props)
            logger.info("Fetched properties", count=len(data))
            return ApiResponse[list[PropertyResponse]].ok(data, "Properties retrieved successfully")
        except Exception as e:
            logger.error("Error fetching properties", error=str(e))
            return ApiResponse[list[PropertyResponse]].fail(ErrorKind.INTERNAL, f"Error retrieving properties: {e}")

    async def get(self, property_id: str) -> ApiResponse[PropertyResponse]:
        try:
            prop = await self.properties.get_by_id(property_id)
            if prop is None:
                logger.warning("Property not found", property_id=property_id)
                return ApiResponse[PropertyResponse].fail(ErrorKind.NOT_FOUND, PROPERTY_NOT_FOUND_MESSAGE)
            owner_name = await self.owners.get_name(prop.id_owner)
            return ApiResponse[PropertyResponse].ok(to_response(prop, owner_name), "Property retrieved successfully")
        except Exception as e:
            logger.error("Error fetching property", property_id=property_id, error=str(e))
            return ApiResponse[PropertyResponse].fail(ErrorKind.INTERNAL, f"Error retrieving property: {e}")

    async def search(self, search: PropertySearchFilter) -> ApiResponse[list[PropertyResponse]]:
        try:
            props, total = await self.properties.get_filtered(search)
            data = await self.enrich(props)
            logger.info(
                "Searched properties",
                total=total,
                returned=len(data),
                page=search.page,
                page_size=search.page_size,
            )
            return ApiResponse[list[PropertyResponse]].paged(
                data, total, search.page, search.page_size, "Filtered properties retrieved successfully"
            )
        except Exception as e:
            logger.error("Error searching properties", error=str(e))
            return ApiResponse[list[PropertyResponse]].fail(ErrorKind.INTERNAL, f"Error filtering properties: {e}")

    async def create(self, payload: PropertyCreate) -> ApiResponse[PropertyResponse]:
        try:
            if not await self.owners.exists(payload.id_owner):
                logger.warning("Referenced owner not found", owner_id=payload.id_owner)
                return ApiResponse[PropertyResponse].fail(ErrorKind.VALIDATION, "Referenced owner not found")

            created = await self._insert_with_code(
                Property(
                    name=payload.name,
                    address=payload.address,
                    price=payload.price,
                    id_owner=payload.id_owner,
                    image=payload.image,
                    year=payload.year,
                )
            )
            owner_name = await self.owners.get_name(created.id_owner)
            logger.info("Created property", property_id=created.id, code_internal=created.code_internal)
            return ApiResponse[PropertyResponse].ok(to_response(created, owner_name), "Property created successfully")
        except Exception as e:
            logger.error("Error creating property", error=str(e))
            return ApiResponse[PropertyResponse].fail(ErrorKind.INTERNAL, f"Error creating property: {e}")

    async def _insert_with_code(self, prop: Property) -> Property:
        attempt = 1
        while True:
            candidate = prop.model_copy(update={"code_internal": self.codes.next_code()})
            try:
                return await self.properties.create(candidate)
            except DuplicateKeyError as e:
                if not _is_code_collision(e) or attempt >= self.max_code_attempts:
                    raise
                logger.warning("Internal code collision, retrying", code_internal=candidate.code_internal, attempt=attempt)
                attempt += 1

    async def update(self, property_id: str, payload: PropertyUpdate) -> ApiResponse[PropertyResponse]:
        try:
            existing = await self.properties.get_by_id(property_id)
            if existing is None:
                logger.warning("Property not found for update", property_id=property_id)
                return ApiResponse[PropertyResponse].fail(ErrorKind.NOT_FOUND, PROPERTY_NOT_FOUND_MESSAGE)

            merged = apply_partial_update(existing, payload)
            updated = await self.properties.update(property_id, merged)
            if updated is None:
                logger.error("Property update matched no document", property_id=property_id)
                return ApiResponse[PropertyResponse].fail(ErrorKind.INTERNAL, "Could not update property")

            owner_name = await self.owners.get_name(updated.id_owner)
            logger.info("Updated property", property_id=property_id)
            return ApiResponse[PropertyResponse].ok(to_response(updated, owner_name), "Property updated successfully")
        except Exception as e:
            logger.error("Error updating property", property_id=property_id, error=str(e))
            return ApiResponse[PropertyResponse].fail(ErrorKind.INTERNAL, f"Error updating property: {e}")

    async def delete(self, property_id: str) -> ApiResponse[bool]:
        try:
            if not await self.properties.exists(property_id):
                logger.warning("Property not found for delete", property_id=property_id)
                return ApiResponse[bool].fail(ErrorKind.NOT_FOUND, PROPERTY_NOT_FOUND_MESSAGE)

            if not await self.properties.delete(property_id):
                logger.error("Property delete matched no document", property_id=property_id)
                return ApiResponse[bool].fail(ErrorKind.INTERNAL, "Could not delete property")

            logger.info("Deleted property", property_id=property_id)
            return ApiResponse[bool].ok(True, "Property deleted successfully")
        except Exception as e:
            logger.error("Error deleting property", property_id=property_id, error=str(e))
            return ApiResponse[bool].fail(ErrorKind.INTERNAL, f"Error deleting property: {e}")
