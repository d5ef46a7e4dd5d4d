from structlog import get_logger

from app.errors import ErrorKind, OwnerHasPropertiesError
from app.models.owner import Owner
from app.repositories.owners import OwnerRepository
from app.schemas.common import ApiResponse
from app.schemas.owner import OwnerCreate, OwnerResponse, OwnerUpdate
from app.services.patching import apply_partial_update

logger = get_logger()

OWNER_NOT_FOUND_MESSAGE = "Owner not found"


def to_response(owner: Owner) -> OwnerResponse:
    return OwnerResponse(
        id=owner.id,
        name=owner.name,
        address=owner.address,
        phone=owner.phone,
        birthday=owner.birthday,
    )


class OwnerService:
    def __init__(self, owners: OwnerRepository):
        self.owners = owners

    async def list_all(self) -> ApiResponse[list[OwnerResponse]]:
        try:
            owners = await self.owners.get_all()
            logger.info("Fetched owners", count=len(owners))
            return ApiResponse[list[OwnerResponse]].ok(
                [to_response(o) for o in owners], "Owners retrieved successfully"
            )
        except Exception as e:
            logger.error("Error fetching owners", error=str(e))
            return ApiResponse[list[OwnerResponse]].fail(ErrorKind.INTERNAL, f"Error retrieving owners: {e}")

    async def get(self, owner_id: str) -> ApiResponse[OwnerResponse]:
        try:
            owner = await self.owners.get_by_id(owner_id)
            if owner is None:
                logger.warning("Owner not found", owner_id=owner_id)
                return ApiResponse[OwnerResponse].fail(ErrorKind.NOT_FOUND, OWNER_NOT_FOUND_MESSAGE)
            return ApiResponse[OwnerResponse].ok(to_response(owner), "Owner retrieved successfully")
        except Exception as e:
            logger.error("Error fetching owner", owner_id=owner_id, error=str(e))
            return ApiResponse[OwnerResponse].fail(ErrorKind.INTERNAL, f"Error retrieving owner: {e}")

    async def create(self, payload: OwnerCreate) -> ApiResponse[OwnerResponse]:
        try:
            owner = Owner(
                name=payload.name,
                address=payload.address,
                phone=payload.phone,
                birthday=payload.birthday,
            )
            created = await self.owners.create(owner)
            logger.info("Created owner", owner_id=created.id)
            return ApiResponse[OwnerResponse].ok(to_response(created), "Owner created successfully")
        except Exception as e:
            logger.error("Error creating owner", error=str(e))
            return ApiResponse[OwnerResponse].fail(ErrorKind.INTERNAL, f"Error creating owner: {e}")

    async def update(self, owner_id: str, payload: OwnerUpdate) -> ApiResponse[OwnerResponse]:
        try:
            existing = await self.owners.get_by_id(owner_id)
            if existing is None:
                logger.warning("Owner not found for update", owner_id=owner_id)
                return ApiResponse[OwnerResponse].fail(ErrorKind.NOT_FOUND, OWNER_NOT_FOUND_MESSAGE)

            merged = apply_partial_update(existing, payload)
            updated = await self.owners.update(owner_id, merged)
            if updated is None:
                logger.error("Owner update matched no document", owner_id=owner_id)
                return ApiResponse[OwnerResponse].fail(ErrorKind.INTERNAL, "Could not update owner")

            logger.info("Updated owner", owner_id=owner_id)
            return ApiResponse[OwnerResponse].ok(to_response(updated), "Owner updated successfully")
        except Exception as e:
            logger.error("Error updating owner", owner_id=owner_id, error=str(e))
            return ApiResponse[OwnerResponse].fail(ErrorKind.INTERNAL, f"Error updating owner: {e}")

    async def delete(self, owner_id: str) -> ApiResponse[bool]:
        try:
            if not await self.owners.exists(owner_id):
                logger.warning("Owner not found for delete", owner_id=owner_id)
                return ApiResponse[bool].fail(ErrorKind.NOT_FOUND, OWNER_NOT_FOUND_MESSAGE)

            if not await self.owners.delete(owner_id):
                logger.error("Owner delete matched no document", owner_id=owner_id)
                return ApiResponse[bool].fail(ErrorKind.INTERNAL, "Could not delete owner")

            logger.info("Deleted owner", owner_id=owner_id)
            return ApiResponse[bool].ok(True, "Owner deleted successfully")
        except OwnerHasPropertiesError as e:
            return ApiResponse[bool].fail(
                ErrorKind.CONFLICT,
                f"Cannot delete owner: referenced by {e.property_count} existing properties",
            )
        except Exception as e:
            logger.error("Error deleting owner", owner_id=owner_id, error=str(e))
            return ApiResponse[bool].fail(ErrorKind.INTERNAL, f"Error deleting owner: {e}")
