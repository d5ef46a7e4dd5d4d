from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response, status
from structlog import get_logger

from app.config import settings
from app.dependencies.services import get_property_service
from app.routers.envelope import respond
from app.schemas.common import ApiResponse
from app.schemas.property import PropertyCreate, PropertyResponse, PropertySearchFilter, PropertyUpdate
from app.services.properties import PropertyService

logger = get_logger()
router = APIRouter(prefix="/api/v1/properties", tags=["properties"])

@router.get("", response_model=ApiResponse[list[PropertyResponse]])
async def list_properties(response: Response, service: PropertyService = Depends(get_property_service)):
    result = await service.list_all()
    return respond(result, response)

@router.get("/search", response_model=ApiResponse[list[PropertyResponse]])
async def search_properties(
    response: Response,
    name: str | None = None,
    address: str | None = None,
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0, max_digits=20, decimal_places=2),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0, max_digits=20, decimal_places=2),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE),
    service: PropertyService = Depends(get_property_service),
):
    """
    Search properties by name/address substring and price range, paginated.
    Every returned property carries its owner's name.
    """
    search = PropertySearchFilter(
        name=name,
        address=address,
        min_price=min_price,
        max_price=max_price,
        page=page,
        page_size=page_size,
    )
    logger.info("Searching properties", filters=search.model_dump(exclude_none=True, mode="json"))
    result = await service.search(search)
    return respond(result, response)

@router.get("/{property_id}", response_model=ApiResponse[PropertyResponse])
async def get_property(property_id: str, response: Response, service: PropertyService = Depends(get_property_service)):
    result = await service.get(property_id)
    return respond(result, response)

@router.post("", response_model=ApiResponse[PropertyResponse], status_code=status.HTTP_201_CREATED)
async def create_property(payload: PropertyCreate, response: Response, service: PropertyService = Depends(get_property_service)):
    result = await service.create(payload)
    return respond(result, response, success_status=status.HTTP_201_CREATED)

@router.put("/{property_id}", response_model=ApiResponse[PropertyResponse])
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    response: Response,
    service: PropertyService = Depends(get_property_service),
):
    result = await service.update(property_id, payload)
    return respond(result, response)

@router.delete("/{property_id}", response_model=ApiResponse[bool])
async def delete_property(property_id: str, response: Response, service: PropertyService = Depends(get_property_service)):
    result = await service.delete(property_id)
    return respond(result, response)
