from fastapi import APIRouter, Depends, Response, status

from app.dependencies.services import get_owner_service
from app.routers.envelope import respond
from app.schemas.common import ApiResponse
from app.schemas.owner import OwnerCreate, OwnerResponse, OwnerUpdate
from app.services.owners import OwnerService

router = APIRouter(prefix="/api/v1/owners", tags=["owners"])

@router.get("", response_model=ApiResponse[list[OwnerResponse]])
async def list_owners(response: Response, service: OwnerService = Depends(get_owner_service)):
    return respond(await service.list_all(), response)

@router.get("/{owner_id}", response_model=ApiResponse[OwnerResponse])
async def get_owner(owner_id: str, response: Response, service: OwnerService = Depends(get_owner_service)):
    return respond(await service.get(owner_id), response)

@router.post("", response_model=ApiResponse[OwnerResponse], status_code=status.HTTP_201_CREATED)
async def create_owner(payload: OwnerCreate, response: Response, service: OwnerService = Depends(get_owner_service)):
    return respond(await service.create(payload), response, success_status=status.HTTP_201_CREATED)

@router.put("/{owner_id}", response_model=ApiResponse[OwnerResponse])
async def update_owner(owner_id: str, payload: OwnerUpdate, response: Response, service: OwnerService = Depends(get_owner_service)):
    return respond(await service.update(owner_id, payload), response)

@router.delete("/{owner_id}", response_model=ApiResponse[bool])
async def delete_owner(owner_id: str, response: Response, service: OwnerService = Depends(get_owner_service)):
    """Delete an owner. Fails with 409 while any property still references it."""
    return respond(await service.delete(owner_id), response)
