"""
Event category endpoints.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from aurora.api.deps import get_category_service
from aurora.schemas.category import CategoryCreate, CategoryResponse
from aurora.services.categories import CategoryService

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(service: CategoryService = Depends(get_category_service)):
    """System categories plus the caller's own."""
    return await service.list_available()


@router.get("/system", response_model=List[CategoryResponse])
async def list_system_categories(service: CategoryService = Depends(get_category_service)):
    return await service.list_system()


@router.get("/custom", response_model=List[CategoryResponse])
async def list_custom_categories(service: CategoryService = Depends(get_category_service)):
    return await service.list_custom()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    return await service.get_category(category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    return await service.create_category(category_data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    target_category_id: Optional[UUID] = Query(None, description="Category that receives the linked events"),
    service: CategoryService = Depends(get_category_service),
):
    """
    Delete one of the caller's categories.

    When the category still has events, target_category_id is required and
    the events are moved there first.
    """
    await service.delete_category(category_id, target_category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
