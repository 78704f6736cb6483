"""Packages router: list packages (optionally by category), fetch and create.

Events reference packages by id; the admin form uses the category listing to
populate its package picker.
"""
from __future__ import annotations

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from eventpanel.models.package import Package, PackageCreate
from eventpanel.services.package_service import PackageService
from eventpanel.routers.deps import get_package_service

router = APIRouter()


@router.get("", response_model=List[Package])
async def list_packages(
    category: Optional[str] = Query(None, description="Only packages in this category"),
    service: PackageService = Depends(get_package_service),
) -> List[Package]:
    """Return packages, restricted to `category` when given."""
    return await service.list(category)


@router.get("/{package_id}", response_model=Package)
async def get_package(
    package_id: str, service: PackageService = Depends(get_package_service)
) -> Package:
    return await service.get(package_id)


@router.post("", response_model=Package, status_code=status.HTTP_201_CREATED)
async def create_package(
    fields: PackageCreate, service: PackageService = Depends(get_package_service)
) -> Package:
    return await service.create(fields)
