"""Package lookups and creation."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from eventpanel.errors import NotFoundError, ValidationError
from eventpanel.models.enums import Category
from eventpanel.models.package import Package, PackageCreate
from eventpanel.utils.logger import logger


class PackageStoreProtocol(Protocol):
    async def list(self, category: Optional[str] = None) -> List[Package]: ...

    async def get(self, package_id: str) -> Optional[Package]: ...

    async def insert(self, record: Dict[str, Any]) -> Package: ...


class PackageService:
    def __init__(self, packages: PackageStoreProtocol) -> None:
        self._packages = packages

    async def list(self, category: Optional[str] = None) -> List[Package]:
        """Return all packages, or only those in `category` when given."""
        parsed = Category.parse(category)
        return await self._packages.list(parsed.value if parsed else None)

    async def get(self, package_id: str) -> Package:
        package = await self._packages.get(package_id)
        if package is None:
            raise NotFoundError(f"Package {package_id} not found")
        return package

    async def create(self, fields: PackageCreate) -> Package:
        if not fields.name or not fields.name.strip():
            raise ValidationError("Missing required fields: name")
        if not fields.category:
            raise ValidationError("Missing required fields: category")
        category = Category.parse(fields.category)
        package = await self._packages.insert(
            {
                "name": fields.name.strip(),
                "category": category.value,
                "description": fields.description,
                "price": fields.price,
            }
        )
        logger.info("Created package", extra={"package_id": package.id, "category": category.value})
        return package
