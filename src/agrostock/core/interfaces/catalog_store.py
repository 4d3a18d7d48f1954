"""Abstract interface for the product price catalog."""

from abc import ABC, abstractmethod

from agrostock.core.entities.catalog import ProductCatalogEntry


class ICatalogStore(ABC):
    """Read access to the product catalog, plus upsert for seeding."""

    @abstractmethod
    async def get_product(
        self, user_id: str, product_id: str
    ) -> ProductCatalogEntry | None:
        """Get a catalog entry by ID."""
        pass

    @abstractmethod
    async def list_products(
        self, user_id: str, active_only: bool = True
    ) -> list[ProductCatalogEntry]:
        """List a user's catalog entries."""
        pass

    @abstractmethod
    async def upsert_product(
        self, user_id: str, product: ProductCatalogEntry
    ) -> ProductCatalogEntry:
        """Insert or replace a catalog entry."""
        pass
