"""Pytest configuration and shared fixtures."""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from agrostock.core.entities.alert import InventoryAlert
from agrostock.core.entities.catalog import (
    LegacyInventoryRecord,
    ProductCatalogEntry,
    ProductType,
)
from agrostock.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementModule,
    StockSnapshot,
)
from agrostock.core.interfaces import (
    IAlertStore,
    IInventoryRepository,
    IInventoryStore,
)


class InMemoryInventoryRepository(IInventoryRepository):
    """Repository over InMemoryInventoryStore state, with the same conditional-update contract."""

    def __init__(self, store: "InMemoryInventoryStore"):
        self._store = store

    async def get_item(self, user_id, item_id):
        item = self._store.items.get(item_id)
        if item is None or item.user_id != user_id:
            return None
        return item.model_copy()

    async def get_item_by_product(self, user_id, product_id):
        for item in self._store.items.values():
            if item.user_id == user_id and item.product_id == product_id and item.active:
                return item.model_copy()
        return None

    async def get_item_by_name(self, user_id, product_name):
        for item in self._store.items.values():
            if (
                item.user_id == user_id
                and item.product_name == product_name
                and item.product_id is None
                and item.active
            ):
                return item.model_copy()
        return None

    async def get_product(self, user_id, product_id):
        return self._store.products.get((user_id, product_id))

    async def get_legacy_record(self, user_id, name):
        for record in self._store.legacy:
            if record.user_id == user_id and record.name == name:
                return record
        return None

    async def create_item(self, item):
        self._store.next_item_id += 1
        item.id = self._store.next_item_id
        self._store.items[item.id] = item.model_copy()
        return item

    async def update_item(self, item):
        stored = self._store.items[item.id]
        self._store.items[item.id] = item.model_copy(
            update={"current_stock": stored.current_stock}
        )
        return self._store.items[item.id].model_copy()

    async def increment_stock(self, user_id, item_id, amount):
        item = self._store.items.get(item_id)
        if item is None or item.user_id != user_id or not item.active:
            return None
        item.current_stock += amount
        return item.model_copy()

    async def decrement_stock(self, user_id, item_id, amount):
        item = self._store.items.get(item_id)
        if item is None or item.user_id != user_id or not item.active:
            return None
        if item.current_stock < amount:
            return None
        item.current_stock -= amount
        return item.model_copy()

    async def add_movement(self, movement):
        movement.id = len(self._store.movements) + 1
        self._store.movements.append(movement)
        return movement


class InMemoryInventoryStore(IInventoryStore):
    """Inventory store kept in dicts; a failed transaction restores the prior state."""

    def __init__(self):
        self.items: dict[int, InventoryItem] = {}
        self.movements: list[InventoryMovement] = []
        self.products: dict[tuple[str, str], ProductCatalogEntry] = {}
        self.legacy: list[LegacyInventoryRecord] = []
        self.next_item_id = 0

    def add_product(self, user_id: str, product: ProductCatalogEntry) -> None:
        self.products[(user_id, product.id)] = product

    def add_item(self, item: InventoryItem) -> InventoryItem:
        self.next_item_id += 1
        item.id = self.next_item_id
        self.items[item.id] = item.model_copy()
        return item

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InMemoryInventoryRepository]:
        snapshot = copy.deepcopy((self.items, self.movements, self.next_item_id))
        try:
            yield InMemoryInventoryRepository(self)
        except BaseException:
            self.items, self.movements, self.next_item_id = snapshot
            raise

    async def get_item(self, user_id, item_id):
        return await InMemoryInventoryRepository(self).get_item(user_id, item_id)

    async def list_items(self, user_id, limit=100, offset=0):
        items = [i for i in self.items.values() if i.user_id == user_id and i.active]
        return [i.model_copy() for i in items[offset : offset + limit]]

    async def get_stock_by_products(self, user_id, product_ids):
        snapshots = {}
        for item in self.items.values():
            if item.user_id == user_id and item.active and item.product_id in product_ids:
                snapshots.setdefault(
                    item.product_id,
                    StockSnapshot(
                        item_id=item.id,
                        product_id=item.product_id,
                        current_stock=item.current_stock,
                        unit=item.unit,
                    ),
                )
        return snapshots

    async def deactivate_item(self, user_id, item_id):
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id or not item.active:
            return False
        item.active = False
        return True

    async def list_movements(
        self,
        user_id,
        product_id=None,
        activity_id=None,
        module: MovementModule | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
        limit=100,
        offset=0,
    ):
        found = [
            m
            for m in self.movements
            if m.user_id == user_id
            and (product_id is None or m.product_id == product_id)
            and (activity_id is None or m.activity_id == activity_id)
            and (module is None or m.module == module)
            and (created_from is None or m.created_at >= created_from)
            and (created_to is None or m.created_at <= created_to)
        ]
        found.reverse()
        return found[offset : offset + limit]


class InMemoryAlertStore(IAlertStore):
    """Alert store that derives from the items held by an InMemoryInventoryStore."""

    def __init__(self, inventory: InMemoryInventoryStore):
        self._inventory = inventory
        self.alerts: list[InventoryAlert] = []

    async def refresh_item_alerts(self, user_id, item_id, derive):
        item = self._inventory.items.get(item_id)
        alerts = derive(item.model_copy()) if item is not None and item.user_id == user_id else []
        self.alerts = [
            a for a in self.alerts if not (a.user_id == user_id and a.item_id == item_id)
        ]
        for alert in alerts:
            alert.id = len(self.alerts) + 1000
            self.alerts.append(alert)
        return alerts

    async def list_alerts(self, user_id, unread_only=True, limit=100):
        return [
            a for a in self.alerts if a.user_id == user_id and (not unread_only or not a.read)
        ][:limit]

    async def list_item_alerts(self, user_id, item_id):
        return [a for a in self.alerts if a.user_id == user_id and a.item_id == item_id]

    async def mark_read(self, user_id, alert_id):
        for alert in self.alerts:
            if alert.id == alert_id and alert.user_id == user_id:
                alert.read = True
                return alert
        return None


@pytest.fixture
def user_id() -> str:
    return "farmer-1"


@pytest.fixture
def inventory_store() -> InMemoryInventoryStore:
    return InMemoryInventoryStore()


@pytest.fixture
def alert_store(inventory_store: InMemoryInventoryStore) -> InMemoryAlertStore:
    return InMemoryAlertStore(inventory_store)


@pytest.fixture
def nitrate() -> ProductCatalogEntry:
    return ProductCatalogEntry(
        id="prod-nitrate",
        name="Nitrato cálcico",
        type=ProductType.FERTILIZER,
        price_per_unit=2.0,
        unit="kg",
    )


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    return tmp_path / "agrostock_test.db"


@pytest.fixture
async def migrated_db(sqlite_db: Path) -> AsyncIterator[Path]:
    """
    Migrated temporary database with the global pool pointed at it.

    The pool is closed afterwards.
    """
    import agrostock.infrastructure.storage.sqlite.connection as conn_module
    from agrostock.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    await initialize_database(sqlite_db, create_backup_before=False)

    mock_settings = MagicMock()
    mock_settings.storage.db_path = sqlite_db
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield sqlite_db
        finally:
            await conn_module.close_pool()
