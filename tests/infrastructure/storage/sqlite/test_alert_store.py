"""Tests for the SQLite alert and catalog stores."""

import pytest

from agrostock.core.entities.alert import AlertSeverity, AlertType, InventoryAlert
from agrostock.core.entities.catalog import ProductCatalogEntry, ProductType
from agrostock.core.entities.inventory import InventoryItem
from agrostock.core.services.alert_service import derive_alerts
from agrostock.infrastructure.storage.sqlite.alert_store import SQLiteAlertStore
from agrostock.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from agrostock.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore

USER = "farmer-1"


def fixed(*types: AlertType):
    """Deriver that ignores stock and returns the given alert types."""

    def derive(item: InventoryItem) -> list[InventoryAlert]:
        return [
            InventoryAlert(
                user_id=item.user_id,
                item_id=item.id,
                product_name=item.product_name,
                type=alert_type,
                message=f"{alert_type.value}: {item.product_name}",
                severity=AlertSeverity.WARNING,
            )
            for alert_type in types
        ]

    return derive


@pytest.fixture
def alert_db_store(migrated_db) -> SQLiteAlertStore:
    return SQLiteAlertStore()


@pytest.fixture
async def items(migrated_db) -> list[InventoryItem]:
    store = SQLiteInventoryStore()
    created = []
    async with store.transaction() as repo:
        for name, stock in (("Nitrato", 4), ("Sulfato", 20)):
            created.append(
                await repo.create_item(
                    InventoryItem(
                        user_id=USER,
                        product_id=name.lower(),
                        product_name=name,
                        current_stock=stock,
                        min_stock=5,
                        critical_stock=2,
                    )
                )
            )
    return created


class TestSQLiteAlertStore:
    async def test_refresh_is_total(self, alert_db_store, items):
        first, second = items
        await alert_db_store.refresh_item_alerts(
            USER, first.id, fixed(AlertType.LOW_STOCK, AlertType.EXPIRY_WARNING)
        )
        await alert_db_store.refresh_item_alerts(USER, second.id, fixed(AlertType.LOW_STOCK))

        await alert_db_store.refresh_item_alerts(USER, first.id, fixed(AlertType.CRITICAL_STOCK))

        item_alerts = await alert_db_store.list_item_alerts(USER, first.id)
        assert [a.type for a in item_alerts] == [AlertType.CRITICAL_STOCK]
        assert len(await alert_db_store.list_item_alerts(USER, second.id)) == 1

    async def test_derives_from_stored_row(self, alert_db_store, items):
        first, second = items

        stored = await alert_db_store.refresh_item_alerts(USER, first.id, derive_alerts)
        healthy = await alert_db_store.refresh_item_alerts(USER, second.id, derive_alerts)

        assert [a.type for a in stored] == [AlertType.LOW_STOCK]
        assert stored[0].message == "Low stock: Nitrato - 4 kg left"
        assert healthy == []

    async def test_refresh_with_nothing_clears(self, alert_db_store, items):
        item = items[0]
        await alert_db_store.refresh_item_alerts(USER, item.id, fixed(AlertType.LOW_STOCK))
        await alert_db_store.refresh_item_alerts(USER, item.id, fixed())
        assert await alert_db_store.list_item_alerts(USER, item.id) == []

    async def test_other_users_item_gets_nothing(self, alert_db_store, items):
        stored = await alert_db_store.refresh_item_alerts(
            "intruder", items[0].id, fixed(AlertType.LOW_STOCK)
        )
        assert stored == []
        assert await alert_db_store.list_alerts("intruder") == []

    async def test_mark_read(self, alert_db_store, items):
        stored = await alert_db_store.refresh_item_alerts(
            USER, items[0].id, fixed(AlertType.LOW_STOCK)
        )

        marked = await alert_db_store.mark_read(USER, stored[0].id)

        assert marked.read
        assert await alert_db_store.list_alerts(USER) == []
        assert len(await alert_db_store.list_alerts(USER, unread_only=False)) == 1

    async def test_mark_read_other_user(self, alert_db_store, items):
        stored = await alert_db_store.refresh_item_alerts(
            USER, items[0].id, fixed(AlertType.LOW_STOCK)
        )
        assert await alert_db_store.mark_read("intruder", stored[0].id) is None


class TestSQLiteCatalogStore:
    async def test_upsert_and_list(self, migrated_db):
        store = SQLiteCatalogStore()
        await store.upsert_product(
            USER, ProductCatalogEntry(id="w1", name="Agua", type=ProductType.WATER, price_per_unit=0.3, unit="m3")
        )
        await store.upsert_product(
            USER, ProductCatalogEntry(id="f1", name="Urea", type=ProductType.FERTILIZER, price_per_unit=1)
        )
        await store.upsert_product(
            USER, ProductCatalogEntry(id="w1", name="Agua pozo", type=ProductType.WATER, price_per_unit=0.25, unit="m3")
        )
        await store.upsert_product(
            USER, ProductCatalogEntry(id="old", name="Retirado", active=False)
        )

        products = await store.list_products(USER)

        assert [p.id for p in products] == ["w1", "f1"]
        assert products[0].name == "Agua pozo"
        assert products[0].price_per_unit == 0.25
        assert len(await store.list_products(USER, active_only=False)) == 3
        assert await store.get_product("someone-else", "w1") is None
