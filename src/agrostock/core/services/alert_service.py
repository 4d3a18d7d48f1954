"""
Inventory alert derivation.

Alerts are a disposable working set: every recomputation looks only at the
item's current fields and fully replaces the item's previous alerts.
"""

from datetime import date

from agrostock.config import get_logger
from agrostock.core.entities.alert import AlertSeverity, AlertType, InventoryAlert
from agrostock.core.entities.inventory import InventoryItem
from agrostock.core.interfaces.alert_store import IAlertStore

logger = get_logger(__name__)

DEFAULT_EXPIRY_WARNING_DAYS = 30


def _format_qty(value: float) -> str:
    return f"{value:g}"


def derive_alerts(
    item: InventoryItem,
    today: date | None = None,
    expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
) -> list[InventoryAlert]:
    """
    Compute the alerts an item should carry right now.

    Stock alerts are exclusive (critical wins over low); the expiry alert is
    independent of them. Inactive or unsaved items carry no alerts.
    """
    if item.id is None or not item.active:
        return []

    today = today or date.today()
    alerts: list[InventoryAlert] = []
    stock = _format_qty(item.current_stock)

    if item.is_critical:
        alerts.append(
            InventoryAlert(
                user_id=item.user_id,
                item_id=item.id,
                product_name=item.product_name,
                type=AlertType.CRITICAL_STOCK,
                message=f"Critical stock: {item.product_name} - only {stock} {item.unit} left",
                severity=AlertSeverity.CRITICAL,
            )
        )
    elif item.is_low:
        alerts.append(
            InventoryAlert(
                user_id=item.user_id,
                item_id=item.id,
                product_name=item.product_name,
                type=AlertType.LOW_STOCK,
                message=f"Low stock: {item.product_name} - {stock} {item.unit} left",
                severity=AlertSeverity.WARNING,
            )
        )

    if item.expiry_date is not None:
        days_until_expiry = (item.expiry_date - today).days
        if 0 < days_until_expiry <= expiry_warning_days:
            alerts.append(
                InventoryAlert(
                    user_id=item.user_id,
                    item_id=item.id,
                    product_name=item.product_name,
                    type=AlertType.EXPIRY_WARNING,
                    message=(
                        f"Expiry approaching: {item.product_name} - "
                        f"expires in {days_until_expiry} days"
                    ),
                    severity=AlertSeverity.WARNING,
                )
            )

    return alerts


class AlertService:
    """Keeps an item's stored alerts in line with its current state."""

    def __init__(
        self,
        alert_store: IAlertStore,
        expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
    ) -> None:
        self._alert_store = alert_store
        self._expiry_warning_days = expiry_warning_days

    async def recompute_alerts(
        self, item: InventoryItem, today: date | None = None
    ) -> None:
        """
        Replace the item's alerts with ones derived from its stored state.

        The store re-reads the item while holding the write lock, so a late
        recompute triggered by an older change still sees the newest stock.

        Alerts are advisory: storage failures are logged and swallowed so
        they never undo the stock change that triggered them.
        """
        if item.id is None:
            return

        def derive(current: InventoryItem) -> list[InventoryAlert]:
            return derive_alerts(current, today, self._expiry_warning_days)

        try:
            alerts = await self._alert_store.refresh_item_alerts(item.user_id, item.id, derive)
        except Exception as e:
            logger.warning(
                "alert_recompute_failed",
                item_id=item.id,
                error=str(e),
                exc_info=True,
            )
            return

        logger.info(
            "alerts_recomputed",
            item_id=item.id,
            alerts=[a.type.value for a in alerts],
        )
