"""Alert Use Cases: list unread alerts and mark them read."""

from agrostock.application.dto.responses import AlertListResponse, InventoryAlertResponse
from agrostock.config import get_logger
from agrostock.core.entities.alert import InventoryAlert
from agrostock.core.exceptions import AlertNotFoundError
from agrostock.core.interfaces.alert_store import IAlertStore

logger = get_logger(__name__)


def to_alert_response(alert: InventoryAlert) -> InventoryAlertResponse:
    return InventoryAlertResponse(
        id=alert.id,  # type: ignore[arg-type]
        item_id=alert.item_id,
        product_name=alert.product_name,
        type=alert.type.value,
        message=alert.message,
        severity=alert.severity.value,
        read=alert.read,
        created_at=alert.created_at,
    )


class _AlertUseCase:
    def __init__(self, alert_store: IAlertStore | None = None):
        self._alert_store = alert_store

    async def _get_alert_store(self) -> IAlertStore:
        if self._alert_store is None:
            from agrostock.infrastructure.storage.sqlite import get_alert_store

            self._alert_store = await get_alert_store()
        return self._alert_store


class ListAlertsUseCase(_AlertUseCase):
    """List a user's alerts, unread only by default."""

    async def execute(
        self, user_id: str, unread_only: bool = True, limit: int = 100
    ) -> list[InventoryAlert]:
        alert_store = await self._get_alert_store()
        return await alert_store.list_alerts(user_id, unread_only=unread_only, limit=limit)

    def to_response(self, alerts: list[InventoryAlert]) -> AlertListResponse:
        return AlertListResponse(
            alerts=[to_alert_response(a) for a in alerts],
            total=len(alerts),
        )


class MarkAlertReadUseCase(_AlertUseCase):
    """Mark one alert as read."""

    async def execute(self, user_id: str, alert_id: int) -> InventoryAlert:
        alert_store = await self._get_alert_store()
        alert = await alert_store.mark_read(user_id, alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        return alert
