"""
Per-user notifications under ``notifications_<userId>``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from catalog_store.contracts.records import NotificationRecord, NotificationType
from catalog_store.database.collections import NOTIFICATIONS
from catalog_store.engine.query import sort_timestamp
from catalog_store.services.base import CollectionService, new_id


class NotificationService(CollectionService):
    async def list_notifications(self, user_id: str) -> List[NotificationRecord]:
        """Newest first."""
        notifications = await self._load(NOTIFICATIONS, user_id)
        return sorted(notifications, key=lambda n: sort_timestamp(n.created_at), reverse=True)

    async def add(self, notification: NotificationRecord) -> NotificationRecord:
        return await self._upsert(NOTIFICATIONS, notification, notification.user_id)

    async def notify(
        self,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> NotificationRecord:
        notification = NotificationRecord(
            id=new_id(), user_id=user_id, type=type, title=title, message=message, data=data
        )
        return await self.add(notification)

    async def unread_count(self, user_id: str) -> int:
        notifications = await self._load(NOTIFICATIONS, user_id)
        return sum(1 for n in notifications if not n.is_read)

    async def mark_as_read(self, user_id: str, notification_id: str) -> bool:
        """Returns True if a notification changed state. Unknown ids are a no-op."""
        notifications = await self._load(NOTIFICATIONS, user_id)
        changed = False
        for i, n in enumerate(notifications):
            if n.id == notification_id and not n.is_read:
                notifications[i] = n.model_copy(update={"is_read": True})
                changed = True
        if changed:
            await self._save(NOTIFICATIONS, notifications, user_id)
        return changed

    async def mark_all_as_read(self, user_id: str) -> int:
        notifications = await self._load(NOTIFICATIONS, user_id)
        unread = sum(1 for n in notifications if not n.is_read)
        if unread:
            await self._save(
                NOTIFICATIONS,
                [n if n.is_read else n.model_copy(update={"is_read": True}) for n in notifications],
                user_id,
            )
        return unread

    async def clear(self, user_id: str) -> None:
        await self._clear(NOTIFICATIONS, user_id)
