"""Tests for the Notification entity."""

import pytest
from pydantic import ValidationError

from outletstock.core.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)


class TestNotification:
    def test_defaults(self):
        notification = Notification(
            title="Low flour",
            message="Flour is below minimum",
            type=NotificationType.WARNING,
            target_location="mall-360",
        )

        assert notification.read is False
        assert notification.source_location == "System"
        assert notification.priority == NotificationPriority.NORMAL
        assert notification.created_at.tzinfo is not None

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Notification(
                title="",
                message="x",
                type=NotificationType.INFO,
                target_location="mall-360",
            )

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Notification(title="t", message="m", type="gossip", target_location="mall-360")
