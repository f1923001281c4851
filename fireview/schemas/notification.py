"""Notification feed API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from fireview.domain.enums import NotificationVariant


class NotificationItem(BaseModel):
    """One transient console notification."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    message: str
    variant: NotificationVariant
    created_at: datetime
