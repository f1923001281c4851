"""Notification feed API."""

from fastapi import APIRouter

from fireview.api.v1.dependencies import SessionDep
from fireview.schemas.notification import NotificationItem

router = APIRouter()


@router.get("", response_model=list[NotificationItem])
async def drain_notifications(session: SessionDep) -> list[NotificationItem]:
    """Return pending notifications (oldest first) and clear the feed."""
    return [NotificationItem.model_validate(n) for n in session.notifications.drain()]
