"""Application services: notification feed and document filtering."""

from fireview.application.services.document_filter import filter_documents
from fireview.application.services.notifications import Notification, NotificationCenter

__all__ = [
    "Notification",
    "NotificationCenter",
    "filter_documents",
]
