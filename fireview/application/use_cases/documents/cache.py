"""Document cache for the selected collection.

Holds the result of the most recently issued fetch. Each fetch takes a
sequence number; a result that arrives after a newer fetch was issued is
dropped, so a slow response for a previous collection never overwrites
the current one.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

from fireview.application.interfaces import IDocumentStore
from fireview.application.services.notifications import NotificationCenter
from fireview.domain.entities import DocumentRecord
from fireview.domain.exceptions import FireviewException
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class DocumentCache:
    """Most recent fetch of one collection, replaced wholesale."""

    def __init__(
        self,
        notifications: NotificationCenter,
        on_fetch_started: Callable[[], None] | None = None,
    ) -> None:
        self._notifications = notifications
        self._on_fetch_started = on_fetch_started
        self._sequence = count(1)
        self._latest = 0
        self._pending: set[int] = set()
        self.collection: str | None = None
        self.documents: tuple[DocumentRecord, ...] = ()
        self.error: str | None = None

    @property
    def is_fetching(self) -> bool:
        return self._latest in self._pending

    def clear(self, *, clear_error: bool = True) -> None:
        """Empty the cache and invalidate any fetch still in flight."""
        self._latest = next(self._sequence)
        self.collection = None
        self.documents = ()
        if clear_error:
            self.error = None

    async def fetch(self, store: IDocumentStore | None, collection: str) -> bool:
        """Load every document of collection into the cache.

        No-op (returns False) when store is None. Returns True when this
        fetch's result (documents or error) was applied, False when it was
        superseded by a newer fetch or clear.
        """
        if store is None:
            return False
        seq = self._latest = next(self._sequence)
        self._pending.add(seq)
        self.collection = collection
        self.documents = ()
        self.error = None
        if self._on_fetch_started is not None:
            self._on_fetch_started()
        try:
            records = await store.list_documents(collection)
        except Exception as e:
            if seq != self._latest:
                logger.info("Discarding stale fetch error for %s", collection)
                return False
            if isinstance(e, FireviewException):
                message = e.message
                logger.error("Error fetching documents for %s: %s", collection, message)
            else:
                message = str(e)
                logger.exception("Unexpected error fetching documents for %s", collection)
            self.error = message or (
                f"Failed to fetch documents for {collection}. Check Firestore rules or path."
            )
            self.documents = ()
            self._notifications.error("Fetch Error", self.error)
            return True
        finally:
            self._pending.discard(seq)

        if seq != self._latest:
            logger.info("Discarding stale fetch result for %s", collection)
            return False
        self.documents = tuple(records)
        logger.debug("Fetched %d documents from %s", len(records), collection)
        return True
