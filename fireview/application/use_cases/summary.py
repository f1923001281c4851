"""Collection summary via the prompt service."""

from __future__ import annotations

from collections.abc import Sequence

from fireview.application.interfaces import IPromptService
from fireview.application.services.notifications import NotificationCenter
from fireview.core.constants import SUMMARY_TEMPLATE_NAME
from fireview.domain.entities import DocumentRecord
from fireview.domain.enums import OperationKind
from fireview.domain.exceptions import (
    EmptyCollectionException,
    OperationInProgressException,
    PromptServiceException,
)
from fireview.shared.telemetry.logging import get_logger
from fireview.shared.utils import dumps_compact

logger = get_logger(__name__)


def serialize_documents(documents: Sequence[DocumentRecord], max_chars: int | None = None) -> str:
    """Render documents as one JSON array of {"id": ..., **data}.

    Output longer than max_chars is cut at max_chars.
    """
    content = dumps_compact([doc.flatten() for doc in documents])
    if max_chars is not None and len(content) > max_chars:
        logger.warning(
            "Summary input truncated from %d to %d characters", len(content), max_chars
        )
        content = content[:max_chars]
    return content


class SummaryRequester:
    """Requests one summary at a time and keeps the latest result."""

    def __init__(
        self,
        prompt_service: IPromptService,
        notifications: NotificationCenter,
        max_chars: int | None = None,
    ) -> None:
        self._prompt_service = prompt_service
        self._notifications = notifications
        self._max_chars = max_chars
        self.is_summarizing = False
        self.summary: str | None = None
        self.collection: str | None = None

    def clear(self) -> None:
        self.summary = None
        self.collection = None

    async def summarize(self, collection: str, documents: Sequence[DocumentRecord]) -> str:
        """Summarize the cached documents of collection.

        On failure the previous summary is kept and the error propagates.

        Raises:
            EmptyCollectionException: documents is empty (no service call).
            OperationInProgressException: a summary is already running.
            PromptServiceException: the prompt service failed.
        """
        if not documents:
            error = EmptyCollectionException()
            self._notifications.error("No Documents", error.message)
            raise error
        if self.is_summarizing:
            raise OperationInProgressException(OperationKind.SUMMARY.value)

        self.is_summarizing = True
        try:
            content = serialize_documents(documents, self._max_chars)
            try:
                output = await self._prompt_service.complete(
                    SUMMARY_TEMPLATE_NAME,
                    {"collectionName": collection, "documentContent": content},
                )
            except PromptServiceException as e:
                logger.error("Error generating summary for %s: %s", collection, e.message)
                self._notifications.error(
                    "Summarization Error", e.message or "Could not generate summary."
                )
                raise
            summary = output.get("summary")
            if not isinstance(summary, str) or not summary.strip():
                error = PromptServiceException("Prompt service returned no summary.")
                self._notifications.error("Summarization Error", error.message)
                raise error
        finally:
            self.is_summarizing = False

        self.summary = summary
        self.collection = collection
        self._notifications.notify("Summary Generated", f"AI summary for {collection} is ready.")
        return summary
