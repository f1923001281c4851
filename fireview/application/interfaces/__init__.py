"""Application ports (Protocols) implemented by infrastructure."""

from fireview.application.interfaces.services import (
    IDocumentStore,
    IPromptService,
    IStateStore,
    StoreConnector,
)

__all__ = [
    "IDocumentStore",
    "IPromptService",
    "IStateStore",
    "StoreConnector",
]
