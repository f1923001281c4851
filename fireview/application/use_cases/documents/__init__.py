"""Document use cases: cache, single-document mutations and bulk import."""

from fireview.application.use_cases.documents.bulk_import import (
    BulkImportPipeline,
    parse_import_payload,
)
from fireview.application.use_cases.documents.cache import DocumentCache
from fireview.application.use_cases.documents.mutations import (
    InFlightTracker,
    MutationOrchestrator,
)

__all__ = [
    "BulkImportPipeline",
    "DocumentCache",
    "InFlightTracker",
    "MutationOrchestrator",
    "parse_import_payload",
]
