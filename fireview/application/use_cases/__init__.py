"""Application use cases (connection, collections, documents, summary)."""
