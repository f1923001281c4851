"""Application layer: console session, use cases and ports."""
