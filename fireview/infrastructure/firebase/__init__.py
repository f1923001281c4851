"""Firestore REST integration (store adapter)."""

from fireview.infrastructure.firebase.client import (
    FirestoreStoreAdapter,
    connect_firestore,
)

__all__ = [
    "FirestoreStoreAdapter",
    "connect_firestore",
]
