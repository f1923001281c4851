"""Fireview: operator console for browsing and editing Firestore collections."""
