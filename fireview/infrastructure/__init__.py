"""Infrastructure: Firestore REST adapter, prompt service, local state."""
