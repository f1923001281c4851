"""User-maintained collection registry.

The store cannot enumerate collections, so the operator registers paths by
hand. The list is persisted in local state; the selection is not.
"""

from __future__ import annotations

from fireview.application.interfaces import IStateStore
from fireview.core.constants import STATE_KEY_COLLECTIONS
from fireview.domain.exceptions import ValidationException
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class CollectionRegistry:
    """Ordered, unique collection names plus the current selection.

    Mutating methods return True when the selection changed so the caller
    can refetch or clear the document cache.
    """

    def __init__(self, state_store: IStateStore) -> None:
        self._state_store = state_store
        self._names: list[str] = []
        self.selected: str | None = None

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    async def load(self) -> list[str]:
        """Replace the in-memory list with the persisted one."""
        stored = await self._state_store.get(STATE_KEY_COLLECTIONS)
        names: list[str] = []
        for entry in stored if isinstance(stored, list) else []:
            name = entry.get("name") if isinstance(entry, dict) else None
            if isinstance(name, str) and name and name not in names:
                names.append(name)
        if stored is not None and not isinstance(stored, list):
            logger.warning("Ignoring persisted collections: expected a list")
        self._names = names
        return self.names

    async def _persist(self) -> None:
        await self._state_store.set(
            STATE_KEY_COLLECTIONS, [{"name": name} for name in self._names]
        )

    async def add(self, name: str) -> bool:
        """Register name (stripped); no-op when empty or already present.

        Selects the new entry if nothing is selected.
        """
        name = (name or "").strip()
        if not name or name in self._names:
            return False
        self._names.append(name)
        await self._persist()
        if self.selected is None:
            self.selected = name
            return True
        return False

    async def remove(self, name: str) -> bool:
        """Unregister name (exact match) and persist the remainder.

        If name was selected, selection moves to the first remaining entry
        or None.
        """
        self._names = [n for n in self._names if n != name]
        await self._persist()
        if self.selected == name:
            self.selected = self._names[0] if self._names else None
            return True
        return False

    def select(self, name: str | None) -> bool:
        """Change the selection; name must be registered, or None."""
        if name is not None and name not in self._names:
            raise ValidationException(
                f"Collection '{name}' is not registered.", field="name"
            )
        changed = name != self.selected
        self.selected = name
        return changed

    def clear(self) -> None:
        """Forget the in-memory list and selection (persisted list is kept)."""
        self._names = []
        self.selected = None
