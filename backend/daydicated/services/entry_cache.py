"""
In-memory entries of the calendar owner currently being viewed.

Cache policy is write-through with no read-back: `upsert` writes to storage
and, once the write succeeds, stores the supplied values directly instead of
re-reading the row.
"""
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
from daydicated.core.exceptions import EntryValidationError, NotAuthenticatedError
from daydicated.schemas.entry import CachedEntry, EntryRecord
from daydicated.services.auth_service import AuthSession
from daydicated.services.entry_store import EntryStore, entry_key

logger = logging.getLogger(__name__)


def coerce_rating(rating: Union[int, str]) -> int:
    """Integer value of a rating; the 1-5 range is not checked."""
    try:
        return int(rating)
    except (TypeError, ValueError):
        raise EntryValidationError(f"Rating must be a whole number, got {rating!r}")


class EntryCache:
    """Date-keyed entries of a single owner."""

    def __init__(self, store: EntryStore, auth: AuthSession):
        self.store = store
        self.auth = auth
        self._entries: Dict[str, CachedEntry] = {}
        self._viewing_owner_id: Optional[str] = None

    @property
    def viewing_owner_id(self) -> Optional[str]:
        return self._viewing_owner_id

    def load(self, owner_id: str) -> Mapping[str, CachedEntry]:
        """Replace the cache with every stored entry of `owner_id`."""
        rows = self.store.query_entries(owner_id)

        entries = {}
        for row in rows:
            entries[row.date] = CachedEntry(id=row.id, rating=row.rating, note=row.note or "")

        self._entries = entries
        self._viewing_owner_id = owner_id
        logger.debug(f"Loaded {len(entries)} entries for {owner_id}")
        return self.current_entries()

    def upsert(self, entry_date: str, rating: Union[int, str], note: Optional[str]) -> CachedEntry:
        """Save the actor's entry for `entry_date` and reflect it in the cache."""
        actor = self.auth.current_actor()
        if actor is None:
            raise NotAuthenticatedError("Must be logged in to save entries")

        key = entry_key(actor.uid, entry_date)
        record = EntryRecord(
            user_id=actor.uid,
            date=entry_date,
            rating=coerce_rating(rating),
            note=note or ""
        )
        self.store.write_entry(key, record)

        entry = CachedEntry(id=key, rating=record.rating, note=record.note)
        if self._viewing_owner_id is None:
            self._viewing_owner_id = actor.uid
        if self._viewing_owner_id == actor.uid:
            self._entries[entry_date] = entry
        return entry

    def current_entries(self) -> Mapping[str, CachedEntry]:
        return MappingProxyType(self._entries)

    def clear(self) -> None:
        self._entries = {}
        self._viewing_owner_id = None
