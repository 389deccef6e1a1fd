"""
Entry storage: date-ordered queries and keyed writes over the entries table.
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from daydicated.core.exceptions import FetchError, WriteError
from daydicated.models.entry import MoodEntry
from daydicated.schemas.entry import EntryRecord

logger = logging.getLogger(__name__)


def entry_key(owner_id: str, entry_date: str) -> str:
    """Composite storage key; one entry per owner per date."""
    return f"{owner_id}_{entry_date}"


def to_record(row: MoodEntry) -> EntryRecord:
    return EntryRecord(
        user_id=row.owner_id,
        date=row.date,
        rating=row.rating,
        note=row.note or ""
    )


class EntryStore:
    """Reads and writes entries for all owners."""

    def __init__(self, db: Session):
        self.db = db

    def query_entries(self, owner_id: Optional[str] = None) -> List[MoodEntry]:
        """Entries ordered by date, optionally restricted to one owner."""
        try:
            query = self.db.query(MoodEntry)
            if owner_id is not None:
                query = query.filter(MoodEntry.owner_id == owner_id)
            return query.order_by(MoodEntry.date).all()
        except SQLAlchemyError as e:
            logger.error(f"Error loading entries (owner={owner_id}): {e}")
            raise FetchError(f"Could not load entries: {e}") from e

    def query_records(self, owner_id: Optional[str] = None) -> List[EntryRecord]:
        return [to_record(row) for row in self.query_entries(owner_id)]

    def write_entry(self, key: str, entry: EntryRecord) -> None:
        """Create or replace the entry stored under `key`."""
        row = MoodEntry(
            id=key,
            owner_id=entry.user_id,
            date=entry.date,
            rating=entry.rating,
            note=entry.note
        )
        try:
            self.db.merge(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving entry {key}: {e}")
            raise WriteError(f"Could not save entry: {e}") from e
