"""
Export service: every stored entry as CSV or JSON text.

Rows keep the order the store returns them in (by date); the formatters do
not sort.
"""
import csv
import io
import json
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List
from daydicated.core.config import settings
from daydicated.schemas.entry import EntryRecord
from daydicated.services.entry_store import EntryStore

logger = logging.getLogger(__name__)

CSV_FIELDS = ["userId", "date", "rating", "note"]
CSV_MEDIA_TYPE = "text/csv"
JSON_MEDIA_TYPE = "application/json"


@dataclass
class ExportFile:
    """In-memory download: payload, MIME type and file name."""
    content: bytes
    media_type: str
    filename: str


def export_filename(year: int, extension: str) -> str:
    return f"{settings.EXPORT_FILENAME_PREFIX}-{year}.{extension}"


def _csv_line(values: Dict[str, object]) -> str:
    """One CSV record without its terminator."""
    buffer = io.StringIO()
    # Both "\r" and "\n" sit in the terminator, so either one forces quoting.
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\r\n")
    writer.writerow(values)
    return buffer.getvalue().removesuffix("\r\n")


def format_csv(entries: Iterable[EntryRecord]) -> str:
    """
    Header plus one row per entry, rows separated by a single newline.

    A note is quoted, with inner quotes doubled, when it holds a comma, a quote
    or a line break; otherwise it is written as is.
    """
    lines = [_csv_line(dict(zip(CSV_FIELDS, CSV_FIELDS)))]
    lines.extend(_csv_line(entry.model_dump(by_alias=True)) for entry in entries)
    return "\n".join(lines)


def format_json(entries: Iterable[EntryRecord]) -> str:
    """Array of {userId, date, rating, note} objects, indented by two spaces."""
    data = [entry.model_dump(by_alias=True) for entry in entries]
    return json.dumps(data, ensure_ascii=False, indent=2)


def fetch_all_entries(store: EntryStore) -> List[EntryRecord]:
    """All owners' entries, fetched fresh."""
    return store.query_records()


def export_csv(store: EntryStore, year: int) -> ExportFile:
    entries = fetch_all_entries(store)
    content = format_csv(entries)
    logger.info(f"Exported {len(entries)} entries to CSV")
    return ExportFile(
        content=content.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        filename=export_filename(year, "csv")
    )


def export_json(store: EntryStore, year: int) -> ExportFile:
    entries = fetch_all_entries(store)
    content = format_json(entries)
    logger.info(f"Exported {len(entries)} entries to JSON")
    return ExportFile(
        content=content.encode("utf-8"),
        media_type=JSON_MEDIA_TYPE,
        filename=export_filename(year, "json")
    )
