"""Directory model — a keyed, ordered snapshot of the current listing."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

from dirlist.model.keys import encode_key
from dirlist.model.models import (
    COLUMN_AUTHORITY,
    COLUMN_DISPLAY_NAME,
    COLUMN_DOCUMENT_ID,
    COLUMN_FLAGS,
    COLUMN_LAST_MODIFIED,
    COLUMN_MIME_TYPE,
    COLUMN_SIZE,
    DirectoryResult,
    DocumentFlags,
    Entry,
    Row,
    Update,
    UpdateType,
    to_timestamp,
)
from dirlist.sorting.comparator import sorted_model_ids

if TYPE_CHECKING:
    from dirlist.sorting.models import SortModel

logger = logging.getLogger(__name__)

UpdateListener = Callable[[], None]

_T = TypeVar("_T")


class EntryNotFoundError(LookupError):
    """Raised when a model key is not present in the current snapshot."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No entry for model key: {key!r}")
        self.key = key


class MalformedRowError(ValueError):
    """Raised when a row cannot be identified or its metadata cannot be converted."""


@dataclass(frozen=True)
class ModelSnapshot:
    """Immutable view of the model's contents after one update."""

    ids: tuple[str, ...] = ()
    entries: Mapping[str, Entry] = field(default_factory=lambda: MappingProxyType({}))
    skipped: int = 0
    info: str | None = None
    error: str | None = None
    is_loading: bool = False


def _convert(column: str, convert: Callable[[Any], _T], value: Any) -> _T:
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise MalformedRowError(f"Bad {column} value {value!r}: {exc}") from exc


def _to_size(value: Any) -> int | None:
    return int(value) if value is not None else None


def _to_flags(value: Any) -> DocumentFlags:
    return DocumentFlags(int(value or 0))


def entry_from_row(row: Row) -> Entry:
    """Convert a raw row to an Entry.

    Raises:
        MalformedRowError: If the row is not a mapping, its authority or
            document id is missing or empty, or a metadata column cannot be
            converted.
    """
    if not isinstance(row, Mapping):
        raise MalformedRowError(f"Row is not a mapping: {type(row).__name__}")
    authority = row.get(COLUMN_AUTHORITY)
    document_id = row.get(COLUMN_DOCUMENT_ID)
    if authority is None or authority == "":
        raise MalformedRowError(f"Row has no {COLUMN_AUTHORITY}")
    if document_id is None or document_id == "":
        raise MalformedRowError(f"Row has no {COLUMN_DOCUMENT_ID}")

    source_id = str(authority)
    local_id = str(document_id)
    return Entry(
        source_id=source_id,
        local_id=local_id,
        key=encode_key(source_id, local_id),
        display_name=str(row.get(COLUMN_DISPLAY_NAME) or ""),
        size=_convert(COLUMN_SIZE, _to_size, row.get(COLUMN_SIZE)),
        last_modified=_convert(
            COLUMN_LAST_MODIFIED, to_timestamp, row.get(COLUMN_LAST_MODIFIED)
        ),
        mime_type=str(row.get(COLUMN_MIME_TYPE) or ""),
        flags=_convert(COLUMN_FLAGS, _to_flags, row.get(COLUMN_FLAGS)),
    )


class DirectoryModel:
    """Holds the entries of the directory currently on display.

    Each ``update`` builds a brand new ``ModelSnapshot`` and swaps it in by
    reference, so readers always see either the old or the new listing.
    Writers are serialized and listeners run on the writer's thread once the
    new snapshot is visible.
    """

    def __init__(self) -> None:
        self._snapshot = ModelSnapshot()
        self._last_update = Update()
        self._listeners: list[UpdateListener] = []
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_update_listener(self, listener: UpdateListener) -> None:
        """Register a zero-argument callable invoked after every update."""
        self._listeners.append(listener)

    def remove_update_listener(self, listener: UpdateListener) -> None:
        """Unregister a listener.

        Raises:
            ValueError: If the listener was never registered.
        """
        self._listeners.remove(listener)

    def _notify(self) -> None:
        """Call every listener, then re-raise the first listener error, if any."""
        first_error: Exception | None = None
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as exc:
                logger.error(
                    "[_notify] update listener failed; listener:%r", listener, exc_info=True
                )
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def update(self, result: DirectoryResult | Iterable[Row] | None) -> None:
        """Replace the model's contents with a new directory result.

        A bare iterable of rows is treated as a successful result. ``None``
        empties the model. A result carrying an exception leaves the current
        contents in place. Listeners are notified exactly once in every case.

        Args:
            result: The new directory result, rows, or None.
        """
        with self._write_lock:
            if result is None:
                self._snapshot = ModelSnapshot()
                self._last_update = Update()
                logger.info("[update] null result; model reset")
                self._notify()
                return

            if not isinstance(result, DirectoryResult):
                result = DirectoryResult(rows=list(result))

            if result.exception is not None:
                logger.error(
                    "[update] directory result carries an exception; keeping %d entries",
                    len(self._snapshot.ids),
                    exc_info=result.exception,
                )
                self._last_update = Update(type=UpdateType.EXCEPTION, exception=result.exception)
                self._notify()
                return

            self._snapshot = self._build_snapshot(result)
            self._last_update = Update(skipped=self._snapshot.skipped)
            logger.info(
                "[update] installed snapshot; entry_count:%d;skipped:%d",
                len(self._snapshot.ids),
                self._snapshot.skipped,
            )
            self._notify()

    def reset(self) -> None:
        """Empty the model without notifying listeners."""
        with self._write_lock:
            self._snapshot = ModelSnapshot()
            self._last_update = Update()

    @staticmethod
    def _build_snapshot(result: DirectoryResult) -> ModelSnapshot:
        """Build a snapshot from scratch out of the result's rows.

        A key seen twice keeps its first position while the later row's data
        wins.
        """
        entries: dict[str, Entry] = {}
        ids: list[str] = []
        skipped = 0
        for position, row in enumerate(result.rows):
            try:
                entry = entry_from_row(row)
            except MalformedRowError as exc:
                skipped += 1
                logger.warning("[update] skipping row; position:%d;reason:%s", position, exc)
                continue
            if entry.key in entries:
                logger.debug("[update] duplicate model key; key:%s", entry.key)
            else:
                ids.append(entry.key)
            entries[entry.key] = entry

        return ModelSnapshot(
            ids=tuple(ids),
            entries=MappingProxyType(entries),
            skipped=skipped,
            info=result.info,
            error=result.error,
            is_loading=result.is_loading,
        )

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def snapshot(self) -> ModelSnapshot:
        return self._snapshot

    def get_item_count(self) -> int:
        return len(self._snapshot.ids)

    def is_empty(self) -> bool:
        return not self._snapshot.ids

    def get_model_ids(self) -> list[str]:
        """Return every model key in the order the rows were ingested."""
        return list(self._snapshot.ids)

    def get_item(self, key: str) -> Entry:
        """Look up the entry for a model key.

        Raises:
            EntryNotFoundError: If the key is not in the current snapshot.
        """
        try:
            return self._snapshot.entries[key]
        except KeyError:
            raise EntryNotFoundError(key) from None

    def get_documents(self, keys: Iterable[str]) -> list[Entry]:
        """Return the entries for ``keys`` in order, skipping unknown keys."""
        entries = self._snapshot.entries
        documents: list[Entry] = []
        for key in keys:
            entry = entries.get(key)
            if entry is None:
                logger.warning("[get_documents] unable to obtain document; key:%s", key)
                continue
            documents.append(entry)
        return documents

    def sorted_ids(self, sort_model: SortModel) -> list[str]:
        """Return the current model keys ordered by ``sort_model``."""
        return sorted_model_ids(self._snapshot, sort_model)

    @property
    def last_update(self) -> Update:
        return self._last_update

    @property
    def skipped_count(self) -> int:
        return self._snapshot.skipped

    @property
    def info(self) -> str | None:
        return self._snapshot.info

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    @property
    def is_loading(self) -> bool:
        return self._snapshot.is_loading
