"""Data models for directory rows, entries and model updates."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# Row column names
COLUMN_AUTHORITY = "authority"
COLUMN_DOCUMENT_ID = "document_id"
COLUMN_FLAGS = "flags"
COLUMN_DISPLAY_NAME = "_display_name"
COLUMN_SIZE = "_size"
COLUMN_LAST_MODIFIED = "last_modified"
COLUMN_MIME_TYPE = "mime_type"

ALL_COLUMNS = (
    COLUMN_AUTHORITY,
    COLUMN_DOCUMENT_ID,
    COLUMN_FLAGS,
    COLUMN_DISPLAY_NAME,
    COLUMN_SIZE,
    COLUMN_LAST_MODIFIED,
    COLUMN_MIME_TYPE,
)

MIME_TYPE_DIR = "vnd.android.document/directory"

Row = Mapping[str, Any]


class DocumentFlags(enum.IntFlag):
    """Capability flags a provider reports for a document."""

    NONE = 0
    SUPPORTS_THUMBNAIL = 1
    SUPPORTS_WRITE = 1 << 1
    SUPPORTS_DELETE = 1 << 2
    DIR_SUPPORTS_CREATE = 1 << 3
    DIR_PREFERS_LAST_MODIFIED = 1 << 5
    SUPPORTS_RENAME = 1 << 6
    SUPPORTS_COPY = 1 << 7
    SUPPORTS_MOVE = 1 << 8
    VIRTUAL_DOCUMENT = 1 << 9
    SUPPORTS_REMOVE = 1 << 10
    SUPPORTS_SETTINGS = 1 << 11
    WEB_LINKABLE = 1 << 12
    PARTIAL = 1 << 16


@dataclass(frozen=True)
class Entry:
    """One directory item as held by the model.

    Attributes:
        source_id: Authority of the provider that produced the row.
        local_id: Document id, unique only within ``source_id``.
        key: Composite model key derived from ``(source_id, local_id)``.
        display_name: Name shown to the user.
        size: Size in bytes, or None if the provider does not know it.
        last_modified: Modification time in UTC, or None if unknown.
        mime_type: MIME type; directories use ``MIME_TYPE_DIR``.
        flags: Capability flags.
    """

    source_id: str
    local_id: str
    key: str
    display_name: str = ""
    size: int | None = None
    last_modified: datetime | None = None
    mime_type: str = ""
    flags: DocumentFlags = DocumentFlags.NONE

    @property
    def is_directory(self) -> bool:
        return self.mime_type == MIME_TYPE_DIR

    def supports(self, flag: DocumentFlags) -> bool:
        """Return True if every bit of ``flag`` is set on this entry."""
        return (self.flags & flag) == flag


def to_timestamp(value: Any) -> datetime | None:
    """Normalise a last-modified column value to an aware UTC datetime.

    Providers report epoch milliseconds; negative values and None mean
    "unknown". Naive datetimes are assumed to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    millis = int(value)
    if millis < 0:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=UTC)


class UpdateType(enum.Enum):
    UPDATE = "update"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class Update:
    """Describes the outcome of the most recent ``DirectoryModel.update`` call.

    Attributes:
        type: Whether new contents were installed or the result failed.
        exception: The exception carried by a failed result.
        skipped: Number of rows rejected for missing identity columns.
    """

    type: UpdateType = UpdateType.UPDATE
    exception: BaseException | None = None
    skipped: int = 0

    @property
    def has_exception(self) -> bool:
        return self.exception is not None


@dataclass
class DirectoryResult:
    """The output of one directory load, handed to the model as a unit.

    Attributes:
        rows: Raw rows, possibly merged from several providers.
        exception: Set when producing the rows failed.
        info: Informational message from the provider, if any.
        error: Error message from the provider, if any.
        is_loading: True when the provider is still fetching more rows.
    """

    rows: Sequence[Row] = field(default_factory=list)
    exception: BaseException | None = None
    info: str | None = None
    error: str | None = None
    is_loading: bool = False
