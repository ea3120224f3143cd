"""Total-order comparator for directory entries."""

from __future__ import annotations

import functools
import locale
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from dirlist.sorting.models import SortDimension, SortDirection, SortModel

if TYPE_CHECKING:
    from dirlist.model.directory import ModelSnapshot
    from dirlist.model.models import Entry


def _collation_key(text: str) -> tuple[str, ...]:
    """Case-insensitive key ordered by the current LC_COLLATE locale.

    ``strxfrm`` rejects NUL, so the text is collated piecewise around each NUL
    and the pieces compare as a tuple.
    """
    return tuple(locale.strxfrm(part) for part in text.casefold().split("\x00"))


def _field_value(entry: Entry, dimension: SortDimension) -> Any:
    if dimension is SortDimension.DISPLAY_NAME:
        return _collation_key(entry.display_name)
    if dimension is SortDimension.SIZE:
        return entry.size
    if dimension is SortDimension.LAST_MODIFIED:
        return entry.last_modified
    return _collation_key(entry.mime_type)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_entries(a: Entry, b: Entry, sort_model: SortModel) -> int:
    """Compare two entries under ``sort_model``.

    Ordering, first difference wins:
        1. Directories before documents, when the sort model groups them.
        2. The sort dimension, in the sort direction. Missing values go last
           in either direction.
        3. Model key ascending. Keys are unique, so only an entry compared
           with itself yields 0.

    Returns:
        Negative if ``a`` sorts first, positive if ``b`` does, 0 if equal.
    """
    if sort_model.directories_first and a.is_directory != b.is_directory:
        return -1 if a.is_directory else 1

    value_a = _field_value(a, sort_model.dimension)
    value_b = _field_value(b, sort_model.dimension)
    if value_a is None or value_b is None:
        if value_a is not None:
            return -1
        if value_b is not None:
            return 1
    else:
        result = _cmp(value_a, value_b)
        if result:
            return -result if sort_model.direction is SortDirection.DESCENDING else result

    return _cmp(a.key, b.key)


def sort_entries(entries: Iterable[Entry], sort_model: SortModel) -> list[Entry]:
    """Return ``entries`` as a new list ordered by ``sort_model``."""
    return sorted(
        entries,
        key=functools.cmp_to_key(lambda a, b: compare_entries(a, b, sort_model)),
    )


def sorted_model_ids(snapshot: ModelSnapshot, sort_model: SortModel) -> list[str]:
    """Return the snapshot's model keys ordered by ``sort_model``."""
    entries = (snapshot.entries[key] for key in snapshot.ids)
    return [entry.key for entry in sort_entries(entries, sort_model)]
