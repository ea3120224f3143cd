"""Directory loader — pulls rows from sources and feeds the model."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from dirlist.model.models import COLUMN_AUTHORITY, DirectoryResult, Row
from dirlist.sources.rows import RowSource, merge_rows

if TYPE_CHECKING:
    from dirlist.config import AppConfig
    from dirlist.model.directory import DirectoryModel

logger = logging.getLogger(__name__)


class DirectoryLoader:
    """Loads one directory listing from a set of row sources into a model."""

    def __init__(
        self,
        model: DirectoryModel,
        sources: Sequence[RowSource],
        default_authority: str | None = None,
    ) -> None:
        """Initialise the loader.

        Args:
            model: DirectoryModel that receives each load.
            sources: Row sources whose rows are merged, in order.
            default_authority: Authority for rows that carry none. Without it
                such rows are rejected by the model.
        """
        self._model = model
        self._sources = list(sources)
        self._default_authority = default_authority or None

    def fetch(self) -> DirectoryResult:
        """Query every source and merge their rows into one result.

        A failing source does not raise; the exception is carried on the
        returned result so the model can report it to its listeners.

        Returns:
            DirectoryResult with the merged rows, or with ``exception`` set.
        """
        try:
            rows = [self._with_authority(row) for row in merge_rows(*self._sources)]
        except Exception as exc:
            logger.error(
                "[fetch] row source failed; source_count:%d", len(self._sources), exc_info=True
            )
            return DirectoryResult(exception=exc)
        logger.info(
            "[fetch] merged rows; source_count:%d;row_count:%d", len(self._sources), len(rows)
        )
        return DirectoryResult(rows=rows)

    def load(
        self,
        info: str | None = None,
        error: str | None = None,
        is_loading: bool = False,
    ) -> DirectoryResult:
        """Fetch from all sources and install the result in the model.

        Args:
            info: Informational message to attach to the result.
            error: Provider error message to attach to the result.
            is_loading: Whether the provider is still producing rows.

        Returns:
            The DirectoryResult handed to the model.
        """
        result = self.fetch()
        result.info = info
        result.error = error
        result.is_loading = is_loading
        self._model.update(result)
        logger.info(
            "[load] model updated; item_count:%d;has_exception:%s",
            self._model.get_item_count(),
            result.exception is not None,
        )
        return result

    def _with_authority(self, row: Row) -> Row:
        if self._default_authority is None or not isinstance(row, Mapping):
            return row
        if row.get(COLUMN_AUTHORITY):
            return row
        return {**row, COLUMN_AUTHORITY: self._default_authority}


def directory_loader_from_config(
    config: AppConfig,
    model: DirectoryModel,
    sources: Sequence[RowSource],
) -> DirectoryLoader:
    """Construct a DirectoryLoader from application configuration.

    Args:
        config: Application configuration instance.
        model: DirectoryModel to feed.
        sources: Row sources to merge.

    Returns:
        Configured DirectoryLoader instance.
    """
    return DirectoryLoader(
        model=model,
        sources=sources,
        default_authority=config.default_authority,
    )
