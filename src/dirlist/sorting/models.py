"""Sort settings for directory listings."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dirlist.config import AppConfig


class SortDimension(enum.Enum):
    DISPLAY_NAME = "display_name"
    SIZE = "size"
    LAST_MODIFIED = "last_modified"
    MIME_TYPE = "mime_type"


class SortDirection(enum.Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


# Largest and newest first; names and types read top to bottom.
_DEFAULT_DIRECTIONS = {
    SortDimension.DISPLAY_NAME: SortDirection.ASCENDING,
    SortDimension.SIZE: SortDirection.DESCENDING,
    SortDimension.LAST_MODIFIED: SortDirection.DESCENDING,
    SortDimension.MIME_TYPE: SortDirection.ASCENDING,
}


@dataclass(frozen=True)
class SortModel:
    """Which field to sort on, in which direction, and whether to group directories.

    Attributes:
        dimension: The entry field compared first.
        direction: Applies to ``dimension`` only; grouping and the model-key
            tie-break are unaffected.
        directories_first: Place directories before documents.
    """

    dimension: SortDimension = SortDimension.DISPLAY_NAME
    direction: SortDirection = SortDirection.ASCENDING
    directories_first: bool = True

    @staticmethod
    def default_direction(dimension: SortDimension) -> SortDirection:
        return _DEFAULT_DIRECTIONS[dimension]

    @classmethod
    def for_dimension(cls, dimension: SortDimension, directories_first: bool = True) -> SortModel:
        """Build a sort model using the dimension's natural direction."""
        return cls(
            dimension=dimension,
            direction=cls.default_direction(dimension),
            directories_first=directories_first,
        )

    def reversed(self) -> SortModel:
        """Return the same sort with the direction flipped."""
        flipped = (
            SortDirection.DESCENDING
            if self.direction is SortDirection.ASCENDING
            else SortDirection.ASCENDING
        )
        return SortModel(self.dimension, flipped, self.directories_first)


def sort_model_from_config(config: AppConfig) -> SortModel:
    """Construct a SortModel from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        SortModel for the configured dimension; an empty direction selects
        the dimension's default.
    """
    dimension = SortDimension(config.sort_dimension)
    if not config.sort_direction:
        return SortModel.for_dimension(dimension, directories_first=config.directories_first)
    return SortModel(
        dimension=dimension,
        direction=SortDirection(config.sort_direction),
        directories_first=config.directories_first,
    )
