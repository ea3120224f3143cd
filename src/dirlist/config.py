"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from dirlist.sorting.models import SortDimension, SortDirection

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Every field has a default so that a model can be built with no
    environment at all.
    """

    sort_dimension: str = SortDimension.DISPLAY_NAME.value
    # Empty means "use the dimension's natural direction".
    sort_direction: str = ""
    directories_first: bool = True
    # Empty means rows must carry their own authority.
    default_authority: str = ""


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_choice(name: str, raw: str, choices: set[str]) -> str:
    value = raw.strip().lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {raw!r}")
    return value


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Optional environment variables (with defaults):
        DL_SORT_DIMENSION: One of display_name, size, last_modified, mime_type
            (default: display_name).
        DL_SORT_DIRECTION: ascending or descending (default: the dimension's
            natural direction).
        DL_DIRECTORIES_FIRST: Whether directories sort before documents
            (default: true).
        DL_DEFAULT_AUTHORITY: Authority assigned to rows that carry none
            (default: unset).

    Returns:
        Configured AppConfig instance.

    Raises:
        ValueError: If any variable holds a value outside its allowed set.
    """
    direction = os.environ.get("DL_SORT_DIRECTION", "")
    return AppConfig(
        sort_dimension=_parse_choice(
            "DL_SORT_DIMENSION",
            os.environ.get("DL_SORT_DIMENSION", SortDimension.DISPLAY_NAME.value),
            {d.value for d in SortDimension},
        ),
        sort_direction=(
            _parse_choice("DL_SORT_DIRECTION", direction, {d.value for d in SortDirection})
            if direction.strip()
            else ""
        ),
        directories_first=_parse_bool(
            "DL_DIRECTORIES_FIRST", os.environ.get("DL_DIRECTORIES_FIRST", "true")
        ),
        default_authority=os.environ.get("DL_DEFAULT_AUTHORITY", ""),
    )
