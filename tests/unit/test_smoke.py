"""Smoke tests — load a merged listing end to end and render it sorted."""

import pytest

from dirlist import __version__
from dirlist.config import load_config
from dirlist.model.directory import DirectoryModel
from dirlist.model.models import (
    COLUMN_DISPLAY_NAME,
    COLUMN_DOCUMENT_ID,
    COLUMN_MIME_TYPE,
    COLUMN_SIZE,
    MIME_TYPE_DIR,
)
from dirlist.orchestration.loader import directory_loader_from_config
from dirlist.sorting.models import sort_model_from_config
from dirlist.sources.rows import MatrixRowSource


def test_version() -> None:
    assert __version__ == "0.1.0"


def test_load_and_sort_with_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DL_SORT_DIMENSION", "DL_SORT_DIRECTION", "DL_DIRECTORIES_FIRST"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DL_DEFAULT_AUTHORITY", "local")
    config = load_config()

    downloads = MatrixRowSource()
    downloads.new_row(**{COLUMN_DOCUMENT_ID: "1", COLUMN_DISPLAY_NAME: "zeta.txt", COLUMN_SIZE: 3})
    downloads.new_row(
        **{COLUMN_DOCUMENT_ID: "2", COLUMN_DISPLAY_NAME: "Music", COLUMN_MIME_TYPE: MIME_TYPE_DIR}
    )
    cloud = MatrixRowSource(authority="cloud")
    cloud.new_row(**{COLUMN_DOCUMENT_ID: "1", COLUMN_DISPLAY_NAME: "alpha.txt", COLUMN_SIZE: 9})

    model = DirectoryModel()
    rendered: list[list[str]] = []
    sort_model = sort_model_from_config(config)
    model.add_update_listener(
        lambda: rendered.append(
            [model.get_item(key).display_name for key in model.sorted_ids(sort_model)]
        )
    )

    directory_loader_from_config(config, model, [downloads, cloud]).load()

    assert model.get_item_count() == 3
    assert rendered == [["Music", "alpha.txt", "zeta.txt"]]
