# SPDX-License-Identifier: MIT

import itertools
from typing import Any, Callable, Optional

import pendulum
import pytest

from recordmoa import configuration
from recordmoa.model.record import Record
from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.repository.id_map import ID_MAP_REPO
from recordmoa.repository.image import IMAGE_REPO
from recordmoa.repository.record import RECORD_REPO
from recordmoa.template.record import get_record_template
from recordmoa.terminal.common import RECORD_LOADER
from recordmoa.view import state as view_state

USER_ID = "user-1"


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point every store at a fresh directory and forget cached state."""
    original_data_path = configuration.DATA_PATH
    monkeypatch.setattr(configuration, "CONFIG_PATH", tmp_path / "config")
    monkeypatch.setattr(
        configuration, "APP_CONFIG_PATH", tmp_path / "config" / "config.yaml"
    )
    configuration.set_data_path(tmp_path / "data")
    configuration.DATA_RECORDS_DIR.mkdir(parents=True)
    configuration.DATA_IMAGES_DIR.mkdir(parents=True)

    for repository in (CONFIGURATION_REPO, ID_MAP_REPO, RECORD_REPO, IMAGE_REPO):
        repository.__init__()  # type: ignore[misc]
    RECORD_LOADER.__init__()  # type: ignore[misc]
    view_state.set_show_header(True)

    yield configuration.DATA_PATH

    configuration.set_data_path(original_data_path)


@pytest.fixture
def now() -> pendulum.DateTime:
    return pendulum.datetime(2026, 6, 15, 12, tz="local")


@pytest.fixture
def make_record() -> Callable[..., Record]:
    ids = itertools.count(1)

    def _make(
        title: str = "제목",
        category: str = "movie",
        rating: int = 3,
        review: str = "",
        created_at: Optional[pendulum.DateTime] = None,
        **fields: Any,
    ) -> Record:
        record = get_record_template()
        record["id"] = f"record-{next(ids)}"
        record["user_id"] = USER_ID
        record["category"] = category
        record["title"] = title
        record["rating"] = rating
        record["review"] = review
        record["created_at"] = created_at
        record["updated_at"] = created_at
        record.update(fields)  # type: ignore[typeddict-item]
        return record

    return _make
