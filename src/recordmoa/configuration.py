# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "recordmoa"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT = "newest"
DEFAULT_LOG_LEVEL = "WARNING"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_RECORDS_DIR: Path = DATA_PATH / "records"
DATA_IMAGES_DIR: Path = DATA_PATH / "images"
DATA_PENDING_IMAGE_DELETIONS_PATH: Path = DATA_PATH / "pending_image_deletions.yaml"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"


class Configuration(TypedDict):
    user_id: str
    data_path: Optional[str]
    page_size: int
    default_sort: str
    show_header: bool
    log_level: NotRequired[str]


def set_data_path(data_path: Path) -> None:
    global \
        DATA_PATH, \
        DATA_RECORDS_DIR, \
        DATA_IMAGES_DIR, \
        DATA_PENDING_IMAGE_DELETIONS_PATH, \
        DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_RECORDS_DIR = DATA_PATH / "records"
    DATA_IMAGES_DIR = DATA_PATH / "images"
    DATA_PENDING_IMAGE_DELETIONS_PATH = DATA_PATH / "pending_image_deletions.yaml"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are read.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting).expanduser())
