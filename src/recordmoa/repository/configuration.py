# SPDX-License-Identifier: MIT

import uuid
from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from recordmoa import configuration


def get_default_config() -> configuration.Configuration:
    return {
        "user_id": uuid.uuid4().hex,
        "data_path": None,
        "page_size": configuration.DEFAULT_PAGE_SIZE,
        "default_sort": configuration.DEFAULT_SORT,
        "show_header": True,
        "log_level": configuration.DEFAULT_LOG_LEVEL,
    }


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not configuration.APP_CONFIG_PATH.is_file():
            self._config = get_default_config()
            self.is_dirty = True
            return

        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            self._config = get_default_config()
            self.is_dirty = True
            return

        # Fill in fields added after the config file was written
        for key, value in get_default_config().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        user_id: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        page_size: Optional[int] = None,
        default_sort: Optional[str] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if user_id is not None:
            self.config["user_id"] = user_id
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if page_size is not None:
            if page_size < 1:
                raise ValueError(f"Page size must be positive, got {page_size}")
            self.config["page_size"] = page_size
        if default_sort is not None:
            self.config["default_sort"] = default_sort
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
