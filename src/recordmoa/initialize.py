# SPDX-License-Identifier: MIT

import logging

from recordmoa import configuration
from recordmoa.log_config import setup_logging
from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_file()
    __ensure_data_dirs()

    config = CONFIGURATION_REPO.get_config()
    setup_logging(config.get("log_level", configuration.DEFAULT_LOG_LEVEL))
    view_state.set_show_header(config["show_header"])

    logger.debug("Using data directory %s", configuration.DATA_PATH)


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        # Loading a missing config creates the defaults, flushing writes them
        CONFIGURATION_REPO.get_config()
        CONFIGURATION_REPO.flush()


def __ensure_data_dirs() -> None:
    # Directory-based entity stores (one file per entity)
    configuration.DATA_RECORDS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_IMAGES_DIR.mkdir(parents=True, exist_ok=True)
