# SPDX-License-Identifier: MIT

import atexit

from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.repository.id_map import ID_MAP_REPO
from recordmoa.repository.image import IMAGE_REPO
from recordmoa.repository.record import RECORD_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()
    RECORD_REPO.flush()
    IMAGE_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
