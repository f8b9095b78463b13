# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional

from recordmoa.configuration import APP_NAME
from recordmoa.repository.image import IMAGE_REPO, ImageRepository, ImageStoreError

logger = logging.getLogger(__name__)


def get_upload_folder(user_id: str, category: str) -> str:
    return f"{APP_NAME}/{user_id}/{category}"


def upload_record_image(
    source: Path,
    user_id: str,
    category: str,
    repository: ImageRepository = IMAGE_REPO,
) -> str:
    return repository.upload_image(source, get_upload_folder(user_id, category))


def delete_record_image(
    image_url: str, repository: ImageRepository = IMAGE_REPO
) -> Optional[str]:
    """
    Queue an image for removal.

    Returns an error message instead of raising so that deleting a record
    never fails because of its image.
    """
    try:
        repository.mark_for_deletion(image_url)
    except ImageStoreError as e:
        logger.warning("Could not queue image for deletion: %s", e)
        return str(e)
    return None
