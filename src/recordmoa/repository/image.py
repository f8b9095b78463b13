# SPDX-License-Identifier: MIT

import logging
import shutil
import uuid
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast
from urllib.parse import unquote, urlparse

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from recordmoa import configuration, time
from recordmoa.model.image import CleanupResult, PendingImageDeletion

logger = logging.getLogger(__name__)


class ImageStoreError(Exception):
    """Raised when an image can't be stored or an image URL isn't one of ours."""

    pass


class ImageRepository:
    """
    Local stand-in for the image CDN.

    Uploaded files are copied below the data directory and referred to by
    file URL. Deleting an image only queues it; the files are removed by a
    later cleanup pass.
    """

    def __init__(self) -> None:
        self._pending: Optional[list[PendingImageDeletion]] = None
        self.is_dirty = False

    @property
    def pending(self) -> list[PendingImageDeletion]:
        if self._pending is None:
            self.__load_data()
        if self._pending is None:
            raise ValueError()
        return self._pending

    def __load_data(self) -> None:
        path = configuration.DATA_PENDING_IMAGE_DELETIONS_PATH
        if not path.is_file():
            self._pending = []
            return
        try:
            data = load(path.read_text(encoding="utf-8"), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise ImageStoreError(f"Could not read pending image deletions: {e}") from e
        raw_deletions = (data or {}).get("pending_image_deletions") or []
        self._pending = [
            self.__convert_deletion_for_deserialization(deletion)
            for deletion in raw_deletions
        ]

    def __save_data(self, pending: list[PendingImageDeletion]) -> None:
        serializable_pending = [
            self.__convert_deletion_for_serialization(deletion)
            for deletion in deepcopy(pending)
        ]
        configuration.DATA_PENDING_IMAGE_DELETIONS_PATH.write_text(
            dump({"pending_image_deletions": serializable_pending}, Dumper=Dumper),
            encoding="utf-8",
        )

    def flush(self) -> bool:
        if self._pending is not None and self.is_dirty:
            try:
                self.__save_data(self._pending)
            except OSError as e:
                raise ImageStoreError(
                    f"Could not write pending image deletions: {e}"
                ) from e
            self.is_dirty = False
            return True
        return False

    def __convert_deletion_for_serialization(
        self, deletion: PendingImageDeletion
    ) -> dict[str, Any]:
        serializable_deletion = cast(dict[str, Any], deletion)
        serializable_deletion["created_at"] = time.datetime_to_iso_str(
            deletion["created_at"]
        )
        serializable_deletion["deleted_at"] = time.datetime_to_iso_str_optional(
            deletion["deleted_at"]
        )
        serializable_deletion["failed_at"] = time.datetime_to_iso_str_optional(
            deletion["failed_at"]
        )
        return serializable_deletion

    def __convert_deletion_for_deserialization(
        self, deletion: dict[str, Any]
    ) -> PendingImageDeletion:
        deserializable_deletion = deletion
        deserializable_deletion["created_at"] = (
            time.datetime_from_str_optional(deletion.get("created_at"))
            or time.now_utc()
        )
        deserializable_deletion["deleted_at"] = time.datetime_from_str_optional(
            deletion.get("deleted_at")
        )
        deserializable_deletion["failed_at"] = time.datetime_from_str_optional(
            deletion.get("failed_at")
        )
        deserializable_deletion.setdefault("error", None)
        return cast(PendingImageDeletion, deserializable_deletion)

    def upload_image(self, source: Path, folder: str) -> str:
        """Copy an image into the store and return its URL."""
        if not source.is_file():
            raise ImageStoreError(f"Image file not found: {source}")

        target_dir = configuration.DATA_IMAGES_DIR / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / f"{uuid.uuid4().hex}{source.suffix.lower()}"
        try:
            shutil.copy2(source, target)
        except OSError as e:
            raise ImageStoreError(f"Could not store image {source}: {e}") from e

        logger.info("Uploaded image %s to %s", source.name, folder)
        return target.resolve().as_uri()

    def image_path(self, image_url: str) -> Optional[Path]:
        """Local file behind an image URL, or None when the URL isn't from this store."""
        parsed = urlparse(image_url)
        if parsed.scheme != "file":
            return None
        path = Path(unquote(parsed.path))
        images_dir = configuration.DATA_IMAGES_DIR.resolve()
        if not path.is_relative_to(images_dir):
            return None
        return path

    def public_id_from_url(self, image_url: str) -> Optional[str]:
        path = self.image_path(image_url)
        if path is None:
            return None
        relative = path.relative_to(configuration.DATA_IMAGES_DIR.resolve())
        return relative.with_suffix("").as_posix()

    def mark_for_deletion(self, image_url: str) -> None:
        public_id = self.public_id_from_url(image_url)
        if public_id is None:
            raise ImageStoreError(f"Invalid image URL: {image_url}")

        self.is_dirty = True
        self.pending.append(
            {
                "public_id": public_id,
                "image_url": image_url,
                "status": "pending",
                "created_at": time.now_utc(),
                "deleted_at": None,
                "failed_at": None,
                "error": None,
            }
        )
        logger.info("Image marked for deletion: %s", public_id)

    def get_pending_deletions(self) -> list[PendingImageDeletion]:
        return deepcopy(
            [deletion for deletion in self.pending if deletion["status"] == "pending"]
        )

    def cleanup_pending(self) -> CleanupResult:
        """Remove the files of every queued deletion and record the outcome."""
        result: CleanupResult = {"deleted": 0, "failed": 0}

        for deletion in self.pending:
            if deletion["status"] != "pending":
                continue
            self.is_dirty = True
            path = self.image_path(deletion["image_url"])
            try:
                if path is None:
                    raise ImageStoreError(f"Invalid image URL: {deletion['image_url']}")
                # An image that is already gone counts as deleted
                path.unlink(missing_ok=True)
            except (OSError, ImageStoreError) as e:
                deletion["status"] = "failed"
                deletion["error"] = str(e)
                deletion["failed_at"] = time.now_utc()
                result["failed"] += 1
                logger.error("Failed to delete image %s: %s", deletion["public_id"], e)
                continue

            deletion["status"] = "deleted"
            deletion["deleted_at"] = time.now_utc()
            result["deleted"] += 1
            logger.info("Deleted image %s", deletion["public_id"])

        return result

    def prune_deleted(self, older_than_days: int = 30) -> int:
        """Forget deletions that completed more than older_than_days ago."""
        cutoff = time.now_utc().subtract(days=older_than_days)
        kept = [
            deletion
            for deletion in self.pending
            if not (
                deletion["status"] == "deleted"
                and deletion["deleted_at"] is not None
                and deletion["deleted_at"] < cutoff
            )
        ]
        pruned = len(self.pending) - len(kept)
        if pruned > 0:
            self.is_dirty = True
            self._pending = kept
        return pruned


IMAGE_REPO = ImageRepository()
