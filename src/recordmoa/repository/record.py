# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from recordmoa import configuration, time
from recordmoa.model.category import Category
from recordmoa.model.record import (
    TIMESTAMP_FIELDS,
    Record,
    RecordId,
    generate_record_id,
)
from recordmoa.template.record import get_record_template

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """Raised when the record store can't be read or written, or an id is unknown."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class RecordRepository:
    def __init__(self) -> None:
        self._records: Optional[list[Record]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def records(self) -> list[Record]:
        if self._records is None:
            self.__load_data()
        if self._records is None:
            raise ValueError()
        return self._records

    def __load_data(self) -> None:
        records: list[Record] = []
        records_dir = configuration.DATA_RECORDS_DIR
        if not records_dir.is_dir():
            self._records = records
            return

        for file_path in sorted(records_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            try:
                raw_record = load(file_path.read_text(encoding="utf-8"), Loader=Loader)
            except (OSError, YAMLError) as e:
                raise RecordStoreError(
                    "unavailable", f"Could not read record file {file_path.name}: {e}"
                ) from e
            if raw_record is None:
                continue
            records.append(self.__convert_record_for_deserialization(raw_record))

        logger.debug("Loaded %d records from %s", len(records), records_dir)
        self._records = records

    def __save_data(self) -> None:
        records_dir = configuration.DATA_RECORDS_DIR
        records_dir.mkdir(parents=True, exist_ok=True)

        # Write dirty records
        for record in self.records:
            if record["id"] in self._dirty_ids:
                serializable_record = self.__convert_record_for_serialization(
                    deepcopy(record)
                )
                file_path = records_dir / f"{record['id']}.yaml"
                file_path.write_text(
                    dump(serializable_record, Dumper=Dumper, allow_unicode=True),
                    encoding="utf-8",
                )

        # Remove deleted record files
        for record_id in self._deleted_ids:
            file_path = records_dir / f"{record_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        logger.debug(
            "Flushed %d records, removed %d",
            len(self._dirty_ids),
            len(self._deleted_ids),
        )
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._records is not None and self.is_dirty:
            try:
                self.__save_data()
            except OSError as e:
                raise RecordStoreError(
                    "unavailable", f"Could not write records: {e}"
                ) from e
            self.is_dirty = False
            return True
        return False

    def __convert_record_for_serialization(self, record: Record) -> dict[str, Any]:
        serializable_record = cast(dict[str, Any], record)
        for field in TIMESTAMP_FIELDS:
            serializable_record[field] = time.datetime_to_iso_str_optional(
                serializable_record.get(field)
            )
        return serializable_record

    def __convert_record_for_deserialization(self, record: dict[str, Any]) -> Record:
        deserializable_record = cast(dict[str, Any], get_record_template())
        deserializable_record.update(record)
        for field in TIMESTAMP_FIELDS:
            deserializable_record[field] = time.datetime_from_str_optional(
                deserializable_record.get(field)
            )
        if deserializable_record["review"] is None:
            deserializable_record["review"] = ""
        return cast(Record, deserializable_record)

    def __find(self, id: RecordId) -> Record:
        matches = [record for record in self.records if record["id"] == id]
        if len(matches) == 0:
            raise RecordStoreError("not-found", f"Record {id} not found")
        return matches[0]

    def save_new_record(self, user_id: str, record: Record) -> RecordId:
        self.is_dirty = True

        now = time.now_utc()
        record["id"] = generate_record_id()
        record["user_id"] = user_id
        record["created_at"] = now
        record["updated_at"] = now

        self.records.append(record)
        self._dirty_ids.add(record["id"])

        logger.info("Created %s record %s", record["category"], record["id"])
        return record["id"]

    def modify_record(
        self,
        id: RecordId,
        title: Optional[str] = None,
        rating: Optional[int] = None,
        review: Optional[str] = None,
        image_url: Optional[str] = None,
        director: Optional[str] = None,
        cast: Optional[list[str]] = None,
        date_watched: Optional[pendulum.DateTime] = None,
        author: Optional[str] = None,
        publisher: Optional[str] = None,
        date_started: Optional[pendulum.DateTime] = None,
        date_finished: Optional[pendulum.DateTime] = None,
        location: Optional[str] = None,
        date_visited: Optional[pendulum.DateTime] = None,
        remove_image: bool = False,
    ) -> None:
        record = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        record["updated_at"] = time.now_utc()
        if title is not None:
            record["title"] = title
            if record["category"] == Category.PLACE:
                record["place_name"] = title
        if rating is not None:
            record["rating"] = rating
        if review is not None:
            record["review"] = review
        if image_url is not None:
            record["image_url"] = image_url
        if director is not None:
            record["director"] = director
        if cast is not None:
            record["cast"] = cast
        if date_watched is not None:
            record["date_watched"] = date_watched
        if author is not None:
            record["author"] = author
        if publisher is not None:
            record["publisher"] = publisher
        if date_started is not None:
            record["date_started"] = date_started
        if date_finished is not None:
            record["date_finished"] = date_finished
        if location is not None:
            record["location"] = location
        if date_visited is not None:
            record["date_visited"] = date_visited

        if remove_image:
            record["image_url"] = None

    def delete_record(self, id: RecordId) -> None:
        record = self.__find(id)

        self.is_dirty = True
        self.records.remove(record)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)
        logger.info("Deleted record %s", id)

    def get_record(self, id: RecordId) -> Record:
        return deepcopy(self.__find(id))

    def get_records_by_user(
        self, user_id: str, category: Optional[str] = None
    ) -> list[Record]:
        """
        Every record owned by the user, newest first.

        The whole matching set is returned; filtering beyond owner and
        category, sorting and paging happen on the caller's side.
        """
        records = [
            record
            for record in self.records
            if record["user_id"] == user_id
            and (category is None or record["category"] == category)
        ]
        records.sort(key=lambda record: time.to_epoch_millis(record["created_at"]), reverse=True)
        return deepcopy(records)


RECORD_REPO = RecordRepository()
