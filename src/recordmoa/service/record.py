# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import pendulum

from recordmoa.model.category import CATEGORIES, CATEGORY_FIELDS, Category
from recordmoa.model.record import Record, RecordId
from recordmoa.repository.image import IMAGE_REPO, ImageRepository
from recordmoa.repository.record import RECORD_REPO, RecordRepository, RecordStoreError
from recordmoa.service.image import delete_record_image
from recordmoa.template.record import get_record_template

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RecordValidationError(Exception):
    """Raised when record validation fails."""

    pass


def validate_title(title: str) -> str:
    stripped = title.strip()
    if stripped == "":
        raise RecordValidationError("Title must not be empty.")
    return stripped


def validate_rating(rating: int) -> int:
    if not isinstance(rating, int) or isinstance(rating, bool):
        raise RecordValidationError(
            f"Rating must be an integer. Got: {type(rating).__name__}"
        )
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise RecordValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING} (inclusive). Got: {rating}"
        )
    return rating


def validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise RecordValidationError(
            f"Unknown category '{category}'. Valid categories: {', '.join(CATEGORIES)}"
        )
    return category


def validate_category_fields(category: str, fields: dict[str, Any]) -> None:
    """
    Check that only fields belonging to the category are set.

    A movie can't carry an author, a book can't carry a location, and so on.
    """
    allowed = set(CATEGORY_FIELDS[category])
    foreign = sorted(
        name
        for name, value in fields.items()
        if value is not None and name not in allowed
    )
    if foreign:
        raise RecordValidationError(
            f"Fields not available for {category} records: {', '.join(foreign)}"
        )


def parse_cast(cast_str: Optional[str]) -> Optional[list[str]]:
    """Split a comma separated cast list, dropping empty names."""
    if cast_str is None:
        return None
    names = [name.strip() for name in cast_str.split(",")]
    names = [name for name in names if name != ""]
    return names if len(names) > 0 else None


def create_record(
    category: str,
    title: str,
    rating: int,
    review: str = "",
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
) -> Record:
    """
    Build an unsaved record, populating only the fields of its category.

    The store assigns the id, the owner and both timestamps on save.
    """
    validate_category(category)
    category_fields: dict[str, Any] = {
        "director": director,
        "cast": cast,
        "date_watched": date_watched,
        "author": author,
        "publisher": publisher,
        "date_started": date_started,
        "date_finished": date_finished,
        "location": location,
        "date_visited": date_visited,
    }
    validate_category_fields(category, category_fields)

    record = get_record_template()
    record["category"] = category
    record["title"] = validate_title(title)
    record["rating"] = validate_rating(rating)
    record["review"] = review
    record["image_url"] = image_url

    if category == Category.MOVIE:
        record["director"] = director
        record["cast"] = cast
        record["date_watched"] = date_watched
    elif category == Category.BOOK:
        record["author"] = author
        record["publisher"] = publisher
        record["date_started"] = date_started
        record["date_finished"] = date_finished
    elif category == Category.PLACE:
        record["place_name"] = record["title"]
        record["location"] = location
        record["date_visited"] = date_visited

    return record


def add_record(
    user_id: str,
    record: Record,
    repository: RecordRepository = RECORD_REPO,
) -> RecordId:
    return repository.save_new_record(user_id, record)


def get_owned_record(
    user_id: str,
    id: RecordId,
    repository: RecordRepository = RECORD_REPO,
) -> Record:
    """The record with this id, provided it belongs to user_id."""
    record = repository.get_record(id)
    if record["user_id"] != user_id:
        logger.warning("User %s tried to access record %s of another user", user_id, id)
        raise RecordStoreError("permission-denied", f"Record {id} belongs to another user")
    return record


def validate_modification(
    record: Record,
    title: Optional[str] = None,
    rating: Optional[int] = None,
    **category_fields: Any,
) -> Optional[str]:
    """
    Check an edit against an existing record without applying it.

    Returns the trimmed title when one is given.
    """
    if category_fields.get("place_name") is not None:
        raise RecordValidationError("place_name follows the title; change the title.")
    category_fields.pop("place_name", None)
    validate_category_fields(record["category"], category_fields)

    if rating is not None:
        validate_rating(rating)
    if title is not None:
        return validate_title(title)
    return None


def modify_record(
    user_id: str,
    id: RecordId,
    title: Optional[str] = None,
    rating: Optional[int] = None,
    review: Optional[str] = None,
    image_url: Optional[str] = None,
    remove_image: bool = False,
    repository: RecordRepository = RECORD_REPO,
    image_repository: ImageRepository = IMAGE_REPO,
    **category_fields: Any,
) -> None:
    """
    Edit an existing record of user_id in place.

    The category can't be changed; category fields must belong to the
    record's existing category. Replacing or removing the image queues the
    old one for deletion.
    """
    record = get_owned_record(user_id, id, repository)
    title = validate_modification(record, title, rating, **category_fields)
    category_fields.pop("place_name", None)

    old_image_url = record["image_url"]
    repository.modify_record(
        id,
        title=title,
        rating=rating,
        review=review,
        image_url=image_url,
        remove_image=remove_image,
        **category_fields,
    )

    if old_image_url is not None and (
        remove_image or (image_url is not None and image_url != old_image_url)
    ):
        delete_record_image(old_image_url, image_repository)


def delete_record(
    user_id: str,
    id: RecordId,
    repository: RecordRepository = RECORD_REPO,
    image_repository: ImageRepository = IMAGE_REPO,
) -> Optional[str]:
    """
    Delete a record of user_id and queue its image for cleanup.

    Returns the image error message when the image couldn't be queued; the
    record is deleted regardless.
    """
    record = get_owned_record(user_id, id, repository)
    image_error: Optional[str] = None
    if record["image_url"] is not None:
        image_error = delete_record_image(record["image_url"], image_repository)
    repository.delete_record(id)
    return image_error
