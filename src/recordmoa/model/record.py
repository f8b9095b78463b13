# SPDX-License-Identifier: MIT

import uuid
from typing import Optional, TypedDict

import pendulum

type RecordId = str


class Record(TypedDict):
    id: Optional[RecordId]
    user_id: str
    category: str  # "movie" | "book" | "place", fixed at creation
    title: str
    rating: int  # 1-5
    review: str
    image_url: Optional[str]
    created_at: Optional[pendulum.DateTime]
    updated_at: Optional[pendulum.DateTime]

    # movie
    director: Optional[str]
    cast: Optional[list[str]]
    date_watched: Optional[pendulum.DateTime]

    # book
    author: Optional[str]
    publisher: Optional[str]
    date_started: Optional[pendulum.DateTime]
    date_finished: Optional[pendulum.DateTime]

    # place
    place_name: Optional[str]  # mirrors title
    location: Optional[str]
    date_visited: Optional[pendulum.DateTime]


TIMESTAMP_FIELDS = (
    "created_at",
    "updated_at",
    "date_watched",
    "date_started",
    "date_finished",
    "date_visited",
)


def generate_record_id() -> RecordId:
    return str(uuid.uuid4())
