# SPDX-License-Identifier: MIT

from recordmoa.model.record import Record


def get_record_template() -> Record:
    return {
        "id": None,
        "user_id": "",
        "category": "",  # Must be set
        "title": "",
        "rating": 0,
        "review": "",
        "image_url": None,
        "created_at": None,
        "updated_at": None,
        "director": None,
        "cast": None,
        "date_watched": None,
        "author": None,
        "publisher": None,
        "date_started": None,
        "date_finished": None,
        "place_name": None,
        "location": None,
        "date_visited": None,
    }
