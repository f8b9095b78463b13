# SPDX-License-Identifier: MIT

import pytest

from recordmoa.query.sort import SORT_OPTIONS, collation_key, sort_records


def titles(records):
    return [record["title"] for record in records]


@pytest.mark.parametrize("option", list(SORT_OPTIONS))
def test_sort_is_stable_for_equal_keys(make_record, now, option):
    records = [make_record("같은 제목", rating=4, created_at=now) for _ in range(5)]
    result = sort_records(records, option)
    assert [record["id"] for record in result] == [record["id"] for record in records]


def test_newest_and_oldest(make_record, now):
    records = [
        make_record("중간", created_at=now.subtract(days=2)),
        make_record("최신", created_at=now),
        make_record("과거", created_at=now.subtract(days=10)),
    ]
    assert titles(sort_records(records, "newest")) == ["최신", "중간", "과거"]
    assert titles(sort_records(records, "oldest")) == ["과거", "중간", "최신"]


def test_missing_creation_time_sorts_as_oldest(make_record, now):
    records = [make_record("날짜 없음"), make_record("있음", created_at=now)]
    assert titles(sort_records(records, "newest")) == ["있음", "날짜 없음"]


def test_rating_sorts_keep_input_order_within_a_rating(make_record):
    records = [
        make_record("a", rating=3),
        make_record("b", rating=5),
        make_record("c", rating=3),
        make_record("d", rating=1),
    ]
    assert titles(sort_records(records, "rating-high")) == ["b", "a", "c", "d"]
    assert titles(sort_records(records, "rating-low")) == ["d", "a", "c", "b"]


def test_title_sort_orders_hangul_in_dictionary_order(make_record):
    records = [make_record("다리"), make_record("가방"), make_record("나무")]
    assert titles(sort_records(records, "title-asc")) == ["가방", "나무", "다리"]
    assert titles(sort_records(records, "title-desc")) == ["다리", "나무", "가방"]


def test_title_sort_groups_scripts(make_record):
    records = [make_record("Apple"), make_record("가나"), make_record("2046")]
    assert titles(sort_records(records, "title-asc")) == ["2046", "가나", "Apple"]


def test_title_sort_ignores_case(make_record):
    records = [make_record("banana"), make_record("Apple"), make_record("cherry")]
    assert titles(sort_records(records, "title-asc")) == ["Apple", "banana", "cherry"]


def test_collation_key_normalizes_full_width_letters():
    assert collation_key("ＡＢＣ") == collation_key("abc")


def test_sort_returns_new_list(make_record):
    records = [make_record("b"), make_record("a")]
    result = sort_records(records, "title-asc")
    assert titles(records) == ["b", "a"]
    assert titles(result) == ["a", "b"]


def test_unknown_sort_option_raises(make_record):
    with pytest.raises(ValueError):
        sort_records([make_record()], "popular")
