# SPDX-License-Identifier: MIT

import pendulum
import pytest

from recordmoa import configuration
from recordmoa.repository.configuration import ConfigurationRepository
from recordmoa.repository.id_map import IdMapRepository
from recordmoa.repository.image import ImageRepository, ImageStoreError
from recordmoa.repository.record import RecordRepository, RecordStoreError
from recordmoa.service.record import create_record


def test_save_stamps_owner_and_timestamps():
    repository = RecordRepository()
    id = repository.save_new_record("user-1", create_record("movie", "인터스텔라", 5))

    record = repository.get_record(id)
    assert record["user_id"] == "user-1"
    assert record["created_at"] is not None
    assert record["created_at"] == record["updated_at"]
    assert record["created_at"].timezone_name == "UTC"


def test_records_survive_flush_and_reload():
    repository = RecordRepository()
    record = create_record(
        "movie",
        "인터스텔라",
        5,
        review="다시 보고 싶다",
        director="크리스토퍼 놀란",
        cast=["Matthew McConaughey", "Anne Hathaway"],
        date_watched=pendulum.datetime(2026, 5, 1, tz="UTC"),
    )
    id = repository.save_new_record("user-1", record)
    assert repository.flush() is True
    assert (configuration.DATA_RECORDS_DIR / f"{id}.yaml").is_file()

    reloaded = RecordRepository().get_record(id)
    assert reloaded == repository.get_record(id)
    assert reloaded["cast"] == ["Matthew McConaughey", "Anne Hathaway"]
    assert reloaded["date_watched"] == pendulum.datetime(2026, 5, 1, tz="UTC")


def test_flush_without_changes_writes_nothing():
    repository = RecordRepository()
    repository.get_records_by_user("user-1")
    assert repository.flush() is False


def test_records_by_user_are_newest_first_and_scoped():
    repository = RecordRepository()
    first = repository.save_new_record("user-1", create_record("movie", "첫번째", 3))
    repository.save_new_record("user-2", create_record("movie", "다른 사람", 3))
    second = repository.save_new_record("user-1", create_record("book", "두번째", 3))
    repository.records[0]["created_at"] = pendulum.datetime(2026, 1, 1, tz="UTC")

    records = repository.get_records_by_user("user-1")
    assert [record["id"] for record in records] == [second, first]

    books = repository.get_records_by_user("user-1", "book")
    assert [record["id"] for record in books] == [second]


def test_returned_records_are_copies():
    repository = RecordRepository()
    id = repository.save_new_record("user-1", create_record("movie", "원래 제목", 3))

    repository.get_record(id)["title"] = "바뀐 제목"
    repository.get_records_by_user("user-1")[0]["title"] = "바뀐 제목"

    assert repository.get_record(id)["title"] == "원래 제목"


def test_modify_refreshes_updated_at_and_place_name():
    repository = RecordRepository()
    id = repository.save_new_record("user-1", create_record("place", "카페", 3))
    repository.records[0]["updated_at"] = pendulum.datetime(2026, 1, 1, tz="UTC")

    repository.modify_record(id, title="새 카페", location="서울")

    record = repository.get_record(id)
    assert record["title"] == "새 카페"
    assert record["place_name"] == "새 카페"
    assert record["location"] == "서울"
    assert record["updated_at"] > pendulum.datetime(2026, 1, 1, tz="UTC")


def test_delete_removes_the_file_on_flush():
    repository = RecordRepository()
    id = repository.save_new_record("user-1", create_record("movie", "삭제", 3))
    repository.flush()

    repository.delete_record(id)
    repository.flush()

    assert not (configuration.DATA_RECORDS_DIR / f"{id}.yaml").exists()
    assert RecordRepository().get_records_by_user("user-1") == []


def test_unknown_id_is_not_found():
    with pytest.raises(RecordStoreError) as error:
        RecordRepository().get_record("missing")
    assert error.value.code == "not-found"


def test_unreadable_file_is_unavailable():
    (configuration.DATA_RECORDS_DIR / "broken.yaml").write_text("a: [b", encoding="utf-8")
    with pytest.raises(RecordStoreError) as error:
        RecordRepository().get_records_by_user("user-1")
    assert error.value.code == "unavailable"


def test_stored_values_are_converted_once_at_load():
    (configuration.DATA_RECORDS_DIR / "handwritten.yaml").write_text(
        "id: handwritten\n"
        "user_id: user-1\n"
        "category: book\n"
        "title: 채식주의자\n"
        "rating: 4\n"
        "created_at: '2026-05-01'\n"
        "updated_at: yesterday-ish\n",
        encoding="utf-8",
    )
    record = RecordRepository().get_record("handwritten")

    assert record["created_at"] == pendulum.datetime(2026, 5, 1, tz="UTC")
    assert record["updated_at"] is None
    assert record["review"] == ""
    assert record["author"] is None


def test_missing_records_directory_is_empty():
    configuration.DATA_RECORDS_DIR.rmdir()
    assert RecordRepository().get_records_by_user("user-1") == []


def test_upload_copies_into_user_folder(tmp_path):
    source = tmp_path / "poster.PNG"
    source.write_bytes(b"png")
    repository = ImageRepository()

    url = repository.upload_image(source, "recordmoa/user-1/movie")

    path = repository.image_path(url)
    assert url.startswith("file://")
    assert path.read_bytes() == b"png"
    assert path.suffix == ".png"
    assert repository.public_id_from_url(url).startswith("recordmoa/user-1/movie/")


def test_upload_of_missing_file_fails(tmp_path):
    with pytest.raises(ImageStoreError):
        ImageRepository().upload_image(tmp_path / "nope.jpg", "recordmoa/user-1/movie")


@pytest.mark.parametrize(
    "url", ["https://example.com/a.jpg", "file:///etc/passwd", "not a url"]
)
def test_foreign_urls_cannot_be_queued(url):
    with pytest.raises(ImageStoreError):
        ImageRepository().mark_for_deletion(url)


def test_cleanup_deletes_queued_images(tmp_path):
    source = tmp_path / "poster.jpg"
    source.write_bytes(b"jpg")
    repository = ImageRepository()
    kept = repository.upload_image(source, "recordmoa/user-1/movie")
    removed = repository.upload_image(source, "recordmoa/user-1/movie")
    gone = repository.upload_image(source, "recordmoa/user-1/book")
    repository.image_path(gone).unlink()

    repository.mark_for_deletion(removed)
    repository.mark_for_deletion(gone)
    assert len(repository.get_pending_deletions()) == 2

    result = repository.cleanup_pending()

    assert result == {"deleted": 2, "failed": 0}
    assert repository.image_path(kept).is_file()
    assert not repository.image_path(removed).exists()
    assert repository.get_pending_deletions() == []
    assert {deletion["status"] for deletion in repository.pending} == {"deleted"}


def test_pending_deletions_survive_reload(tmp_path):
    source = tmp_path / "poster.jpg"
    source.write_bytes(b"jpg")
    repository = ImageRepository()
    url = repository.upload_image(source, "recordmoa/user-1/movie")
    repository.mark_for_deletion(url)
    repository.flush()

    pending = ImageRepository().get_pending_deletions()
    assert [deletion["image_url"] for deletion in pending] == [url]
    assert pending[0]["created_at"] is not None


def test_unwritable_pending_deletions_fail_with_image_error(tmp_path, monkeypatch):
    source = tmp_path / "poster.jpg"
    source.write_bytes(b"jpg")
    repository = ImageRepository()
    repository.mark_for_deletion(
        repository.upload_image(source, "recordmoa/user-1/movie")
    )
    monkeypatch.setattr(
        configuration,
        "DATA_PENDING_IMAGE_DELETIONS_PATH",
        tmp_path / "missing" / "pending_image_deletions.yaml",
    )

    with pytest.raises(ImageStoreError):
        repository.flush()
    assert repository.is_dirty


def test_prune_forgets_old_finished_deletions(tmp_path):
    source = tmp_path / "poster.jpg"
    source.write_bytes(b"jpg")
    repository = ImageRepository()
    for _ in range(2):
        repository.mark_for_deletion(
            repository.upload_image(source, "recordmoa/user-1/movie")
        )
    repository.cleanup_pending()
    repository.pending[0]["deleted_at"] = pendulum.now("UTC").subtract(days=60)

    assert repository.prune_deleted(30) == 1
    assert len(repository.pending) == 1


def test_id_map_hands_out_sequential_ids():
    repository = IdMapRepository()
    assert repository.associate_id("abc") == 1
    assert repository.associate_id("def") == 2
    assert repository.associate_id("abc") == 1
    assert repository.get_real_id(2) == "def"

    repository.flush()
    assert IdMapRepository().get_real_id(1) == "abc"

    repository.clear_ids()
    with pytest.raises(KeyError):
        repository.get_real_id(1)


def test_missing_config_gets_defaults():
    repository = ConfigurationRepository()
    config = repository.get_config()

    assert config["page_size"] == 10
    assert config["default_sort"] == "newest"
    assert config["log_level"] == "WARNING"
    assert repository.is_dirty is True

    repository.flush()
    assert ConfigurationRepository().get_config()["user_id"] == config["user_id"]


def test_old_config_file_gains_new_keys():
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text("user_id: me\nshow_header: false\n")

    config = ConfigurationRepository().get_config()

    assert config["user_id"] == "me"
    assert config["show_header"] is False
    assert config["page_size"] == 10


def test_update_config_rejects_bad_page_size():
    repository = ConfigurationRepository()
    with pytest.raises(ValueError):
        repository.update_config(page_size=0)

    repository.update_config(page_size=20, log_level="debug")
    assert repository.get_config()["page_size"] == 20
    assert repository.get_config()["log_level"] == "DEBUG"
