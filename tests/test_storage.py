import json
from datetime import date, datetime

import pytest

from librarydesk.models import Category, HistoryEntry, Status, User, make_resource
from librarydesk.storage import (
    StorageError,
    load_history,
    load_resources,
    load_users,
    save_history,
    save_resources,
    save_users,
)


def _sample_resources():
    book = make_resource(Category.BOOK, 1, "C++ Primer", "Lippman", 2012)
    article = make_resource(Category.ARTICLE, 2, "Über Alles", "Gauss", 1801)
    article.status = Status.BORROWED
    article.borrower = "Bob"
    article.due_date = date(2024, 6, 20)
    return [book, article]


def test_resources_round_trip(tmp_path):
    path = tmp_path / "resources.json"
    resources = _sample_resources()
    save_resources(path, resources)
    assert load_resources(path) == resources


def test_resources_file_is_json_array(tmp_path):
    path = tmp_path / "resources.json"
    save_resources(path, _sample_resources())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [item["category"] for item in data] == ["Book", "Article"]
    assert data[0]["dueDate"] == ""


def test_load_resources_skips_unknown_category(tmp_path):
    path = tmp_path / "resources.json"
    path.write_text(
        json.dumps([{"category": "Map", "id": 1}, 3, {"category": "Thesis", "id": 2}]),
        encoding="utf-8",
    )
    loaded = load_resources(path)
    assert [r.id for r in loaded] == [2]


def test_load_resources_missing_file(tmp_path):
    with pytest.raises(StorageError, match="for reading"):
        load_resources(tmp_path / "absent.json")


@pytest.mark.parametrize("content", ["{not json", '{"a": 1}', ""])
def test_load_resources_corrupted(tmp_path, content):
    path = tmp_path / "resources.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError, match="Invalid or corrupted resource file"):
        load_resources(path)


def test_save_into_missing_directory(tmp_path):
    with pytest.raises(StorageError, match="for writing"):
        save_resources(tmp_path / "nope" / "resources.json", [])


def test_history_round_trip(tmp_path):
    path = tmp_path / "history.json"
    history = [
        HistoryEntry("Dune", "Bob", "Borrowed", datetime(2024, 5, 1, 9, 0, 0)),
        HistoryEntry("Dune", "Bob", "Returned", datetime(2024, 5, 3, 17, 45, 2)),
    ]
    save_history(path, history)
    assert load_history(path) == history


def test_load_history_corrupted(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("42", encoding="utf-8")
    with pytest.raises(StorageError, match="history"):
        load_history(path)


def test_users_round_trip(tmp_path):
    path = tmp_path / "users.json"
    users = [User(1, "Alice", "alice@example.com", "Student")]
    save_users(path, users)
    assert load_users(path) == users


def test_load_users_missing_or_bad(tmp_path):
    assert load_users(tmp_path / "absent.json") == []
    bad = tmp_path / "users.json"
    bad.write_text('{"id": 1}', encoding="utf-8")
    assert load_users(bad) == []