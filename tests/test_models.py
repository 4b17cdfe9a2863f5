from datetime import date, datetime

import pytest

from librarydesk.models import (
    Category,
    HistoryEntry,
    LibraryData,
    Loan,
    Reservation,
    Resource,
    Status,
    User,
    make_resource,
)


def test_make_resource_defaults():
    res = make_resource("Book", 1, "C++ Primer", "Lippman", 2012)
    assert res.category == Category.BOOK
    assert res.status == Status.AVAILABLE
    assert res.borrower == ""
    assert res.reserver == ""
    assert res.due_date is None


@pytest.mark.parametrize("name", ["Book", "Article", "Thesis", "Digital"])
def test_make_resource_each_category(name):
    res = make_resource(name, 3, "T", "A", 2000)
    assert str(res.category) == name


def test_make_resource_unknown_category():
    with pytest.raises(ValueError):
        make_resource("Magazine", 1, "T", "A", 2000)


def test_resource_to_json_without_due_date():
    obj = make_resource(Category.THESIS, 7, "Graphs", "Euler", 1736).to_json()
    assert obj["category"] == "Thesis"
    assert obj["status"] == "Available"
    assert obj["dueDate"] == ""
    assert obj["id"] == 7


def test_resource_json_round_trip():
    res = make_resource(Category.DIGITAL, 4, "Streams", "Ada", 1999)
    res.status = Status.BORROWED
    res.borrower = "Bob"
    res.reserver = "Carol"
    res.due_date = date(2024, 3, 9)
    obj = res.to_json()
    assert obj["dueDate"] == "2024-03-09"
    assert Resource.from_json(obj) == res


def test_resource_from_json_unknown_category():
    with pytest.raises(ValueError):
        Resource.from_json({"category": "Map", "id": 1})


def test_resource_from_json_missing_fields():
    res = Resource.from_json({"category": "Article"})
    assert res.id == 0
    assert res.title == ""
    assert res.year == 0
    assert res.status == ""


def test_resource_from_json_bad_due_date():
    res = Resource.from_json({"category": "Book", "dueDate": "2024-1-5"})
    assert res.due_date is None


def test_resource_from_json_keeps_unknown_status():
    res = Resource.from_json({"category": "Book", "status": "Lost"})
    assert res.status == "Lost"


def test_user_round_trip():
    user = User(2, "Alice", "alice@example.com", "Teacher")
    obj = user.to_json()
    assert obj == {"id": 2, "name": "Alice", "email": "alice@example.com", "role": "Teacher"}
    assert User.from_json(obj) == user


def test_user_from_json_wrong_types():
    user = User.from_json({"id": "x", "name": 5})
    assert user.id == 0
    assert user.name == ""


def test_history_round_trip():
    entry = HistoryEntry("Dune", "Bob", "Borrowed", datetime(2024, 5, 1, 10, 30, 15))
    obj = entry.to_json()
    assert obj["dateTime"] == "2024-05-01T10:30:15"
    assert obj["action"] == "Borrowed"
    assert HistoryEntry.from_json(obj) == entry


def test_history_default_and_invalid_time():
    assert HistoryEntry().to_json()["dateTime"] == ""
    entry = HistoryEntry.from_json({"dateTime": "not a time", "user": "Bob"})
    assert entry.date_time is None
    assert entry.user == "Bob"


def test_loan_and_reservation_fields():
    loan = Loan(1, 2, 3, date(2024, 1, 1), date(2024, 1, 15))
    assert loan.returned is False
    loan.returned = True
    assert loan.returned is True
    res = Reservation(9, 2, 3, date(2024, 1, 2))
    assert res.book_id == 2
    assert res.reservation_date == date(2024, 1, 2)


def test_library_data_independent_lists():
    first = LibraryData()
    second = LibraryData()
    first.books.append(make_resource("Book", 1, "T", "A", 1))
    assert second.books == []
    assert len(first.books) == 1