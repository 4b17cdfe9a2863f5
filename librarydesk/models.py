"""Domain objects for the library catalogue and their JSON representations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


class Category(str, Enum):
    """Kind of library resource."""

    BOOK = "Book"
    ARTICLE = "Article"
    THESIS = "Thesis"
    DIGITAL = "Digital"

    def __str__(self) -> str:
        return self.value


class Status(str, Enum):
    """Circulation state of a resource."""

    AVAILABLE = "Available"
    BORROWED = "Borrowed"
    RESERVED = "Reserved"

    def __str__(self) -> str:
        return self.value


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _coerce_status(value: str) -> Status | str:
    try:
        return Status(value)
    except ValueError:
        return value


def format_date(value: date | None) -> str:
    """Render a date as yyyy-MM-dd, or an empty string when there is none."""
    return value.strftime("%Y-%m-%d") if value is not None else ""


def parse_date(text: str) -> date | None:
    """Parse a strict yyyy-MM-dd date; anything else yields None."""
    match = _DATE_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


@dataclass
class Resource:
    """A catalogued item that can be borrowed, reserved and returned."""

    id: int
    title: str
    author: str
    year: int
    category: Category
    status: Status | str = Status.AVAILABLE
    borrower: str = ""
    reserver: str = ""
    due_date: date | None = None

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object stored in the resources file."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "year": self.year,
            "category": str(self.category),
            "status": str(self.status),
            "borrower": self.borrower,
            "reserver": self.reserver,
            "dueDate": format_date(self.due_date),
        }

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Resource":
        """Build a resource from its JSON object.

        Raises ValueError when the category is not a known one.
        """
        resource = make_resource(
            _to_str(obj.get("category")),
            _to_int(obj.get("id")),
            _to_str(obj.get("title")),
            _to_str(obj.get("author")),
            _to_int(obj.get("year")),
        )
        resource.status = _coerce_status(_to_str(obj.get("status")))
        resource.borrower = _to_str(obj.get("borrower"))
        resource.reserver = _to_str(obj.get("reserver"))
        due = _to_str(obj.get("dueDate"))
        resource.due_date = parse_date(due) if due else None
        return resource


def make_resource(
    category: Category | str, resource_id: int, title: str, author: str, year: int
) -> Resource:
    """Create an available resource of the given category.

    Raises ValueError for an unknown category.
    """
    try:
        kind = Category(category)
    except ValueError:
        raise ValueError(f"unknown resource category: {category!r}") from None
    return Resource(id=resource_id, title=title, author=author, year=year, category=kind)


@dataclass
class User:
    """A library user with a role."""

    id: int
    name: str
    email: str
    role: str

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object stored in the users file."""
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "User":
        """Build a user from its JSON object; missing fields become empty."""
        return cls(
            id=_to_int(obj.get("id")),
            name=_to_str(obj.get("name")),
            email=_to_str(obj.get("email")),
            role=_to_str(obj.get("role")),
        )


@dataclass
class Loan:
    """A loan of a book to a user."""

    loan_id: int
    book_id: int
    user_id: int
    borrow_date: date
    due_date: date
    returned: bool = False


@dataclass(frozen=True)
class Reservation:
    """A reservation of a book by a user."""

    reservation_id: int
    book_id: int
    user_id: int
    reservation_date: date


@dataclass
class LibraryData:
    """Plain container of books, users, loans and reservations."""

    books: list[Resource] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    loans: list[Loan] = field(default_factory=list)
    reservations: list[Reservation] = field(default_factory=list)


@dataclass
class HistoryEntry:
    """One borrow or return event."""

    resource_title: str = ""
    user: str = ""
    action: str = ""
    date_time: datetime | None = None

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object stored in the history file."""
        stamp = self.date_time.isoformat(timespec="seconds") if self.date_time else ""
        return {
            "resourceTitle": self.resource_title,
            "user": self.user,
            "action": self.action,
            "dateTime": stamp,
        }

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "HistoryEntry":
        """Build an entry from its JSON object; an unreadable time becomes None."""
        stamp = _to_str(obj.get("dateTime"))
        try:
            moment = datetime.fromisoformat(stamp) if stamp else None
        except ValueError:
            moment = None
        return cls(
            resource_title=_to_str(obj.get("resourceTitle")),
            user=_to_str(obj.get("user")),
            action=_to_str(obj.get("action")),
            date_time=moment,
        )