"""The library catalogue: resources, circulation, history and notifications."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable

from .models import (
    Category,
    HistoryEntry,
    Resource,
    Status,
    User,
    format_date,
    make_resource,
)
from .storage import (
    StorageError,
    load_history,
    load_resources,
    load_users,
    save_history,
    save_resources,
    save_users,
)

RESOURCES_FILE = "resources.json"
HISTORY_FILE = "history.json"
USERS_FILE = "users.json"

LOAN_PERIOD = timedelta(days=14)
DUE_SOON_WINDOW = timedelta(days=2)
ALL = "All"


class LibraryError(Exception):
    """An operation on the catalogue was refused."""


class Library:
    """The collection of resources together with borrowing history and users."""

    def __init__(
        self,
        resources: Iterable[Resource] | None = None,
        history: Iterable[HistoryEntry] | None = None,
        users: Iterable[User] | None = None,
    ) -> None:
        self.resources: list[Resource] = list(resources or [])
        self.history: list[HistoryEntry] = list(history or [])
        self.users: list[User] = list(users or [])
        self.warnings: list[str] = []

    @classmethod
    def load(cls, directory: str | Path) -> "Library":
        """Load the data files from a directory.

        A missing or corrupted resources or history file leaves that part
        empty and records a message in ``warnings``; a missing users file
        is silently treated as empty.
        """
        folder = Path(directory)
        library = cls()
        try:
            library.resources = load_resources(folder / RESOURCES_FILE)
        except StorageError as exc:
            library.warnings.append(str(exc))
        try:
            library.history = load_history(folder / HISTORY_FILE)
        except StorageError as exc:
            library.warnings.append(str(exc))
        library.users = load_users(folder / USERS_FILE)
        return library

    def save(self, directory: str | Path) -> None:
        """Write the data files into a directory; raises StorageError on failure."""
        folder = Path(directory)
        save_resources(folder / RESOURCES_FILE, self.resources)
        save_history(folder / HISTORY_FILE, self.history)
        save_users(folder / USERS_FILE, self.users)

    def ensure_sample(self) -> bool:
        """Add a sample book when the catalogue is empty; return whether one was added."""
        if self.resources:
            return False
        self.resources.append(make_resource(Category.BOOK, 1, "C++ Primer", "Lippman", 2012))
        return True

    def _resource_at(self, index: int, action: str) -> Resource:
        if index < 0 or index >= len(self.resources):
            raise LibraryError(f"Please select a valid resource to {action}.")
        return self.resources[index]

    def add_resource(
        self, category: Category | str, title: str, author: str, year: int
    ) -> Resource:
        """Append a new available resource and return it."""
        if not title.strip():
            raise LibraryError("Title cannot be empty.")
        try:
            resource = make_resource(category, len(self.resources) + 1, title, author, year)
        except ValueError as exc:
            raise LibraryError(str(exc)) from None
        self.resources.append(resource)
        return resource

    def remove_resource(self, index: int) -> Resource:
        """Remove and return the resource at a position."""
        self._resource_at(index, "remove")
        return self.resources.pop(index)

    def edit_resource(self, index: int, title: str, author: str, year: int) -> Resource:
        """Change the title, author and year of a resource."""
        resource = self._resource_at(index, "edit")
        if not title.strip():
            raise LibraryError("Title cannot be empty.")
        resource.title = title
        resource.author = author
        resource.year = year
        return resource

    def search(
        self, text: str = "", category: Category | str = ALL, status: Status | str = ALL
    ) -> list[Resource]:
        """Return resources matching a category, a status and a title/author substring."""
        needle = text.strip().lower()
        category_name = str(category)
        status_name = str(status)
        return [
            resource
            for resource in self.resources
            if (category_name == ALL or str(resource.category) == category_name)
            and (status_name == ALL or str(resource.status) == status_name)
            and (
                not needle
                or needle in resource.title.lower()
                or needle in resource.author.lower()
            )
        ]

    def borrow(self, index: int, borrower: str, today: date | None = None) -> date:
        """Lend a resource for the loan period; return its due date."""
        resource = self._resource_at(index, "borrow")
        if str(resource.status) == Status.BORROWED.value:
            raise LibraryError("This resource is already borrowed.")
        if not borrower.strip():
            raise LibraryError("Borrower name cannot be empty.")
        due = (today or date.today()) + LOAN_PERIOD
        resource.status = Status.BORROWED
        resource.borrower = borrower
        resource.due_date = due
        self.history.append(
            HistoryEntry(resource.title, borrower, "Borrowed", datetime.now().replace(microsecond=0))
        )
        return due

    def reserve(self, index: int, reserver: str) -> Resource:
        """Reserve a borrowed resource for someone."""
        resource = self._resource_at(index, "reserve")
        if str(resource.status) != Status.BORROWED.value:
            raise LibraryError("Only borrowed resources can be reserved.")
        if not reserver.strip():
            raise LibraryError("Reserver name cannot be empty.")
        resource.status = Status.RESERVED
        resource.reserver = reserver
        return resource

    def return_resource(self, index: int, now: datetime | None = None) -> Resource:
        """Return a borrowed or reserved resource, making it available again."""
        resource = self._resource_at(index, "return")
        if str(resource.status) not in (Status.BORROWED.value, Status.RESERVED.value):
            raise LibraryError("This resource is neither borrowed nor reserved.")
        moment = now or datetime.now().replace(microsecond=0)
        self.history.append(HistoryEntry(resource.title, resource.borrower, "Returned", moment))
        resource.status = Status.AVAILABLE
        resource.borrower = ""
        resource.reserver = ""
        resource.due_date = None
        return resource

    def renew(self, index: int) -> date | None:
        """Extend a loan by the loan period; return the new due date."""
        resource = self._resource_at(index, "renew")
        if str(resource.status) != Status.BORROWED.value:
            raise LibraryError("Only borrowed resources can be renewed.")
        if resource.reserver:
            raise LibraryError(
                "This resource is reserved by another user and cannot be renewed."
            )
        if resource.due_date is not None:
            resource.due_date = resource.due_date + LOAN_PERIOD
        return resource.due_date

    def notifications(self, today: date | None = None) -> list[str]:
        """Return alerts for overdue, soon-due and reserved-now-available items."""
        day = today or date.today()
        alerts: list[str] = []
        for resource in self.resources:
            status = str(resource.status)
            due = resource.due_date
            if status == Status.BORROWED.value and due is not None:
                if due < day:
                    alerts.append(
                        f"Overdue: '{resource.title}' borrowed by {resource.borrower} "
                        f"was due on {format_date(due)}."
                    )
                elif due <= day + DUE_SOON_WINDOW:
                    alerts.append(
                        f"Due soon: '{resource.title}' borrowed by {resource.borrower} "
                        f"is due on {format_date(due)}."
                    )
            if status == Status.AVAILABLE.value and resource.reserver:
                alerts.append(
                    f"Reserved item available: '{resource.title}' reserved by "
                    f"{resource.reserver} is now available."
                )
        return alerts

    def history_report(self) -> str:
        """Return the borrow/return history as text, one entry per line."""
        if not self.history:
            return "No history yet."
        return "".join(
            f"{entry.resource_title} | {entry.user} | {entry.action} | "
            f"{entry.date_time.strftime('%Y-%m-%d %H:%M') if entry.date_time else ''}\n"
            for entry in self.history
        )