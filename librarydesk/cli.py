"""Interactive command-line front end for the library catalogue."""

from __future__ import annotations

import argparse
import re
import shlex
import sys
from typing import Callable, Iterable, Optional, Sequence

from .catalog import ALL, Library, LibraryError
from .models import Resource, User, format_date
from .storage import StorageError

ROLES = ("Student", "Teacher", "Library Administrator", "Library Employee")
CATEGORIES = ("Book", "Article", "Thesis", "Digital")
STATUSES = ("Available", "Borrowed", "Reserved")
HEADERS = ("ID", "Title", "Author", "Category", "Status", "Borrower", "Reserver", "Due Date")

_INTEGER = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_HELP_TITLE = "Commands (ROW is the 1-based row number shown by 'list'):"
_COMMAND_USAGE = (
    ("list", "show all resources"),
    ("add TYPE TITLE AUTHOR YEAR", "add a resource (Book, Article, Thesis, Digital)"),
    ("edit ROW TITLE AUTHOR YEAR", "change a resource"),
    ("remove ROW", "remove a resource"),
    ("search [TEXT] [category=C] [status=S]", "filter resources"),
    ("borrow ROW NAME", "lend a resource for 14 days"),
    ("reserve ROW NAME", "reserve a borrowed resource"),
    ("return ROW", "return a borrowed or reserved resource"),
    ("renew ROW", "extend a loan by 14 days"),
    ("history", "show the borrow/return history"),
    ("notify", "show library notifications"),
    ("schedule", "show opening hours and events"),
    ("help", "show this text"),
    ("quit", "save and leave"),
)


def _help_text() -> str:
    width = max(len(usage) for usage, _ in _COMMAND_USAGE)
    lines = [f"  {usage.ljust(width)}  {text}" for usage, text in _COMMAND_USAGE]
    return "\n".join([_HELP_TITLE, *lines])


def login(name: str, email: str, role: str) -> User:
    """Create the logged-in user; name and email are trimmed and must not be empty."""
    name = name.strip()
    email = email.strip()
    if not name or not email:
        raise ValueError("Name and Email cannot be empty.")
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role!r}.")
    return User(id=0, name=name, email=email, role=role)


def parse_year(text: str) -> int:
    """Read a year as a whole number; anything unreadable gives 0."""
    stripped = text.strip()
    if not _INTEGER.fullmatch(stripped):
        return 0
    value = int(stripped)
    if value < _INT_MIN or value > _INT_MAX:
        return 0
    return value


def schedule_text() -> str:
    """Return the library's opening hours and upcoming events."""
    return (
        "Library Hours:\n"
        "Monday - Friday: 8:00 AM - 8:00 PM\n"
        "Saturday: 9:00 AM - 5:00 PM\n"
        "Sunday: Closed\n"
        "\n"
        "Upcoming Events:\n"
        "June 20: Book Club Meeting\n"
        "June 25: Research Workshop\n"
        "July 2: Author Visit"
    )


def _row(resource: Resource) -> tuple[str, ...]:
    return (
        str(resource.id),
        resource.title,
        resource.author,
        str(resource.category),
        str(resource.status),
        resource.borrower,
        resource.reserver,
        format_date(resource.due_date),
    )


def format_table(resources: Iterable[Resource]) -> str:
    """Render resources as an aligned text table with a header line."""
    rows = [HEADERS, *(_row(resource) for resource in resources)]
    widths = [max(len(row[column]) for row in rows) for column in range(len(HEADERS))]

    def render(row: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    separator = "  ".join("-" * width for width in widths)
    return "\n".join([render(rows[0]), separator, *(render(row) for row in rows[1:])])


def _index(text: str) -> int:
    return int(text) - 1 if _INTEGER.fullmatch(text.strip()) else -1


def _prompt_user(default_role: str) -> User | None:
    while True:
        try:
            name = input("Name: ")
            email = input("Email: ")
            role = input(f"Role ({', '.join(ROLES)}) [{default_role}]: ").strip()
        except EOFError:
            return None
        try:
            return login(name, email, role or default_role)
        except ValueError as exc:
            print(f"Input Error: {exc}")


def _print_notifications(library: Library, quiet: bool = True) -> None:
    alerts = library.notifications()
    if alerts:
        print("Library Notifications:")
        print("\n\n".join(alerts))
    elif not quiet:
        print("No notifications.")


_Handler = Callable[[list], Optional[str]]


class _Shell:
    def __init__(self, library: Library) -> None:
        self.library = library
        self.commands: dict[str, _Handler] = {
            "list": self.do_list,
            "add": self.do_add,
            "edit": self.do_edit,
            "remove": self.do_remove,
            "search": self.do_search,
            "borrow": self.do_borrow,
            "reserve": self.do_reserve,
            "return": self.do_return,
            "renew": self.do_renew,
            "history": self.do_history,
            "notify": self.do_notify,
            "schedule": lambda args: schedule_text(),
            "help": lambda args: _help_text(),
        }

    def run(self) -> None:
        while True:
            try:
                line = input("> ")
            except EOFError:
                return
            try:
                words = shlex.split(line)
            except ValueError as exc:
                print(f"Input Error: {exc}")
                continue
            if not words:
                continue
            name, args = words[0].lower(), words[1:]
            if name in ("quit", "exit"):
                return
            handler = self.commands.get(name)
            if handler is None:
                print(f"Unknown command: {name}. Type 'help' for a list of commands.")
                continue
            try:
                output = handler(args)
            except LibraryError as exc:
                print(f"Error: {exc}")
                continue
            if output is not None:
                print(output)

    @staticmethod
    def _need(args: list[str], count: int, usage: str) -> None:
        if len(args) < count:
            raise LibraryError(f"Usage: {usage}")

    def do_list(self, args: list[str]) -> str:
        return format_table(self.library.resources)

    def do_add(self, args: list[str]) -> None:
        self._need(args, 4, "add TYPE TITLE AUTHOR YEAR")
        category, title, author, year = args[0], args[1], args[2], parse_year(args[3])
        if category not in CATEGORIES:
            raise LibraryError(f"Unknown resource type: {category}.")
        resource = self.library.add_resource(category, title, author, year)
        print(f"Added {resource.category} '{resource.title}' with ID {resource.id}.")

    def do_edit(self, args: list[str]) -> None:
        self._need(args, 4, "edit ROW TITLE AUTHOR YEAR")
        resource = self.library.edit_resource(
            _index(args[0]), args[1], args[2], parse_year(args[3])
        )
        print(f"Updated '{resource.title}'.")

    def do_remove(self, args: list[str]) -> None:
        self._need(args, 1, "remove ROW")
        resource = self.library.remove_resource(_index(args[0]))
        print(f"Removed '{resource.title}'.")

    def do_search(self, args: list[str]) -> None:
        category, status, words = ALL, ALL, []
        for arg in args:
            if arg.startswith("category="):
                category = arg.partition("=")[2]
            elif arg.startswith("status="):
                status = arg.partition("=")[2]
            else:
                words.append(arg)
        print(format_table(self.library.search(" ".join(words), category, status)))

    def do_borrow(self, args: list[str]) -> None:
        self._need(args, 1, "borrow ROW NAME")
        borrower = " ".join(args[1:])
        due = self.library.borrow(_index(args[0]), borrower)
        print(f"Resource borrowed by {borrower}\nDue date: {format_date(due)}")
        _print_notifications(self.library)

    def do_reserve(self, args: list[str]) -> None:
        self._need(args, 1, "reserve ROW NAME")
        reserver = " ".join(args[1:])
        self.library.reserve(_index(args[0]), reserver)
        print(f"Resource reserved by {reserver}")
        _print_notifications(self.library)

    def do_return(self, args: list[str]) -> None:
        self._need(args, 1, "return ROW")
        self.library.return_resource(_index(args[0]))
        print("Resource has been returned and is now available.")
        _print_notifications(self.library)

    def do_renew(self, args: list[str]) -> None:
        self._need(args, 1, "renew ROW")
        due = self.library.renew(_index(args[0]))
        print(f"Resource renewed. New due date: {format_date(due)}")
        _print_notifications(self.library)

    def do_history(self, args: list[str]) -> str:
        return self.library.history_report().rstrip("\n")

    def do_notify(self, args: list[str]) -> None:
        _print_notifications(self.library, quiet=False)


def main(argv: Sequence[str] | None = None) -> int:
    """Log in, run the interactive catalogue and save the data on leaving."""
    parser = argparse.ArgumentParser(prog="librarydesk", description="Library management desk.")
    parser.add_argument("--data-dir", default=".", help="directory holding the JSON data files")
    parser.add_argument("--name", help="name of the user logging in")
    parser.add_argument("--email", help="e-mail of the user logging in")
    parser.add_argument("--role", choices=ROLES, default=ROLES[0], help="role of the user")
    options = parser.parse_args(argv)

    if options.name is not None and options.email is not None:
        try:
            user = login(options.name, options.email, options.role)
        except ValueError as exc:
            print(f"Input Error: {exc}", file=sys.stderr)
            return 1
    else:
        prompted = _prompt_user(options.role)
        if prompted is None:
            return 0
        user = prompted

    library = Library.load(options.data_dir)
    for warning in library.warnings:
        print(f"File Error: {warning}", file=sys.stderr)
    library.ensure_sample()

    print(f"Logged in as: {user.name} ({user.role})")
    _print_notifications(library)

    _Shell(library).run()

    try:
        library.save(options.data_dir)
    except StorageError as exc:
        print(f"File Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())