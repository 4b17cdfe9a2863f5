# librarydesk

A small circulation desk for a library. It keeps a catalogue of resources:
books, articles, theses and digital content. It lends them out for fourteen
days and lets a borrowed item be reserved by someone else. It renews loans
and records every borrow and return in a history.

The state is kept in three JSON files: `resources.json`, `history.json` and
`users.json`. They sit in a data directory, which is the current directory
unless `--data-dir` says otherwise. The files are read at start-up and
written back when the session ends.

## Installing

```
pip install .
```

## Running

```
librarydesk [--data-dir DIR] [--name NAME] [--email EMAIL] [--role ROLE]
```

### Signing in

You sign in with a name, an e-mail address and a role. The role is one of
`Student`, `Teacher`, `Library Administrator` or `Library Employee`, and
`Student` is the default.

- If both `--name` and `--email` are given, they are used directly.
- Otherwise the desk asks for them.
- The name and the e-mail address are trimmed and must not be empty.

### Start-up

After signing in, the data files are loaded:

- A missing or unreadable resources or history file is reported on standard
  error and treated as empty.
- A missing users file is ignored.
- When the catalogue is empty, a single sample book is added so that there is
  something to work with.

The desk then prints who is logged in, followed by any notices:

- items whose due date has passed,
- items due within the next two days,
- reserved items that are available again.

### Commands

At the `>` prompt the following commands are accepted. Arguments are split
like a shell line, so quote titles that contain spaces. `ROW` is the 1-based
row number shown by `list`.

```
list                                   show all resources
add TYPE TITLE AUTHOR YEAR             add a resource (Book, Article, Thesis, Digital)
edit ROW TITLE AUTHOR YEAR             change a resource
remove ROW                             remove a resource
search [TEXT] [category=C] [status=S]  filter resources
borrow ROW NAME                        lend a resource for 14 days
reserve ROW NAME                       reserve a borrowed resource
return ROW                             return a borrowed or reserved resource
renew ROW                              extend a loan by 14 days
history                                show the borrow/return history
notify                                 show library notifications
schedule                               show opening hours and events
help                                   show the command list
quit                                   save and leave
```

A year that is not a whole number is stored as 0. `exit` and end of input
also leave the desk, and the data files are saved in every case.

## Using it as a library

```python
from datetime import date, datetime
from librarydesk.catalog import Library

library = Library.load(".")
library.ensure_sample()

index = len(library.resources)
library.add_resource("Article", "Graph Rewriting", "A. Writer", 2021)
library.borrow(index, "Ada", date.today())
print("\n".join(library.notifications(date.today())))

library.return_resource(index, datetime.now())
print(library.history_report())

library.save(".")
```

Indexes passed to `Library` methods are 0-based positions in
`library.resources`. A new resource gets an ID one greater than the number of
resources already in the catalogue.

### Errors

Operations that the desk refuses raise `librarydesk.catalog.LibraryError`.
For example:

- an index with no resource behind it,
- an empty title or name,
- borrowing an item that is already borrowed,
- reserving an item that is not borrowed,
- renewing an item that someone has reserved.

Files that cannot be read or written raise `librarydesk.storage.StorageError`.

### Searching

`Library.search(text, category, status)` filters the catalogue:

- `text` is matched, ignoring case, against title and author.
- `category` and `status` accept `"All"` or a specific value.

### Other modules

`librarydesk.models` holds the data classes (`Resource`, `User`,
`HistoryEntry`, `Loan`, `Reservation`, `LibraryData`) and the `Category` and
`Status` enums. `librarydesk.storage` reads and writes the JSON files.

## What it does not do

The desk is a text command shell. It has no graphical window.

Users are only signed in for display. They are not checked against
`users.json`, and nothing adds to that file.

`Loan`, `Reservation` and `LibraryData` are plain data classes that the
catalogue does not use. Loans and reservations are tracked on each
`Resource` through its status, borrower, reserver and due date.

## Tests

```
pip install .[test]
pytest
```