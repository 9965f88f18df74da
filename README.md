# stockreg

A small shareholder registry kept in one SQLite database file. It records:

- shareholders: name, date of birth, passport details, e-mail and phone;
- securities: name, type (ordinary or preferred), nominal value and quantity in a package;
- owners, meaning which shareholder holds which package and since when;
- shareholder meetings: agenda, date, start time and end time;
- attendance of shareholders at meetings;
- share operations: seller, buyer, time of the deal and package.

It also builds two reports. One lists shareholders with their holdings. The other gives meeting attendance.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

The package installs a `stockreg` command. Use `stockreg --help` for the full list of options.

Two options apply to every command:

- `--db PATH` selects the database file. The default is `stocks.db`, and the file is created if it is missing.
- `--user NAME` names the signed-in user. The default is `user`.

The commands are:

```
stockreg whoami
stockreg list shareholders --filter Иван
stockreg add shareholders --name "Иванов Иван" --birth-date 1980-05-01 --email ivan@example.com
stockreg add securities --name "Альфа" --type Обычная --nominal 1000 --quantity 100
stockreg --user postgres add owners --shareholder 1 --security 1 --date 2024-01-15
stockreg --user postgres add meetings --agenda "Годовое собрание" --date 2024-06-01 --start 10:00 --end 12:00
stockreg add attendance --shareholder 1 --meeting 1 --absent
stockreg --user postgres add operations --seller "Иванов Иван" --buyer "Петров Пётр" --time "2024-03-01 12:30:00" --security 1
stockreg --user postgres edit securities 1 --nominal 1500
stockreg delete shareholders 1 --yes
stockreg report attendance
stockreg report holdings
```

Each command works as follows:

- `whoami` prints the title for the user's role, for example `Реестр акционеров - Пользователь`.
- `list TABLE` prints a tab-separated table. TABLE is one of `shareholders`, `securities`, `owners`, `meetings`, `attendance` or `operations`. The owners and attendance listings show shareholder names, package names and meeting agendas in place of ids where those rows exist. `--filter` applies to shareholders only.
- `add TABLE ...` inserts a row and prints its new id. A field left out takes its default.
- `edit TABLE ID ...` changes only the fields that are given. Attendance entries cannot be edited.
- `delete TABLE ID` asks `... [да/нет]` and deletes only on `да`, `д`, `yes` or `y`. The `--yes` option skips the question.
- `report attendance` prints, for each meeting, how many shareholders were present, how many were recorded and the percentage. The percentage is rounded to two places and left empty when a meeting has no entries.
- `report holdings` prints each ownership entry together with its shareholder and its package.

Dates, times and date-times are given in ISO format.

The command exits with status 1 and a message on standard error in two cases: a user tries to change a table they may not change, or the database refuses an operation or a row is missing.

## Roles

`stockreg.permissions.role_for_user` gives the `Role.ADMIN` role to the user `postgres`, ignoring case. Every other user gets `Role.USER`. `window_title` returns the title for a role.

An administrator may change every table. An ordinary user may change shareholders and attendance only. For them, securities, owners, meetings and operations are read-only, and `require_edit` raises `AccessDenied`.

```python
from stockreg.permissions import Role, Table, can_edit, require_edit, role_for_user

role = role_for_user("alice")
assert role is Role.USER
can_edit(role, Table.SECURITIES)    # False
require_edit(role, Table.MEETINGS)  # raises AccessDenied
```

## Library use

`stockreg.database.Registry(path)` opens or creates the database. The default path is `":memory:"`, and a `Registry` can be used as a context manager.

Each table has `add_*`, `update_*` and `delete_*` methods, plus a listing method. The listing methods are `shareholders`, `securities`, `owners`, `meetings`, `attendance` and `operations`, and they return `(id, record)` pairs in id order. The exception is `attendance`, which returns dictionaries.

Attendance differs in a few other ways too. It is added with `add_attendance(shareholder_id, meeting_id, present=True)` and has no update method.

`shareholders(name_filter)` keeps only names that contain the given text, and the match is case-sensitive. `query(sql, params)` runs any SQL statement and returns its rows as dictionaries. A failed operation, or an update or delete of a missing row, raises `RegistryError`.

```python
from stockreg.database import Registry
from stockreg.records import Shareholder
from stockreg.reports import attendance_report, shareholders_and_shares

with Registry("registry.db") as registry:
    ident = registry.add_shareholder(Shareholder(name="Иванов Иван", email="ivan@example.com"))
    for row in attendance_report(registry):
        print(row.agenda, row.present, row.total, row.percent)
    for row in shareholders_and_shares(registry):
        print(row.shareholder_name, row.security_name, row.quantity)
```

The record types live in `stockreg.records`: `Shareholder`, `Security`, `SecurityType`, `Meeting`, `Owner` and `Operation`.

- Each record converts to and from a mapping keyed by database column names, using `from_mapping` and `to_mapping`.
- `Security` keeps its nominal value between 0.01 and 1,000,000, rounded to two places, and its quantity between 1 and 1,000,000.
- `Security.label()` gives text such as `Альфа (Обычная, 100 шт.)`.
- `select_index(ids, wanted)` returns the position of an id in a list. It returns the first position if the id is absent, and -1 if the list is empty.

## What it does not do

- There is no graphical interface. The registry is used through the `stockreg` command or from Python.
- Data is kept in a local SQLite file, not on a database server.
- There is no password login. The role comes only from the `--user` name.