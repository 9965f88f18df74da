"""Storage of the shareholder registry in an SQLite database."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping, TypeVar

from stockreg.permissions import Table
from stockreg.records import Meeting, Operation, Owner, Security, SecurityType, Shareholder

PRESENT = "Да"
ABSENT = "Нет"

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS "{Table.SHAREHOLDERS.value}" (
    "ID_акционера" INTEGER PRIMARY KEY AUTOINCREMENT,
    "ФИО_акционера" TEXT NOT NULL,
    "Дата_рождения" TEXT,
    "Паспортные_данные" TEXT,
    "Электронная_почта" TEXT,
    "Номер_телефона" TEXT
);
CREATE TABLE IF NOT EXISTS "{Table.SECURITIES.value}" (
    "ID_пакета_акции" INTEGER PRIMARY KEY AUTOINCREMENT,
    "Название_ценной_бумаги" TEXT NOT NULL,
    "Тип_ценной_бумаги" TEXT NOT NULL
        CHECK ("Тип_ценной_бумаги" IN ('{SecurityType.ORDINARY.value}',
                                        '{SecurityType.PREFERRED.value}')),
    "Номинальная_стоимость" REAL NOT NULL,
    "Количество_в_пакете_акций" INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS "{Table.OWNERS.value}" (
    "ID" INTEGER PRIMARY KEY AUTOINCREMENT,
    "ID_Акционера" INTEGER NOT NULL
        REFERENCES "{Table.SHAREHOLDERS.value}" ("ID_акционера"),
    "Номер_пакета_акций" INTEGER NOT NULL
        REFERENCES "{Table.SECURITIES.value}" ("ID_пакета_акции"),
    "Дата_приобретения" TEXT
);
CREATE TABLE IF NOT EXISTS "{Table.MEETINGS.value}" (
    "ID_собрания" INTEGER PRIMARY KEY AUTOINCREMENT,
    "Повестка_дня" TEXT,
    "Дата" TEXT,
    "Время_начала" TEXT,
    "Время_окончания" TEXT
);
CREATE TABLE IF NOT EXISTS "{Table.ATTENDANCE.value}" (
    "ID_записи" INTEGER PRIMARY KEY AUTOINCREMENT,
    "ID_акционера" INTEGER
        REFERENCES "{Table.SHAREHOLDERS.value}" ("ID_акционера"),
    "Присутствие" TEXT NOT NULL DEFAULT '{PRESENT}'
        CHECK ("Присутствие" IN ('{PRESENT}', '{ABSENT}')),
    "причина_собрания" INTEGER
        REFERENCES "{Table.MEETINGS.value}" ("ID_собрания")
);
CREATE TABLE IF NOT EXISTS "{Table.OPERATIONS.value}" (
    "ID_операции" INTEGER PRIMARY KEY AUTOINCREMENT,
    "ФИО_Продавца" TEXT,
    "ФИО_Покупателя" TEXT,
    "Время_сделки" TEXT,
    "Номер_пакета_акций" INTEGER
        REFERENCES "{Table.SECURITIES.value}" ("ID_пакета_акции")
);
"""

_KEYS = {
    Table.SHAREHOLDERS: "ID_акционера",
    Table.SECURITIES: "ID_пакета_акции",
    Table.OWNERS: "ID",
    Table.MEETINGS: "ID_собрания",
    Table.ATTENDANCE: "ID_записи",
    Table.OPERATIONS: "ID_операции",
}

_R = TypeVar("_R")


class RegistryError(Exception):
    """Raised when the database refuses an operation or a row is missing."""


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _to_db(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


class Registry:
    """The shareholder registry kept in an SQLite file (or ``":memory:"``)."""

    def __init__(self, path: str = ":memory:") -> None:
        self.path = str(path)
        try:
            self._conn = sqlite3.connect(self.path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise RegistryError(str(exc)) from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _write(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        try:
            with self._conn:
                return self._conn.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            raise RegistryError(str(exc)) from exc

    def _read(self, sql: str, params: Iterable[Any] = ()) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise RegistryError(str(exc)) from exc

    def query(self, sql: str, params: Iterable[Any] = ()) -> list[dict[str, Any]]:
        """Run ``sql`` and return its rows as dictionaries keyed by column name."""
        try:
            with self._conn:
                rows = self._conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise RegistryError(str(exc)) from exc
        return [dict(row) for row in rows]

    def _insert(self, table: Table, values: Mapping[str, Any]) -> int:
        columns = ", ".join(_quote(name) for name in values)
        marks = ", ".join("?" for _ in values)
        cursor = self._write(
            f"INSERT INTO {_quote(table.value)} ({columns}) VALUES ({marks})",
            (_to_db(value) for value in values.values()),
        )
        return int(cursor.lastrowid)

    def _update(self, table: Table, ident: int, values: Mapping[str, Any]) -> None:
        assignments = ", ".join(f"{_quote(name)} = ?" for name in values)
        params = [_to_db(value) for value in values.values()] + [ident]
        cursor = self._write(
            f"UPDATE {_quote(table.value)} SET {assignments} "
            f"WHERE {_quote(_KEYS[table])} = ?",
            params,
        )
        if cursor.rowcount == 0:
            raise RegistryError(f"no row {ident} in {table.value}")

    def _delete(self, table: Table, ident: int) -> None:
        cursor = self._write(
            f"DELETE FROM {_quote(table.value)} WHERE {_quote(_KEYS[table])} = ?",
            (ident,),
        )
        if cursor.rowcount == 0:
            raise RegistryError(f"no row {ident} in {table.value}")

    def _select(
        self, table: Table, record_type: type[_R], where: str = "", params: Iterable[Any] = ()
    ) -> list[tuple[int, _R]]:
        key = _KEYS[table]
        rows = self._read(
            f"SELECT * FROM {_quote(table.value)} {where} ORDER BY {_quote(key)}",
            params,
        )
        return [(row[key], record_type.from_mapping(dict(row))) for row in rows]

    # Shareholders

    def add_shareholder(self, shareholder: Shareholder) -> int:
        return self._insert(Table.SHAREHOLDERS, shareholder.to_mapping())

    def update_shareholder(self, ident: int, shareholder: Shareholder) -> None:
        self._update(Table.SHAREHOLDERS, ident, shareholder.to_mapping())

    def delete_shareholder(self, ident: int) -> None:
        self._delete(Table.SHAREHOLDERS, ident)

    def shareholders(self, name_filter: str | None = None) -> list[tuple[int, Shareholder]]:
        """Shareholders by id; a non-empty filter keeps names containing it."""
        if not name_filter:
            return self._select(Table.SHAREHOLDERS, Shareholder)
        return self._select(
            Table.SHAREHOLDERS,
            Shareholder,
            'WHERE instr("ФИО_акционера", ?) > 0',
            (name_filter,),
        )

    # Securities

    def add_security(self, security: Security) -> int:
        return self._insert(Table.SECURITIES, security.to_mapping())

    def update_security(self, ident: int, security: Security) -> None:
        self._update(Table.SECURITIES, ident, security.to_mapping())

    def delete_security(self, ident: int) -> None:
        self._delete(Table.SECURITIES, ident)

    def securities(self) -> list[tuple[int, Security]]:
        return self._select(Table.SECURITIES, Security)

    # Owners

    def add_owner(self, owner: Owner) -> int:
        return self._insert(Table.OWNERS, owner.to_mapping())

    def update_owner(self, ident: int, owner: Owner) -> None:
        self._update(Table.OWNERS, ident, owner.to_mapping())

    def delete_owner(self, ident: int) -> None:
        self._delete(Table.OWNERS, ident)

    def owners(self) -> list[tuple[int, Owner]]:
        return self._select(Table.OWNERS, Owner)

    # Meetings

    def add_meeting(self, meeting: Meeting) -> int:
        return self._insert(Table.MEETINGS, meeting.to_mapping())

    def update_meeting(self, ident: int, meeting: Meeting) -> None:
        self._update(Table.MEETINGS, ident, meeting.to_mapping())

    def delete_meeting(self, ident: int) -> None:
        self._delete(Table.MEETINGS, ident)

    def meetings(self) -> list[tuple[int, Meeting]]:
        return self._select(Table.MEETINGS, Meeting)

    # Attendance

    def add_attendance(
        self, shareholder_id: int, meeting_id: int, present: bool = True
    ) -> int:
        return self._insert(
            Table.ATTENDANCE,
            {
                "ID_акционера": shareholder_id,
                "Присутствие": PRESENT if present else ABSENT,
                "причина_собрания": meeting_id,
            },
        )

    def delete_attendance(self, ident: int) -> None:
        self._delete(Table.ATTENDANCE, ident)

    def attendance(self) -> list[dict[str, Any]]:
        """Attendance entries with their shareholder, meeting and presence."""
        rows = self._read(
            f'SELECT * FROM {_quote(Table.ATTENDANCE.value)} ORDER BY "ID_записи"'
        )
        return [
            {
                "id": row["ID_записи"],
                "shareholder_id": row["ID_акционера"],
                "meeting_id": row["причина_собрания"],
                "present": row["Присутствие"] == PRESENT,
            }
            for row in rows
        ]

    # Operations

    def add_operation(self, operation: Operation) -> int:
        return self._insert(Table.OPERATIONS, operation.to_mapping())

    def update_operation(self, ident: int, operation: Operation) -> None:
        self._update(Table.OPERATIONS, ident, operation.to_mapping())

    def delete_operation(self, ident: int) -> None:
        self._delete(Table.OPERATIONS, ident)

    def operations(self) -> list[tuple[int, Operation]]:
        return self._select(Table.OPERATIONS, Operation)