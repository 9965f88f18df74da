"""Command line front end of the shareholder registry."""

from __future__ import annotations

import argparse
import dataclasses
import enum
import sys
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Sequence

from stockreg.database import PRESENT, ABSENT, Registry, RegistryError
from stockreg.permissions import AccessDenied, Role, Table, require_edit, role_for_user, window_title
from stockreg.records import Meeting, Operation, Owner, Security, SecurityType, Shareholder
from stockreg.reports import attendance_report, shareholders_and_shares

_TABLES = {
    "shareholders": Table.SHAREHOLDERS,
    "securities": Table.SECURITIES,
    "owners": Table.OWNERS,
    "meetings": Table.MEETINGS,
    "attendance": Table.ATTENDANCE,
    "operations": Table.OPERATIONS,
}

_HEADERS = {
    Table.SHAREHOLDERS: (
        "ID", "ФИО акционера", "Дата рождения", "Паспортные данные",
        "Электронная почта", "Номер телефона",
    ),
    Table.SECURITIES: (
        "ID пакета", "Название", "Тип", "Номинальная стоимость", "Количество в пакете",
    ),
    Table.OWNERS: ("ID", "Акционер", "Пакет акций", "Дата приобретения"),
    Table.MEETINGS: ("ID", "Повестка дня", "Дата", "Время начала", "Время окончания"),
    Table.ATTENDANCE: ("ID", "Акционер", "Присутствие", "Собрание"),
    Table.OPERATIONS: ("ID", "Продавец", "Покупатель", "Время сделки", "Пакет акций"),
}

_DELETE_QUESTIONS = {
    Table.SHAREHOLDERS: "Вы уверены, что хотите удалить этого акционера?",
    Table.SECURITIES: "Вы уверены, что хотите удалить этот пакет акций?",
    Table.OWNERS: "Вы уверены, что хотите удалить эту запись?",
    Table.MEETINGS: "Вы уверены, что хотите удалить это собрание?",
    Table.ATTENDANCE: "Вы уверены, что хотите удалить эту запись?",
    Table.OPERATIONS: "Вы уверены, что хотите удалить эту операцию?",
}

_ATTENDANCE_HEADERS = (
    "ID_собрания", "Повестка_дня", "Дата", "Количество_присутствующих",
    "Общее_количество_акционеров", "Процент_посещаемости",
)
_HOLDING_HEADERS = (
    "ФИО акционера", "Название ценной бумаги", "Тип", "Номинальная стоимость",
    "Количество в пакете", "Дата приобретения",
)

_YES = {"y", "yes", "д", "да"}


@dataclass(frozen=True)
class _Option:
    flag: str
    attr: str
    convert: Callable[[str], Any]


_FIELDS: dict[Table, tuple[type, tuple[_Option, ...]]] = {
    Table.SHAREHOLDERS: (Shareholder, (
        _Option("--name", "name", str),
        _Option("--birth-date", "birth_date", date.fromisoformat),
        _Option("--passport", "passport", str),
        _Option("--email", "email", str),
        _Option("--phone", "phone", str),
    )),
    Table.SECURITIES: (Security, (
        _Option("--name", "name", str),
        _Option("--type", "kind", SecurityType),
        _Option("--nominal", "nominal_value", float),
        _Option("--quantity", "quantity", int),
    )),
    Table.OWNERS: (Owner, (
        _Option("--shareholder", "shareholder_id", int),
        _Option("--security", "security_id", int),
        _Option("--date", "acquisition_date", date.fromisoformat),
    )),
    Table.MEETINGS: (Meeting, (
        _Option("--agenda", "agenda", str),
        _Option("--date", "date", date.fromisoformat),
        _Option("--start", "start_time", time.fromisoformat),
        _Option("--end", "end_time", time.fromisoformat),
    )),
    Table.OPERATIONS: (Operation, (
        _Option("--seller", "seller", str),
        _Option("--buyer", "buyer", str),
        _Option("--time", "time", datetime.fromisoformat),
        _Option("--security", "security_id", int),
    )),
}


@dataclass(frozen=True)
class _Crud:
    add: Callable[..., int]
    update: Callable[[int, Any], None] | None
    delete: Callable[[int], None]
    rows: Callable[[], list]


def _crud(registry: Registry) -> dict[Table, _Crud]:
    return {
        Table.SHAREHOLDERS: _Crud(
            registry.add_shareholder, registry.update_shareholder,
            registry.delete_shareholder, registry.shareholders,
        ),
        Table.SECURITIES: _Crud(
            registry.add_security, registry.update_security,
            registry.delete_security, registry.securities,
        ),
        Table.OWNERS: _Crud(
            registry.add_owner, registry.update_owner, registry.delete_owner, registry.owners,
        ),
        Table.MEETINGS: _Crud(
            registry.add_meeting, registry.update_meeting,
            registry.delete_meeting, registry.meetings,
        ),
        Table.ATTENDANCE: _Crud(
            registry.add_attendance, None, registry.delete_attendance, registry.attendance,
        ),
        Table.OPERATIONS: _Crud(
            registry.add_operation, registry.update_operation,
            registry.delete_operation, registry.operations,
        ),
    }


def _fmt(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _print_rows(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    print("\t".join(headers))
    for row in rows:
        print("\t".join(_fmt(value) for value in row))


def _add_options(parser: argparse.ArgumentParser, table: Table) -> None:
    for option in _FIELDS[table][1]:
        parser.add_argument(option.flag, dest=option.attr, type=option.convert, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockreg", description="Реестр акционеров")
    parser.add_argument("--db", default="stocks.db", help="path of the registry database")
    parser.add_argument("--user", default="user", help="name of the signed-in user")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("whoami", help="show the role of the user")

    lister = commands.add_parser("list", help="show the rows of a table")
    lister.add_argument("table", choices=list(_TABLES))
    lister.add_argument("--filter", default="", help="part of a shareholder's name")

    add_tables = commands.add_parser("add", help="add a row").add_subparsers(
        dest="table", required=True
    )
    edit_tables = commands.add_parser("edit", help="change a row").add_subparsers(
        dest="table", required=True
    )
    for name, table in _TABLES.items():
        if table is Table.ATTENDANCE:
            sub = add_tables.add_parser(name)
            sub.add_argument("--shareholder", type=int, required=True)
            sub.add_argument("--meeting", type=int, required=True)
            sub.add_argument("--absent", action="store_true")
            continue
        _add_options(add_tables.add_parser(name), table)
        sub = edit_tables.add_parser(name)
        sub.add_argument("id", type=int)
        _add_options(sub, table)

    deleter = commands.add_parser("delete", help="delete a row")
    deleter.add_argument("table", choices=list(_TABLES))
    deleter.add_argument("id", type=int)
    deleter.add_argument("--yes", action="store_true", help="do not ask for confirmation")

    reporter = commands.add_parser("report", help="show a report")
    reporter.add_argument("kind", choices=["attendance", "holdings"])
    return parser


def _given(args: argparse.Namespace, table: Table) -> dict[str, Any]:
    return {
        option.attr: getattr(args, option.attr)
        for option in _FIELDS[table][1]
        if getattr(args, option.attr) is not None
    }


def _table_rows(registry: Registry, table: Table, name_filter: str) -> list[tuple]:
    if table is Table.SHAREHOLDERS:
        return [
            (ident, s.name, s.birth_date, s.passport, s.email, s.phone)
            for ident, s in registry.shareholders(name_filter or None)
        ]
    if table is Table.SECURITIES:
        return [
            (ident, s.name, s.kind, s.nominal_value, s.quantity)
            for ident, s in registry.securities()
        ]
    if table is Table.MEETINGS:
        return [
            (ident, m.agenda, m.date, m.start_time, m.end_time)
            for ident, m in registry.meetings()
        ]
    if table is Table.OPERATIONS:
        return [
            (ident, o.seller, o.buyer, o.time, o.security_id)
            for ident, o in registry.operations()
        ]
    people = {ident: s.name for ident, s in registry.shareholders()}
    if table is Table.OWNERS:
        packages = {ident: s.name for ident, s in registry.securities()}
        return [
            (
                ident,
                people.get(o.shareholder_id, o.shareholder_id),
                packages.get(o.security_id, o.security_id),
                o.acquisition_date,
            )
            for ident, o in registry.owners()
        ]
    agendas = {ident: m.agenda for ident, m in registry.meetings()}
    return [
        (
            entry["id"],
            people.get(entry["shareholder_id"], entry["shareholder_id"]),
            PRESENT if entry["present"] else ABSENT,
            agendas.get(entry["meeting_id"], entry["meeting_id"]),
        )
        for entry in registry.attendance()
    ]


def _confirm(table: Table) -> bool:
    answer = input(f"{_DELETE_QUESTIONS[table]} [да/нет] ")
    return answer.strip().lower() in _YES


def _run(args: argparse.Namespace, role: Role, registry: Registry) -> int:
    command = args.command
    if command == "whoami":
        print(window_title(role))
        return 0
    if command == "report":
        if args.kind == "attendance":
            _print_rows(
                _ATTENDANCE_HEADERS,
                [
                    (r.meeting_id, r.agenda, r.date, r.present, r.total, r.percent)
                    for r in attendance_report(registry)
                ],
            )
        else:
            _print_rows(
                _HOLDING_HEADERS,
                [
                    (
                        r.shareholder_name, r.security_name, r.security_type,
                        r.nominal_value, r.quantity, r.acquisition_date,
                    )
                    for r in shareholders_and_shares(registry)
                ],
            )
        return 0

    table = _TABLES[args.table]
    if command == "list":
        _print_rows(_HEADERS[table], _table_rows(registry, table, args.filter))
        return 0

    require_edit(role, table)
    actions = _crud(registry)[table]
    if command == "add":
        if table is Table.ATTENDANCE:
            ident = actions.add(args.shareholder, args.meeting, not args.absent)
        else:
            ident = actions.add(_FIELDS[table][0](**_given(args, table)))
        print(ident)
        return 0
    if command == "edit":
        current = dict(actions.rows()).get(args.id)
        if current is None:
            raise RegistryError(f"no row {args.id} in {table.value}")
        actions.update(args.id, dataclasses.replace(current, **_given(args, table)))
        return 0
    if not args.yes and not _confirm(table):
        return 0
    actions.delete(args.id)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run one registry command; return the exit status."""
    args = _build_parser().parse_args(argv)
    role = role_for_user(args.user)
    try:
        with Registry(args.db) as registry:
            return _run(args, role, registry)
    except AccessDenied as exc:
        print(f"Ограниченный доступ: {exc}", file=sys.stderr)
        return 1
    except RegistryError as exc:
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())