from datetime import date
from decimal import Decimal

import pytest

from stockreg.database import Registry
from stockreg.records import Meeting, Owner, Security, SecurityType, Shareholder
from stockreg.reports import attendance_report, shareholders_and_shares


@pytest.fixture
def registry():
    with Registry(":memory:") as reg:
        yield reg


def _people(registry, count):
    return [registry.add_shareholder(Shareholder(name=f"Person {n}")) for n in range(count)]


def test_attendance_counts_and_percent(registry):
    people = _people(registry, 3)
    meeting = registry.add_meeting(Meeting(agenda="Budget", date=date(2024, 5, 1)))
    registry.add_attendance(people[0], meeting, True)
    registry.add_attendance(people[1], meeting, True)
    registry.add_attendance(people[2], meeting, False)
    (row,) = attendance_report(registry)
    assert row.meeting_id == meeting
    assert row.agenda == "Budget"
    assert row.date == date(2024, 5, 1)
    assert (row.present, row.total) == (2, 3)
    assert row.percent == Decimal("66.67")


def test_meeting_without_attendance_has_no_percent(registry):
    meeting = registry.add_meeting(Meeting(agenda="Empty"))
    (row,) = attendance_report(registry)
    assert row.meeting_id == meeting
    assert (row.present, row.total) == (0, 0)
    assert row.percent is None


def test_attendance_rows_follow_meeting_order_and_totals(registry):
    people = _people(registry, 2)
    first = registry.add_meeting(Meeting(agenda="A"))
    second = registry.add_meeting(Meeting(agenda="B"))
    registry.add_attendance(people[0], second, True)
    registry.add_attendance(people[1], second, True)
    registry.add_attendance(people[0], first, False)
    rows = attendance_report(registry)
    assert [r.meeting_id for r in rows] == [first, second]
    assert sum(r.total for r in rows) == len(registry.attendance())
    assert all(r.present <= r.total for r in rows)
    assert rows[0].percent == Decimal("0.00")
    assert rows[1].percent == Decimal("100.00")


def test_holdings_join_shareholder_and_security(registry):
    person = registry.add_shareholder(Shareholder(name="Anna"))
    package = registry.add_security(
        Security(name="Alpha", kind=SecurityType.PREFERRED, nominal_value=250.5, quantity=40)
    )
    owner = registry.add_owner(Owner(person, package, date(2023, 3, 4)))
    (row,) = shareholders_and_shares(registry)
    assert row.owner_id == owner
    assert row.shareholder_id == person
    assert row.shareholder_name == "Anna"
    assert row.security_id == package
    assert row.security_name == "Alpha"
    assert row.security_type is SecurityType.PREFERRED
    assert row.nominal_value == 250.5
    assert row.quantity == 40
    assert row.acquisition_date == date(2023, 3, 4)


def test_holdings_empty_without_owners(registry):
    registry.add_shareholder(Shareholder(name="Nobody"))
    registry.add_security(Security(name="Unheld"))
    assert shareholders_and_shares(registry) == []


def test_holdings_one_row_per_owner(registry):
    people = _people(registry, 2)
    package = registry.add_security(Security(name="Beta"))
    for person in people:
        registry.add_owner(Owner(person, package))
    rows = shareholders_and_shares(registry)
    assert [r.shareholder_id for r in rows] == people
    assert {r.security_name for r in rows} == {"Beta"}