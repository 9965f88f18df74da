"""Summary reports over the shareholder registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from stockreg.database import Registry
from stockreg.records import SecurityType

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class AttendanceRow:
    """Attendance figures of one meeting."""

    meeting_id: int
    agenda: str
    date: date
    present: int
    total: int
    percent: Decimal | None


@dataclass(frozen=True)
class HoldingRow:
    """One security package held by one shareholder."""

    owner_id: int
    shareholder_id: int
    shareholder_name: str
    security_id: int
    security_name: str
    security_type: SecurityType
    nominal_value: float
    quantity: int
    acquisition_date: date


def _percent(present: int, total: int) -> Decimal | None:
    if total == 0:
        return None
    share = Decimal(present) * 100 / Decimal(total)
    return share.quantize(_CENT, rounding=ROUND_HALF_UP)


def attendance_report(registry: Registry) -> list[AttendanceRow]:
    """Every meeting with how many shareholders were present out of those recorded.

    The percentage is rounded to two places and is ``None`` for a meeting
    with no attendance entries.
    """
    counts: dict[int, tuple[int, int]] = {}
    for entry in registry.attendance():
        meeting_id = entry["meeting_id"]
        if meeting_id is None:
            continue
        present, total = counts.get(meeting_id, (0, 0))
        counts[meeting_id] = (present + int(entry["present"]), total + 1)

    rows = []
    for ident, meeting in registry.meetings():
        present, total = counts.get(ident, (0, 0))
        rows.append(
            AttendanceRow(
                meeting_id=ident,
                agenda=meeting.agenda,
                date=meeting.date,
                present=present,
                total=total,
                percent=_percent(present, total),
            )
        )
    return rows


def shareholders_and_shares(registry: Registry) -> list[HoldingRow]:
    """Every ownership entry joined with its shareholder and security package."""
    people = dict(registry.shareholders())
    packages = dict(registry.securities())
    rows = []
    for ident, owner in registry.owners():
        person = people.get(owner.shareholder_id)
        package = packages.get(owner.security_id)
        if person is None or package is None:
            continue
        rows.append(
            HoldingRow(
                owner_id=ident,
                shareholder_id=owner.shareholder_id,
                shareholder_name=person.name,
                security_id=owner.security_id,
                security_name=package.name,
                security_type=package.kind,
                nominal_value=package.nominal_value,
                quantity=package.quantity,
                acquisition_date=owner.acquisition_date,
            )
        )
    return rows