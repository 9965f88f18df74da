"""Record types for the shareholder registry and their column mappings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping

NOMINAL_MIN = 0.01
NOMINAL_MAX = 1_000_000.00
QUANTITY_MIN = 1
QUANTITY_MAX = 1_000_000


class SecurityType(str, enum.Enum):
    """Kind of share held in a security package."""

    ORDINARY = "Обычная"
    PREFERRED = "Привилегированная"


def _to_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def _to_time(value: Any) -> time | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return time.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _to_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)


def _clamp(value, low, high):
    return max(low, min(high, value))


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass
class Shareholder:
    """A person registered as a shareholder."""

    name: str = ""
    birth_date: date = date(2000, 1, 1)
    passport: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Shareholder":
        result = cls(
            name=_to_text(data.get("ФИО_акционера")),
            passport=_to_text(data.get("Паспортные_данные")),
            email=_to_text(data.get("Электронная_почта")),
            phone=_to_text(data.get("Номер_телефона")),
        )
        birth = _to_date(data.get("Дата_рождения"))
        if birth is not None:
            result.birth_date = birth
        return result

    def to_mapping(self) -> dict[str, Any]:
        return {
            "ФИО_акционера": self.name,
            "Дата_рождения": self.birth_date,
            "Паспортные_данные": self.passport,
            "Электронная_почта": self.email,
            "Номер_телефона": self.phone,
        }


@dataclass
class Security:
    """A package of shares; nominal value and quantity are kept within range."""

    name: str = ""
    kind: SecurityType = SecurityType.ORDINARY
    nominal_value: float = 1000.00
    quantity: int = 100

    def __post_init__(self) -> None:
        self.kind = SecurityType(self.kind)
        self.nominal_value = round(
            _clamp(float(self.nominal_value), NOMINAL_MIN, NOMINAL_MAX), 2
        )
        self.quantity = _clamp(int(self.quantity), QUANTITY_MIN, QUANTITY_MAX)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Security":
        raw_kind = _to_text(data.get("Тип_ценной_бумаги"))
        try:
            kind = SecurityType(raw_kind)
        except ValueError:
            kind = SecurityType.ORDINARY
        return cls(
            name=_to_text(data.get("Название_ценной_бумаги")),
            kind=kind,
            nominal_value=_to_float(data.get("Номинальная_стоимость")),
            quantity=_to_int(data.get("Количество_в_пакете_акций")),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "Название_ценной_бумаги": self.name,
            "Тип_ценной_бумаги": self.kind.value,
            "Номинальная_стоимость": self.nominal_value,
            "Количество_в_пакете_акций": self.quantity,
        }

    def label(self) -> str:
        """Text shown when picking this package from a list."""
        return f"{self.name} ({self.kind.value}, {self.quantity} шт.)"


@dataclass
class Meeting:
    """A shareholders' meeting."""

    agenda: str = ""
    date: date = field(default_factory=date.today)
    start_time: time = time(10, 0)
    end_time: time = time(12, 0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Meeting":
        result = cls(agenda=_to_text(data.get("Повестка_дня")))
        held = _to_date(data.get("Дата"))
        if held is not None:
            result.date = held
        start = _to_time(data.get("Время_начала"))
        if start is not None:
            result.start_time = start
        end = _to_time(data.get("Время_окончания"))
        if end is not None:
            result.end_time = end
        return result

    def to_mapping(self) -> dict[str, Any]:
        return {
            "Повестка_дня": self.agenda,
            "Дата": self.date,
            "Время_начала": self.start_time,
            "Время_окончания": self.end_time,
        }


@dataclass
class Owner:
    """Link between a shareholder and a security package they hold."""

    shareholder_id: int = 0
    security_id: int = 0
    acquisition_date: date = field(default_factory=date.today)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Owner":
        result = cls(
            shareholder_id=_to_int(data.get("ID_Акционера")),
            security_id=_to_int(data.get("Номер_пакета_акций")),
        )
        acquired = _to_date(data.get("Дата_приобретения"))
        if acquired is not None:
            result.acquisition_date = acquired
        return result

    def to_mapping(self) -> dict[str, Any]:
        return {
            "ID_Акционера": self.shareholder_id,
            "Номер_пакета_акций": self.security_id,
            "Дата_приобретения": self.acquisition_date,
        }


@dataclass
class Operation:
    """A sale of a security package from one person to another."""

    seller: str = ""
    buyer: str = ""
    time: datetime = field(default_factory=_now)
    security_id: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Operation":
        result = cls(
            seller=_to_text(data.get("ФИО_Продавца")),
            buyer=_to_text(data.get("ФИО_Покупателя")),
            security_id=_to_int(data.get("Номер_пакета_акций")),
        )
        when = _to_datetime(data.get("Время_сделки"))
        if when is not None:
            result.time = when
        return result

    def to_mapping(self) -> dict[str, Any]:
        return {
            "ФИО_Продавца": self.seller,
            "ФИО_Покупателя": self.buyer,
            "Время_сделки": self.time,
            "Номер_пакета_акций": self.security_id,
        }


def select_index(ids: Iterable[Any], wanted: Any) -> int:
    """Position of ``wanted`` among ``ids``; the first entry if absent, -1 if empty."""
    ids = list(ids)
    if not ids:
        return -1
    target = _to_int(wanted)
    return next((pos for pos, ident in enumerate(ids) if _to_int(ident) == target), 0)