from datetime import date, datetime, time

import pytest

from stockreg.records import (
    Meeting,
    Operation,
    Owner,
    Security,
    SecurityType,
    Shareholder,
    select_index,
)


def test_security_type_values():
    ordinary = Security(kind=SecurityType.ORDINARY).to_mapping()
    preferred = Security(kind=SecurityType.PREFERRED).to_mapping()
    assert ordinary["Тип_ценной_бумаги"] == "Обычная"
    assert preferred["Тип_ценной_бумаги"] == "Привилегированная"


def test_shareholder_round_trip():
    person = Shareholder("Иванов Иван", date(1980, 5, 17), "0000 000000",
                         "ivanov@example.com", "+7 000")
    again = Shareholder.from_mapping(person.to_mapping())
    assert again == person


def test_shareholder_mapping_keys():
    mapping = Shareholder(name="Петров").to_mapping()
    assert mapping["ФИО_акционера"] == "Петров"
    assert set(mapping) == {"ФИО_акционера", "Дата_рождения", "Паспортные_данные",
                            "Электронная_почта", "Номер_телефона"}


def test_shareholder_parses_iso_date_string():
    person = Shareholder.from_mapping({"Дата_рождения": "1990-02-03"})
    assert person.birth_date == date(1990, 2, 3)


def test_shareholder_missing_fields_are_empty_text():
    person = Shareholder.from_mapping({})
    assert (person.name, person.passport, person.email, person.phone) == ("", "", "", "")


def test_security_defaults():
    sec = Security()
    assert sec.nominal_value == 1000.00
    assert sec.quantity == 100
    assert sec.kind is SecurityType.ORDINARY


def test_security_round_trip():
    sec = Security("Газпром", SecurityType.PREFERRED, 250.5, 40)
    assert Security.from_mapping(sec.to_mapping()) == sec


def test_security_clamps_to_range():
    low = Security(nominal_value=0, quantity=0)
    high = Security(nominal_value=5_000_000, quantity=5_000_000)
    assert low.nominal_value == 0.01
    assert low.quantity == 1
    assert high.nominal_value == 1000000.00
    assert high.quantity == 1000000


def test_security_unknown_type_falls_back_to_ordinary():
    sec = Security.from_mapping({"Тип_ценной_бумаги": "Другая"})
    assert sec.kind is SecurityType.ORDINARY


def test_security_accepts_type_text():
    sec = Security(kind="Привилегированная")
    assert sec.kind is SecurityType.PREFERRED


def test_security_rejects_bad_type_in_constructor():
    with pytest.raises(ValueError):
        Security(kind="nonsense")


def test_security_label():
    sec = Security("Газпром", SecurityType.ORDINARY, 500, 10)
    assert sec.label() == "Газпром (Обычная, 10 шт.)"


def test_meeting_default_times():
    meeting = Meeting()
    assert meeting.start_time == time(10, 0)
    assert meeting.end_time == time(12, 0)


def test_meeting_null_times_keep_defaults():
    meeting = Meeting.from_mapping({"Повестка_дня": "Итоги года",
                                    "Дата": date(2024, 6, 1),
                                    "Время_начала": None})
    assert meeting.agenda == "Итоги года"
    assert meeting.date == date(2024, 6, 1)
    assert meeting.start_time == time(10, 0)


def test_meeting_round_trip():
    meeting = Meeting("Дивиденды", date(2023, 3, 4), time(9, 30), time(11, 15))
    assert Meeting.from_mapping(meeting.to_mapping()) == meeting


def test_owner_round_trip():
    owner = Owner(3, 7, date(2022, 1, 9))
    assert Owner.from_mapping(owner.to_mapping()) == owner


def test_owner_missing_ids_are_zero():
    owner = Owner.from_mapping({"ID_Акционера": None})
    assert (owner.shareholder_id, owner.security_id) == (0, 0)


def test_operation_round_trip():
    op = Operation("Продавец", "Покупатель", datetime(2024, 2, 1, 13, 5, 9), 4)
    assert Operation.from_mapping(op.to_mapping()) == op


def test_operation_parses_string_time():
    op = Operation.from_mapping({"Время_сделки": "2024-02-01T13:05:09",
                                 "Номер_пакета_акций": "4"})
    assert op.time == datetime(2024, 2, 1, 13, 5, 9)
    assert op.security_id == 4


def test_operation_default_time_has_no_microseconds():
    assert Operation().time.microsecond == 0


def test_select_index_finds_match():
    assert select_index([5, 8, 13], 8) == 1


def test_select_index_absent_gives_first():
    assert select_index([5, 8, 13], 99) == 0


def test_select_index_empty():
    assert select_index([], 1) == -1


def test_select_index_first_of_duplicates():
    assert select_index([2, 4, 4], "4") == 1