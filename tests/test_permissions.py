import pytest

from stockreg.permissions import (
    AccessDenied,
    Role,
    Table,
    can_edit,
    require_edit,
    role_for_user,
    window_title,
)


@pytest.mark.parametrize("name", ["postgres", "POSTGRES", "Postgres"])
def test_admin_login_gets_admin_role(name):
    assert role_for_user(name) is Role.ADMIN


@pytest.mark.parametrize("name", ["alice", "", "postgres1"])
def test_other_logins_are_users(name):
    assert role_for_user(name) is Role.USER


def test_window_titles():
    assert window_title(Role.ADMIN) == "Реестр акционеров - Администратор"
    assert window_title("user") == "Реестр акционеров - Пользователь"


@pytest.mark.parametrize("table", list(Table))
def test_admin_can_edit_everything(table):
    assert can_edit(Role.ADMIN, table) is True


@pytest.mark.parametrize(
    "table", [Table.SECURITIES, Table.MEETINGS, Table.OWNERS, Table.OPERATIONS]
)
def test_user_cannot_edit_restricted_tables(table):
    assert can_edit(Role.USER, table) is False
    with pytest.raises(AccessDenied) as info:
        require_edit(Role.USER, table)
    assert info.value.table is table
    assert "нет прав" in str(info.value)


@pytest.mark.parametrize("table", [Table.SHAREHOLDERS, Table.ATTENDANCE])
def test_user_can_edit_open_tables(table):
    assert can_edit(Role.USER, table) is True


def test_string_arguments_are_accepted():
    assert can_edit("user", "Ценные_бумаги") is False
    assert can_edit("admin", "Ценные_бумаги") is True


def test_access_denied_is_permission_error():
    with pytest.raises(PermissionError):
        require_edit("user", Table.OPERATIONS)