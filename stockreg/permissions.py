"""User roles and which registry tables each role may change."""

from __future__ import annotations

import enum

ADMIN_LOGIN = "postgres"
APP_TITLE = "Реестр акционеров"
DENIED_MESSAGE = "У вас нет прав на редактирование этой таблицы"


class Role(str, enum.Enum):
    """Role a signed-in user works under."""

    ADMIN = "admin"
    USER = "user"


class Table(str, enum.Enum):
    """Tables of the registry, valued by their names in the database."""

    SHAREHOLDERS = "Акционер"
    SECURITIES = "Ценные_бумаги"
    OWNERS = "Владельцы_ценных_бумаг"
    MEETINGS = "Собрание_акционеров"
    ATTENDANCE = "Присутствие"
    OPERATIONS = "Операция_с_акцией"


_USER_READ_ONLY = frozenset(
    {Table.SECURITIES, Table.MEETINGS, Table.OWNERS, Table.OPERATIONS}
)

_TITLE_SUFFIX = {
    Role.ADMIN: " - Администратор",
    Role.USER: " - Пользователь",
}


class AccessDenied(PermissionError):
    """Raised when a role tries to change a table it may only read."""

    def __init__(self, table: Table | str) -> None:
        self.table = Table(table)
        super().__init__(DENIED_MESSAGE)


def role_for_user(username: str) -> Role:
    """The administrator login gets the admin role, everyone else is a user."""
    return Role.ADMIN if username.lower() == ADMIN_LOGIN else Role.USER


def window_title(role: Role | str) -> str:
    """Title of the main window for the given role."""
    return APP_TITLE + _TITLE_SUFFIX[Role(role)]


def can_edit(role: Role | str, table: Table | str) -> bool:
    """Whether ``role`` may add, change or delete rows of ``table``."""
    role = Role(role)
    table = Table(table)
    if role is Role.ADMIN:
        return True
    return table not in _USER_READ_ONLY


def require_edit(role: Role | str, table: Table | str) -> None:
    """Raise :class:`AccessDenied` unless ``role`` may change ``table``."""
    if not can_edit(role, table):
        raise AccessDenied(table)