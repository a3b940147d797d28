"""Look up and authenticate users against the corporate LDAP directory."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ldap3 import SUBTREE, Connection, Server
from ldap3.core.exceptions import LDAPException
from ldap3.utils.conv import escape_filter_chars

from gametracker.config import Settings, get_settings
from gametracker.domain.entities import canonical_username

logger = logging.getLogger(__name__)

_EMAIL_ATTRIBUTES = ("mail",)
_NAME_ATTRIBUTES = ("displayName", "cn")
_GROUP_ATTRIBUTE = "memberOf"


class DirectoryError(RuntimeError):
    """Raised when the directory cannot be bound or searched."""


@dataclass(frozen=True)
class DirectoryUser:
    username: str
    dn: str
    display_name: str | None
    email: str | None


class DirectoryClient:
    """Service-account bound LDAP lookups.

    ``find_user``, ``lookup_email`` and ``authenticate`` never raise: an
    unconfigured directory, a failed bind or a failed search all resolve to
    ``None`` so callers can move on to the next fallback. ``search_user``
    reports those failures as :class:`DirectoryError` instead.
    """

    def __init__(self, settings: Settings | None = None, *, timeout: float = 10.0) -> None:
        self._settings = settings or get_settings()
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return self._settings.ldap_enabled

    async def lookup_email(self, username: str) -> str | None:
        if not self.configured:
            return None
        entry = await asyncio.to_thread(self.find_user, username)
        return entry.email if entry else None

    def find_user(self, username: str) -> DirectoryUser | None:
        """Search for ``username`` (restricted to the required group, if any)."""

        if not self.configured:
            return None
        try:
            return self.search_user(username)
        except DirectoryError as exc:
            logger.warning("Directory lookup for %s failed: %s", username, exc)
            return None

    def search_user(self, username: str) -> DirectoryUser | None:
        """Like :meth:`find_user` but raise :class:`DirectoryError` on failures.

        ``None`` still means the account does not exist or is not a member of
        the required group.
        """

        username = canonical_username(username)
        connection = self._connection(self._settings.ldap_bind_dn, self._settings.ldap_bind_password)
        try:
            if not connection.bind():
                raise DirectoryError(f"service bind failed: {connection.result}")
            connection.search(
                self._settings.ldap_search_base,
                self._search_filter(username),
                search_scope=SUBTREE,
                attributes=[*_EMAIL_ATTRIBUTES, *_NAME_ATTRIBUTES, _GROUP_ATTRIBUTE],
            )
            for entry in connection.response or []:
                if entry.get("type") != "searchResEntry":
                    continue
                attributes = entry.get("attributes") or {}
                group = (self._settings.ldap_required_group or "").strip()
                if "=" not in group and not is_group_member(
                    attributes.get(_GROUP_ATTRIBUTE), group
                ):
                    logger.info("Directory user %s is not a member of %s", username, group)
                    return None
                return DirectoryUser(
                    username=username,
                    dn=entry.get("dn", ""),
                    display_name=_first_value(attributes, _NAME_ATTRIBUTES),
                    email=_first_value(attributes, _EMAIL_ATTRIBUTES),
                )
            return None
        except LDAPException as exc:
            raise DirectoryError(str(exc)) from exc
        finally:
            connection.unbind()

    def authenticate(self, username: str, password: str) -> DirectoryUser | None:
        """Return the directory entry when ``password`` binds as ``username``."""

        if not password:
            return None
        entry = self.find_user(username)
        if entry is None or not entry.dn:
            return None
        connection = self._connection(entry.dn, password)
        try:
            if not connection.bind():
                logger.info("Directory login rejected for %s", entry.username)
                return None
            return entry
        except LDAPException as exc:
            logger.warning("Directory login for %s failed: %s", entry.username, exc)
            return None
        finally:
            connection.unbind()

    def _connection(self, user: str | None, password: str | None) -> Connection:
        server = Server(self._settings.ldap_url, connect_timeout=self._timeout)
        return Connection(
            server,
            user=user,
            password=password,
            receive_timeout=self._timeout,
        )

    def _search_filter(self, username: str) -> str:
        account = f"(sAMAccountName={escape_filter_chars(username)})"
        group = (self._settings.ldap_required_group or "").strip()
        # Bare group names are checked against memberOf after the search.
        if "=" in group:
            return f"(&{account}(memberOf={escape_filter_chars(group)}))"
        return account


def is_group_member(groups: object, required_group: str | None) -> bool:
    """Return ``True`` when ``groups`` satisfies ``required_group``.

    ``required_group`` is either a full group DN or a bare group name, which
    matches the group whose first RDN is ``cn=<name>``.
    """

    required = (required_group or "").strip().lower()
    if not required:
        return True
    if isinstance(groups, str):
        groups = [groups]
    for group in groups or ():
        value = str(group).strip().lower()
        if value == required or value.startswith(f"cn={required},"):
            return True
    return False


def _first_value(attributes: dict, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = attributes.get(name)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value:
            return str(value)
    return None


__all__ = ["DirectoryClient", "DirectoryError", "DirectoryUser", "is_group_member"]
