"""Use cases for managing users."""

from .authenticate_user import authenticate_user
from .create_user import create_user
from .delete_user import delete_user
from .get_or_create_user import get_or_create_user
from .list_users import list_users
from .login_throttle import (
    LoginThrottledError,
    clear_failed_logins,
    ensure_login_allowed,
    record_failed_login,
)
from .sync_directory_users import DirectorySyncReport, sync_directory_users
from .update_user import MIN_PASSWORD_LENGTH, update_user

__all__ = [
    "DirectorySyncReport",
    "LoginThrottledError",
    "MIN_PASSWORD_LENGTH",
    "authenticate_user",
    "clear_failed_logins",
    "create_user",
    "delete_user",
    "ensure_login_allowed",
    "get_or_create_user",
    "list_users",
    "record_failed_login",
    "sync_directory_users",
    "update_user",
]
