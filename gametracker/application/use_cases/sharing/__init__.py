"""Use cases for sharing libraries between users."""

from .get_shared_library import get_shared_library
from .list_shares import list_public_libraries, list_shared_with, list_shared_with_me
from .revoke_share import revoke_share
from .set_library_shares import set_library_shares

__all__ = [
    "get_shared_library",
    "list_public_libraries",
    "list_shared_with",
    "list_shared_with_me",
    "revoke_share",
    "set_library_shares",
]
