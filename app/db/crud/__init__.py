"""CRUD operations for database models"""
from .user import (
    get_user_by_email,
    get_user_by_id,
    create_user_db,
)
from .token import (
    add_to_blacklist,
    is_jti_blacklisted,
    delete_expired_blacklisted_tokens,
)
from . import profile
from . import task
from . import branding

__all__ = [
    # User CRUD
    "get_user_by_email",
    "get_user_by_id",
    "create_user_db",
    # Token CRUD
    "add_to_blacklist",
    "is_jti_blacklisted",
    "delete_expired_blacklisted_tokens",
    # Domain modules
    "profile",
    "task",
    "branding",
]
