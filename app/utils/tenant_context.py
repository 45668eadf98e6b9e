"""Request context management using contextvars.

AuthMiddleware fills these variables from the bearer token at the start of
each request and clears them at the end. The tenant of a request is the
caller's school; parents and super admins have none.
"""

import contextvars
import uuid

from app.exceptions import UserContextError

# Context variables for request-scoped data
_school_id: contextvars.ContextVar[uuid.UUID | None] = contextvars.ContextVar(
    "school_id", default=None
)
_current_user_id: contextvars.ContextVar[uuid.UUID | None] = contextvars.ContextVar(
    "current_user_id", default=None
)
_current_user_role: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "current_user_role", default=None
)


# === School (tenant) Context ===

def get_school_id_or_none() -> uuid.UUID | None:
    """Get the caller's school ID, or None for unscoped callers.

    Returns:
        The school UUID from the token, if any
    """
    return _school_id.get()


def set_school_id(sid: uuid.UUID | None) -> None:
    """Set the current school ID.

    Args:
        sid: School UUID to set (or None to clear)
    """
    _school_id.set(sid)


# === User Context ===

def get_current_user_id() -> uuid.UUID:
    """Get the current user ID.

    Returns:
        The current user's UUID

    Raises:
        UserContextError: If user context is not set
    """
    uid = _current_user_id.get()
    if uid is None:
        raise UserContextError("User context is not set")
    return uid


def get_current_user_id_or_none() -> uuid.UUID | None:
    """Get the current user ID or None if not set."""
    return _current_user_id.get()


def set_current_user_id(uid: uuid.UUID | None) -> None:
    """Set the current user ID."""
    _current_user_id.set(uid)


# === Role Context ===

def get_current_user_role() -> str | None:
    """Get the current user's role."""
    return _current_user_role.get()


def set_current_user_role(role: str | None) -> None:
    """Set the current user's role."""
    _current_user_role.set(role)


def clear_all_context() -> None:
    """Clear all context variables.

    Call this at the end of each request to prevent context leakage.
    """
    _school_id.set(None)
    _current_user_id.set(None)
    _current_user_role.set(None)
