"""Role-based permission decorators."""

from functools import wraps
from typing import Callable

from app.exceptions import ForbiddenException, UnauthorizedException
from app.models.user import Role
from app.utils.tenant_context import get_current_user_id_or_none, get_current_user_role

STAFF_ROLES = (Role.SCHOOL_ADMIN, Role.PRINCIPAL, Role.TEACHER)
SCHOOL_MANAGER_ROLES = (Role.SCHOOL_ADMIN, Role.PRINCIPAL)


def require_role(
    *allowed_roles: Role | str,
    allow_super_admin: bool = True,
    message: str = "You don't have permission to perform this action",
) -> Callable:
    """Decorator that enforces role-based access control.

    Usage:
        @router.post("/classes")
        @require_role(Role.SCHOOL_ADMIN, Role.PRINCIPAL)
        async def create_class(...):
            ...

    Args:
        *allowed_roles: Roles that are allowed to access the endpoint
        allow_super_admin: Let SUPER_ADMIN through regardless of allowed_roles
        message: Error message for rejected callers

    Returns:
        Decorator function
    """
    role_values = {role.value if isinstance(role, Role) else role for role in allowed_roles}

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if get_current_user_id_or_none() is None:
                raise UnauthorizedException()

            current_role = get_current_user_role()

            # Super admins can access everything unless the endpoint opts out
            if allow_super_admin and current_role == Role.SUPER_ADMIN.value:
                return await func(*args, **kwargs)

            if current_role not in role_values:
                raise ForbiddenException(message)

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_parent(message: str = "Access denied. Only parents can access this resource.") -> Callable:
    """Decorator for parent-only endpoints (super admins are not let through)."""
    return require_role(Role.PARENT, allow_super_admin=False, message=message)
