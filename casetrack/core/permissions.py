# casetrack/core/permissions.py
from functools import wraps
from flask import g
from casetrack.core.exceptions import PermissionDenied


def require_role(*role_names):
    """
    Allow the view only to users holding one of ``role_names`` in the
    current tenant. Place below ``login_required``.
    """

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = getattr(g, "user", None)
            role = user.role.name if user is not None and user.role else None

            if role not in role_names:
                raise PermissionDenied(
                    f"User does not have required role: {', '.join(role_names)}"
                )

            return f(*args, **kwargs)

        return decorated_function

    return decorator
