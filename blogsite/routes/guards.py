"""Per-route authentication requirements.

Every view declares one ``Guard``. ``guarded`` applies the checks in a
fixed order (soft resolution, hard gate, post ownership) and hands the
results to the view as keyword arguments instead of storing them on the
request.
"""

import enum
from functools import wraps

from flask import current_app, request

from blogsite.services import post_service
from blogsite.services.identity_service import require_identity, resolve_identity


class Guard(enum.Enum):
    NONE = "none"
    SOFT = "soft"
    HARD = "hard"
    HARD_OWNERSHIP = "hard+ownership"


def session_token():
    return request.cookies.get(current_app.config["TOKEN_COOKIE_NAME"])


def guarded(guard: Guard):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if guard is Guard.NONE:
                return view(*args, **kwargs)

            token = session_token()
            if guard is Guard.SOFT:
                return view(*args, identity=resolve_identity(token), **kwargs)

            # require_identity runs the soft resolution itself.
            identity = require_identity(token)
            if guard is Guard.HARD_OWNERSHIP:
                post = post_service.authorize_post_edit(
                    kwargs.pop("post_id"), identity.user_id
                )
                return view(*args, identity=identity, post=post, **kwargs)

            return view(*args, identity=identity, **kwargs)

        return wrapper

    return decorator
