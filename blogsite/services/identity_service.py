from dataclasses import dataclass

from blogsite.errors import Unauthenticated
from blogsite.logger import logger
from blogsite.services.token_service import InvalidToken, verify_token


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False
    user_id = None


@dataclass(frozen=True)
class Authenticated:
    user_id: int
    is_authenticated = True


ANONYMOUS = Anonymous()


def resolve_identity(token):
    """Soft check: never raises, an unusable token just means anonymous."""
    if not token:
        return ANONYMOUS

    try:
        claims = verify_token(token)
    except InvalidToken as e:
        logger.debug(f"Ignoring session token: {e.reason.value}")
        return ANONYMOUS

    return Authenticated(user_id=claims.user_id)


def require_identity(token) -> Authenticated:
    identity = resolve_identity(token)
    if not identity.is_authenticated:
        raise Unauthenticated()
    return identity
