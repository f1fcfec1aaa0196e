"""Signed, stateless session tokens.

Tokens are access JWTs issued by Flask-JWT-Extended. The subject is the
user id as a string and the expiry is the app's fixed
``JWT_ACCESS_TOKEN_EXPIRES``. Nothing is stored server side, so a token
stays valid until it expires.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timezone

import jwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from blogsite.db import MAX_SQL_INTEGER


class TokenError(enum.Enum):
    MALFORMED = "malformed"
    SIGNATURE_MISMATCH = "signature_mismatch"
    EXPIRED = "expired"


class InvalidToken(Exception):
    def __init__(self, reason: TokenError):
        super().__init__(reason.value)
        self.reason = reason


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    expires_at: datetime


def issue_token(user_id: int) -> str:
    return create_access_token(identity=str(user_id))


def verify_token(token) -> TokenClaims:
    if not isinstance(token, str) or not token.strip():
        raise InvalidToken(TokenError.MALFORMED)

    # PyJWT checks the signature before the expiry, so a forged token
    # never reports EXPIRED.
    try:
        claims = decode_token(token)
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken(TokenError.EXPIRED) from e
    except jwt.InvalidSignatureError as e:
        raise InvalidToken(TokenError.SIGNATURE_MISMATCH) from e
    except (jwt.InvalidTokenError, JWTExtendedException) as e:
        raise InvalidToken(TokenError.MALFORMED) from e

    subject = claims.get("sub")
    expires = claims.get("exp")
    if not isinstance(subject, str) or not (subject.isascii() and subject.isdigit()) or expires is None:
        raise InvalidToken(TokenError.MALFORMED)

    user_id = int(subject)
    if user_id > MAX_SQL_INTEGER:
        raise InvalidToken(TokenError.MALFORMED)

    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
    )
