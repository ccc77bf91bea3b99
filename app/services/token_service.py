import jwt
from flask_jwt_extended import create_access_token, decode_token, get_jwt, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException

from app.errors import InvalidTokenError, TokenExpiredError


def issue_token(user_id: int, email: str, expires_delta=None) -> str:
    kwargs = {}
    if expires_delta is not None:
        kwargs["expires_delta"] = expires_delta

    return create_access_token(
        identity=str(user_id),
        additional_claims={"email": email},
        **kwargs,
    )


def _identity_from_claims(sub, email):
    try:
        user_id = int(sub)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError() from e

    if not isinstance(email, str) or not email:
        raise InvalidTokenError()

    return {"user_id": user_id, "email": email}


def verify_token(token: str) -> dict:
    if not isinstance(token, str) or not token.strip():
        raise InvalidTokenError()

    try:
        claims = decode_token(token.strip())
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except (jwt.InvalidTokenError, JWTExtendedException) as e:
        raise InvalidTokenError() from e

    return _identity_from_claims(claims.get("sub"), claims.get("email"))


def current_identity() -> dict:
    """Identity of the caller of a ``@jwt_required()`` route."""
    return _identity_from_claims(get_jwt_identity(), get_jwt().get("email"))
