from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from app.errors import PasswordHashingError


def hash_password(password: str) -> str:
    method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    try:
        return generate_password_hash(password, method=method)
    except Exception as e:
        raise PasswordHashingError() from e


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash or not isinstance(password, str):
        return False

    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unknown or malformed hash method.
        return False
