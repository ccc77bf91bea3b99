import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.db import db
from app.errors import AuthError, ConflictError, DatabaseError, NotFoundError, ValidationError
from app.repositories import user_repository
from app.services import blob_store
from app.services.credential_service import hash_password, verify_password
from app.services.token_service import issue_token


logger = logging.getLogger(__name__)


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def register(name, email, password, profile_photo=None):
    if not _require_non_empty_string(name) or not _require_non_empty_string(email) or not _require_non_empty_string(password):
        raise ValidationError("Missing fields")

    name = name.strip()

    # Emails are matched exactly as stored.
    if user_repository.get_by_email(email):
        raise ConflictError("User already exists")

    password_hash = hash_password(password)

    profile_photo_url = None
    if blob_store.has_file(profile_photo):
        profile_photo_url, _ = blob_store.upload_file(profile_photo, "profiles")

    try:
        user = user_repository.create_user(
            name=name,
            email=email,
            password_hash=password_hash,
            profile_photo=profile_photo_url,
        )
    except IntegrityError as e:
        db.session.rollback()
        if profile_photo_url:
            logger.error("Orphaned profile photo %s after failed registration", profile_photo_url)
        raise ConflictError("User already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        if profile_photo_url:
            logger.error("Orphaned profile photo %s after failed registration", profile_photo_url)
        raise DatabaseError() from e

    logger.info("Registered user %s", user.id)
    return {
        "user": user.to_dict(),
        "token": issue_token(user.id, user.email),
    }


def login(email, password):
    if not _require_non_empty_string(email) or not _require_non_empty_string(password):
        raise AuthError("Invalid credentials")

    user = user_repository.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthError("Invalid credentials")

    return {
        "user": user.to_dict(),
        "token": issue_token(user.id, user.email),
    }


def get_by_id(user_id):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")

    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "profile_photo": user.profile_photo,
    }
