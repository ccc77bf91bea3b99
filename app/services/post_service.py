import logging

from sqlalchemy.exc import SQLAlchemyError

from app.db import db
from app.errors import DatabaseError, NotFoundError, ValidationError
from app.repositories import post_repository, user_repository
from app.services import blob_store


logger = logging.getLogger(__name__)


def media_type_for(mimetype: str) -> str:
    if (mimetype or "").lower().startswith("video/"):
        return "video"
    return "image"


def _serialize_row(row):
    return {
        "id": row.id,
        "user_id": row.user_id,
        "caption": row.caption,
        "media_url": row.media_url,
        "media_type": row.media_type,
        "created_at": row.created_at.isoformat(),
        "author_name": row.author_name,
        "author_photo": row.author_photo,
    }


def create_post(author_id: int, caption, media):
    """Upload ``media`` and record a post for ``author_id``.

    ``author_id`` must come from the verified token. No row is written
    unless the upload succeeded.
    """
    if not blob_store.has_file(media):
        raise ValidationError("Media file is required")

    if caption is not None and not isinstance(caption, str):
        raise ValidationError("Caption must be a string")

    if not user_repository.get_by_id(author_id):
        raise NotFoundError("User not found")

    media_url, content_type = blob_store.upload_file(media, "posts")
    media_type = media_type_for(content_type)

    try:
        post = post_repository.create_post(
            user_id=author_id,
            caption=caption,
            media_url=media_url,
            media_type=media_type,
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Orphaned media %s: post insert for user %s failed", media_url, author_id)
        raise DatabaseError() from e

    logger.info("User %s created post %s (%s)", author_id, post.id, media_type)
    return post.to_dict()


def list_posts():
    return [_serialize_row(row) for row in post_repository.list_posts_with_authors()]


def list_posts_by_author(author_id: int):
    return [
        _serialize_row(row)
        for row in post_repository.list_posts_with_authors_by_user_id(author_id)
    ]
