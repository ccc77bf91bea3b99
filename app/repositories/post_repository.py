from app.models.post_model import Post
from app.models.user_model import User
from app.db import db


def create_post(user_id, caption, media_url, media_type, created_at=None):
    post = Post(
        user_id=user_id,
        caption=caption,
        media_url=media_url,
        media_type=media_type,
    )
    if created_at is not None:
        post.created_at = created_at

    db.session.add(post)
    db.session.commit()
    return post


def count_by_user_id(user_id: int) -> int:
    return Post.query.filter_by(user_id=user_id).count()


def _joined_posts_query():
    return (
        db.session.query(
            Post.id,
            Post.user_id,
            Post.caption,
            Post.media_url,
            Post.media_type,
            Post.created_at,
            User.name.label("author_name"),
            User.profile_photo.label("author_photo"),
        )
        .join(User, Post.user_id == User.id)
        .order_by(Post.created_at.desc(), Post.id.desc())
    )


def list_posts_with_authors():
    return _joined_posts_query().all()


def list_posts_with_authors_by_user_id(user_id: int):
    return _joined_posts_query().filter(Post.user_id == user_id).all()
