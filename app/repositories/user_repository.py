from app.models.user_model import User
from app.db import db


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def create_user(name, email, password_hash, profile_photo=None):
    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        profile_photo=profile_photo,
    )
    db.session.add(user)
    db.session.commit()
    return user
