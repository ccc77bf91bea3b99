from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.services import post_service
from app.services.token_service import current_identity


blog_bp = Blueprint("blog", __name__)


@blog_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post():
    identity = current_identity()

    post = post_service.create_post(
        identity["user_id"],
        request.form.get("caption"),
        request.files.get("media"),
    )
    return jsonify({
        "message": "Post created successfully",
        "post": post,
    }), 201


@blog_bp.route("/posts", methods=["GET"])
def list_posts():
    return jsonify(post_service.list_posts()), 200


@blog_bp.route("/posts/user/<int:user_id>", methods=["GET"])
def list_user_posts(user_id):
    return jsonify(post_service.list_posts_by_author(user_id)), 200
