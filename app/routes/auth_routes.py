from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.services import auth_service
from app.services.token_service import current_identity


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    content_type = (request.content_type or "").lower()
    profile_photo = None

    if "multipart/form-data" in content_type or "application/x-www-form-urlencoded" in content_type:
        data = request.form
        profile_photo = request.files.get("profilePhoto")
    else:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid JSON body"}), 400

    result = auth_service.register(
        data.get("name"),
        data.get("email"),
        data.get("password"),
        profile_photo,
    )
    return jsonify({
        "message": "User created successfully",
        "token": result["token"],
        "user": result["user"],
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    result = auth_service.login(
        data.get("email"),
        data.get("password")
    )
    return jsonify(result), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    identity = current_identity()
    return jsonify(auth_service.get_by_id(identity["user_id"])), 200
