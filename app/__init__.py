import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from sqlalchemy import text
from werkzeug.exceptions import HTTPException

from app.config import Config
from app.db import db
from app.errors import AppError
from app.routes.auth_routes import auth_bp
from app.routes.blog_routes import blog_bp
from app.routes.main_routes import main_bp


logger = logging.getLogger(__name__)


def _configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _configure_engine(app):
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if uri.startswith("sqlite"):
        return

    options = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
    options.setdefault("pool_size", app.config["DB_POOL_SIZE"])
    options.setdefault("max_overflow", 0)
    options.setdefault("pool_timeout", app.config["DB_POOL_TIMEOUT"])
    options.setdefault("pool_pre_ping", True)
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = options


def _register_jwt_handlers(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": "No token, authorization denied"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.info("Rejected bearer token: %s", reason)
        return jsonify({"error": "Token is not valid"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'self'; object-src 'none'",
}


def _register_security_headers(app):
    @app.after_request
    def set_security_headers(response):
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def _register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e, exc_info=e.__cause__ or e)
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception("Unhandled error: %s", e)
        return jsonify({"error": "Server error"}), 500


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)
    _configure_engine(app)

    db.init_app(app)
    jwt = JWTManager(app)
    _register_jwt_handlers(jwt)
    CORS(
        app,
        origins=app.config["CORS_ALLOWED_ORIGINS"],
        supports_credentials=True,
    )

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(blog_bp, url_prefix="/api/blog")
    app.register_blueprint(main_bp)
    _register_error_handlers(app)
    _register_security_headers(app)

    with app.app_context():
        db.session.execute(text("SELECT 1"))
        db.create_all()
        logger.info("Database connected, tables ready")

    return app
