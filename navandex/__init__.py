import logging

from flask import Flask, jsonify
from flask_cors import CORS
from .extensions import db, migrate, jwt, ma
from .config import Config
from navandex.utils.error_handlers import register_error_handlers
from navandex.routes import register_blueprints


def configure_logging(app):
    """Configure root logging once per process"""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.logger.setLevel(level)


def register_cors(app):
    CORS(
        app,
        origins=app.config["CORS_ORIGINS"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        supports_credentials=True,
    )


def create_app(config_class=Config):

    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    # Model classes must be imported before create_all / migrations
    from navandex import models  # noqa: F401

    register_blueprints(app)
    register_error_handlers(app)
    register_cors(app)

    @jwt.additional_claims_loader
    def add_claims(user):
        return {
            "role": getattr(user.role, "value", user.role),
            "phone_number": user.phone_number,
            "name": user.name,
        }

    @jwt.user_identity_loader
    def user_identity(user):
        return str(user.id)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"error": "Invalid token"}), 422

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({"error": "Missing authorization header"}), 401

    @app.route("/health")
    def health():
        return {"status": "healthy"}, 200

    return app
