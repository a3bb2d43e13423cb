from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from voteease.cli import register_cli
from voteease.config import Config
from voteease.errors import register_error_handlers
from voteease.extensions import db, login_manager, migrate
from voteease.models import Voter
from voteease.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(str(app.config["LOG_LEVEL"]).upper())

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Voter, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return (
            jsonify(
                {
                    "success": False,
                    "error": "Unauthorized",
                    "message": "Please log in to continue.",
                }
            ),
            401,
        )

    register_error_handlers(app)
    register_routes(app)
    register_cli(app)
    check_database(app)
    return app


def check_database(app):
    """Ping the database; only production refuses to start without it."""
    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
            app.logger.info(
                "Database connected: %s",
                db.engine.url.render_as_string(hide_password=True),
            )
        except SQLAlchemyError as exc:
            app.logger.error("Database connection error: %s", exc)
            if app.config["APP_ENV"] == "production":
                raise
            app.logger.warning("Make sure the database server is running.")
        finally:
            db.session.remove()


__all__ = ["create_app", "db", "migrate"]
