"""Blueprint registrations for application routes."""

from flask import Flask

from .locales import blueprint as locales_blueprint
from .messages import blueprint as messages_blueprint
from .translations import blueprint as translations_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(locales_blueprint)
    app.register_blueprint(messages_blueprint)
    app.register_blueprint(translations_blueprint)
