"""Flask application package."""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: dict[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied on top of the environment config
            (used by tests).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from luckydraw.config import get_config
    from luckydraw.engine import init_engine
    from luckydraw.error_handlers import register_error_handlers
    from luckydraw.logging_config import configure_logging
    from luckydraw.routes.admin import admin_bp
    from luckydraw.routes.awards import awards_bp
    from luckydraw.routes.health import health_bp
    from luckydraw.routes.pool import pool_bp
    from luckydraw.routes.results import results_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_engine(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(awards_bp, url_prefix="/api")
    app.register_blueprint(pool_bp, url_prefix="/api")
    app.register_blueprint(results_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    return app
