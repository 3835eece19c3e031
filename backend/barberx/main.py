import logging
import os
import re

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_login import LoginManager

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

logger = logging.getLogger(__name__)

WEAK_SECRETS = ["dev-secret-change-me", "dev-jwt-secret-change-me", "secret123"]


def _mask_url_password(url: str) -> str:
    return re.sub(r"(://[^:/?#]+):[^@]*@", r"\1:***@", url)


def _init_sentry(env: str) -> None:
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=env,
        release=os.getenv("GIT_SHA", "unknown"),
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info(
        "Sentry initialized",
        extra={"context": {"environment": env, "traces_sample_rate": 0.1}},
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"success": False, "error": "Route not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        logger.warning(
            "Rate limit exceeded",
            extra={"context": {"limit": str(getattr(error, "description", ""))}},
        )
        return (
            jsonify({"success": False, "error": "Too many requests, try again later"}),
            429,
        )


def _register_blueprints(app: Flask) -> None:
    from barberx.controllers.account_controller import customer_bp, owner_bp
    from barberx.controllers.auth_controller import auth_bp
    from barberx.controllers.barber_controller import barber_bp
    from barberx.controllers.customer_profile_controller import customer_profile_bp
    from barberx.controllers.public_controller import public_bp
    from barberx.controllers.salon_controller import salon_bp

    for blueprint in (
        auth_bp,
        public_bp,
        customer_bp,
        owner_bp,
        salon_bp,
        barber_bp,
        customer_profile_bp,
    ):
        app.register_blueprint(blueprint)


def create_app():
    from barberx.core import config

    env = config.get_environment()
    is_production = config.is_production()

    app = Flask(__name__)
    if config.is_testing():
        app.config["TESTING"] = True

    from barberx.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=logging.INFO if is_production else logging.DEBUG,
        enable_sql_echo=not is_production and not config.is_testing(),
        log_to_file=config.is_log_to_file_enabled(),
        use_json_format=is_production,
    )
    logger.info(
        "Logging configured",
        extra={
            "context": {
                "environment": env,
                "json_format": is_production,
                "database_url": _mask_url_password(config.get_database_url()),
            }
        },
    )

    config.log_auth_config()
    config.log_loyalty_config()
    _init_sentry(env)

    app.config["SECRET_KEY"] = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
    app.json.sort_keys = False

    # Production validation: fail fast if weak secrets are used
    if is_production:
        secret_key = app.config["SECRET_KEY"]
        if secret_key in WEAK_SECRETS or len(secret_key) < 32:
            raise ValueError(
                "Production deployment requires strong SECRET_KEY (min 32 chars). "
                "Set FLASK_SECRET_KEY environment variable."
            )

    from barberx.core.limiter_config import limiter

    limiter.init_app(app)
    limiter.enabled = config.is_rate_limit_enabled()
    if not limiter.enabled:
        logger.info("Rate limiting disabled", extra={"context": {"environment": env}})

    from barberx.db.session import (
        SessionLocal,
        check_database_connection,
        close_request_session,
        create_tables,
    )

    create_tables()
    app.teardown_appcontext(close_request_session)

    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "error": "Authentication required"}), 401

    from barberx.db.base import User

    @login_manager.user_loader
    def load_user(user_id):
        with SessionLocal() as db:
            return db.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(request):
        """Load the account named by the Authorization Bearer token."""
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        from barberx.core.security import get_user_from_token

        claims = get_user_from_token(auth_header[len("Bearer ") :].strip())
        if not claims:
            return None

        with SessionLocal() as db:
            user = db.get(User, claims["user_id"])
            if user and user.is_active:
                return user
        return None

    @app.route("/health")
    def health_check():
        if check_database_connection():
            return jsonify({"status": "healthy", "database": "connected"}), 200
        return jsonify({"status": "unhealthy", "database": "disconnected"}), 503

    _register_error_handlers(app)
    _register_blueprints(app)

    logger.info(
        "Application created",
        extra={"context": {"environment": env, "blueprints": sorted(app.blueprints)}},
    )
    return app
