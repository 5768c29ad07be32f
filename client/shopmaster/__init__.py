# client/shopmaster/__init__.py
from flask import Flask, g

from .config import Config
from .extensions import get_credential_verifier
from .services.session_service import FlaskSessionStorage, SessionManager


def create_app() -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)

    @app.before_request
    def load_console_session():
        # One session manager per request, restored from the session cookie
        manager = SessionManager(
            verifier=get_credential_verifier(),
            storage=FlaskSessionStorage(),
            storage_key=app.config["SESSION_STORAGE_KEY"],
        )
        manager.restore()
        g.session_manager = manager

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.dashboard import dashboard_bp
    from .routes.rosters import customers_bp, suppliers_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(suppliers_bp)

    return app
