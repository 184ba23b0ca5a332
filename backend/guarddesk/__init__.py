from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from datetime import timedelta
from typing import Optional, Dict, Any
import os

from guarddesk.config.auth import (
    LOGIN_URL, UNAUTHORIZED_URL, DEFAULT_LOGIN_DELAY, DEFAULT_SESSION_TTL_HOURS,
)

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()

EXTENSION_KEY = 'guarddesk'


def create_app(config: Optional[Dict[str, Any]] = None, grants=None, directory=None):
    """Build the dashboard app.

    grants: RoleGrants to evaluate against (defaults to the built-in matrix).
    directory: IdentityDirectory override; otherwise chosen by IDENTITY_DIRECTORY (static|sql).
    """
    global db_engine, SessionLocal
    app = Flask(__name__)

    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-secret')
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(
        hours=float(os.getenv('SESSION_TTL_HOURS', DEFAULT_SESSION_TTL_HOURS))
    )
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///dev.db')
    app.config['IDENTITY_DIRECTORY'] = os.getenv('IDENTITY_DIRECTORY', 'static')
    app.config['LOGIN_DELAY_SECONDS'] = float(os.getenv('LOGIN_DELAY_SECONDS', DEFAULT_LOGIN_DELAY))
    app.config['LOGIN_URL'] = os.getenv('LOGIN_URL', LOGIN_URL)
    app.config['UNAUTHORIZED_URL'] = os.getenv('UNAUTHORIZED_URL', UNAUTHORIZED_URL)
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    # Schema for the users, session_entries and auth_events tables
    from .models.authz import Base
    from .models import audit as _audit_models  # noqa: F401
    Base.metadata.create_all(db_engine)

    jwt.init_app(app)

    # Access components shared by every request
    from .services.registry import DEFAULT_GRANTS
    from .services.policy import PermissionEvaluator
    from .services.guard import RouteGuard
    from .services.directory import StaticIdentityDirectory, SqlIdentityDirectory

    if grants is None:
        grants = DEFAULT_GRANTS
    if directory is None:
        kind = app.config['IDENTITY_DIRECTORY']
        if kind == 'sql':
            directory = SqlIdentityDirectory(get_db)
        elif kind == 'static':
            directory = StaticIdentityDirectory()
        else:
            raise ValueError(f"Unknown IDENTITY_DIRECTORY {kind!r} (expected 'static' or 'sql')")
    app.extensions[EXTENSION_KEY] = {
        'grants': grants,
        'directory': directory,
        'guard': RouteGuard(
            PermissionEvaluator(grants),
            login_url=app.config['LOGIN_URL'],
            unauthorized_url=app.config['UNAUTHORIZED_URL'],
        ),
    }

    from .routes.auth import auth_bp
    from .routes.dashboard import views_bp
    from .routes.iam import iam_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(views_bp)
    app.register_blueprint(iam_bp, url_prefix='/iam')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    @app.teardown_appcontext
    def remove_db_session(exc=None):
        SessionLocal.remove()

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    return app


def get_db():
    return SessionLocal()
