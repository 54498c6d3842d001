"""Campus Gate Pass System - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'Campus Gate Pass System',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from gatepass.api.auth import auth_bp
    from gatepass.api.students import students_bp
    from gatepass.api.verification import verification_bp
    from gatepass.api.tutors import tutors_bp
    from gatepass.api.admin import admin_bp

    # Accounts (student, tutor and admin login/registration)
    app.register_blueprint(auth_bp)

    # Role dashboards
    app.register_blueprint(students_bp)
    app.register_blueprint(tutors_bp, url_prefix='/tutor')
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # Gate verification (QR target page)
    app.register_blueprint(verification_bp)

    # Swagger UI
    from flask_swagger_ui import get_swaggerui_blueprint
    from gatepass.utils.swagger import SWAGGER_URL, API_URL, generate_swagger_spec

    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    swaggerui_bp = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={'app_name': "Campus Gate Pass API"}
    )
    app.register_blueprint(swaggerui_bp, url_prefix=SWAGGER_URL)

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from gatepass.utils.helpers import handle_error
    from gatepass.utils.exceptions import GatePassError
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(GatePassError)
    def handle_service_error(error):
        db.session.rollback()
        return handle_error(error.message, error.status_code, errors=error.errors)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return handle_error(e.description, e.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', error)
        return handle_error('Internal server error', 500)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return handle_error('Token has expired', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return handle_error('Invalid token', 401)

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return handle_error('Authorization token required', 401)

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        app.logger.info('Campus Gate Pass System startup')

    app.logger.setLevel(level)

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models so metadata and migrations see every table
        from gatepass.models import (
            Student, StudentKind, PassStatus,
            Tutor, TutorStatus,
            GatePass, GroupMember,
            NotificationAck
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with sample tutors and students."""
        from gatepass.services.seed_service import SeedService

        try:
            summary = SeedService.seed_all()
            click.echo(f"Database seeded: {summary['tutors']} tutors, {summary['students']} students")
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error seeding database: {str(e)}')
