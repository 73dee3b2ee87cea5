"""
Revoult Studio - Main Application Entry Point
Application Factory Pattern with one blueprint per functional area

This module initializes the Flask application with its extensions,
configuration, error handlers and CLI commands. All route handling is
delegated to blueprints.
"""

import os
import click
from flask import Flask, render_template, request
from config import get_config
from extensions import db, login_manager
from utils.helpers import api_error, NO_CACHE_HEADERS, PASSWORD_MIN_LENGTH
from utils.media import init_media

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.admin import admin_bp
from blueprints.portfolio import portfolio_bp
from blueprints.users import users_bp
from blueprints.contact import contact_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    register_commands(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Revoult Studio is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    init_media(app)

    # Importing models registers the tables and the Flask-Login user loader
    import models  # noqa: F401

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(contact_bp)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register custom error handlers; API paths get JSON envelopes"""

    @app.errorhandler(400)
    def bad_request(e):
        if _wants_json():
            return api_error('Bad request', 400)
        return render_template('error.html', code=400, message='Bad request'), 400

    @app.errorhandler(404)
    def page_not_found(e):
        if _wants_json():
            return api_error('Not found', 404)
        return render_template('error.html', code=404, message='Page not found'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if _wants_json():
            return api_error('Method not allowed', 405)
        return render_template('error.html', code=405, message='Method not allowed'), 405

    @app.errorhandler(413)
    def file_too_large(e):
        max_mb = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return api_error(f'File is too large. Maximum size is {max_mb}MB.', 413)

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        if _wants_json():
            return api_error('Internal server error', 500)
        return render_template('error.html', code=500, message='Something went wrong'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        from datetime import datetime
        from utils.data import get_services
        return {
            'current_year': datetime.now().year,
            'nav_services': get_services(),
            'studio_name': 'Revoult Studio'
        }

    @app.after_request
    def add_response_headers(response):
        """No caching for API responses, basic hardening for everything"""
        if request.path.startswith('/api/'):
            for header, value in NO_CACHE_HEADERS.items():
                response.headers[header] = value
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        return response


def register_commands(app):
    """Register flask CLI commands"""

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True,
                  help='Password for the account')
    def create_admin(email, password):
        """Create an admin account, or reset the password of an existing one"""
        from models import User

        email = email.strip().lower()
        if len(password) < PASSWORD_MIN_LENGTH:
            raise click.BadParameter(
                f'Password must be at least {PASSWORD_MIN_LENGTH} characters', param_hint='--password')

        user = User.query.filter_by(email=email).first()
        if user:
            user.set_password(password)
            user.role = 'admin'
            action = 'updated'
        else:
            user = User(email=email, role='admin', is_active=True)
            user.set_password(password)
            db.session.add(user)
            action = 'created'
        db.session.commit()
        click.echo(f'Admin user {email} {action}.')


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
