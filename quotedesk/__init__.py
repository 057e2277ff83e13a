"""Flask application factory."""
import os

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_mail import Mail
from flask_wtf.csrf import CSRFProtect

from config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
mail = Mail()
csrf = CSRFProtect()


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__, template_folder='templates')
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    mail.init_app(app)
    csrf.init_app(app)

    from quotedesk.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Authentication required'}), 401

    # Register blueprints
    from quotedesk.blueprints.auth import auth_bp
    from quotedesk.blueprints.leads import leads_bp
    from quotedesk.blueprints.quotes import quotes_bp
    from quotedesk.blueprints.settings import settings_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(leads_bp, url_prefix='/leads')
    app.register_blueprint(quotes_bp, url_prefix='/quotes')
    app.register_blueprint(settings_bp, url_prefix='/settings')

    # Error handlers
    from quotedesk.blueprints.errors import register_error_handlers
    register_error_handlers(app)

    from quotedesk.commands import register_commands
    register_commands(app)

    # Ignore "already exists" so multiple workers or an existing DB don't crash the app.
    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            if "already exists" in str(e).lower() or "duplicate key" in str(e).lower():
                app.logger.debug('Tables already present: %s', e)
            else:
                raise

    return app
