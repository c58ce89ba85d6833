import logging
import traceback

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from betterplay.config import DevelopmentConfig
from betterplay.errors import BetterPlayError
from betterplay.extensions import db, migrate

def create_app(config_class=DevelopmentConfig):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Register Blueprints
    from betterplay.api.routes.auth import auth_bp
    from betterplay.api.routes.venues import venues_bp
    from betterplay.api.routes.slots import slots_bp
    from betterplay.api.routes.bookings import bookings_bp
    from betterplay.api.routes.inquiries import inquiries_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(venues_bp, url_prefix='/venues')
    app.register_blueprint(slots_bp, url_prefix='/venues')
    app.register_blueprint(bookings_bp)
    app.register_blueprint(inquiries_bp)

    register_error_handlers(app)

    from betterplay.cli import register_commands
    register_commands(app)

    @app.route('/check')
    def health():
        return {"status": "ok", "app": "BetterPlay"}

    return app

def register_error_handlers(app):
    @app.errorhandler(BetterPlayError)
    def handle_domain_error(error):
        db.session.rollback()
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.error(f"Unhandled error: {error}\n{traceback.format_exc()}")
        return jsonify({'error': 'Server Error'}), 500
