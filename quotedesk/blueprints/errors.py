"""JSON error handlers."""
from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from quotedesk import db
from quotedesk.errors import QuoteDeskError


def register_error_handlers(app):
    @app.errorhandler(QuoteDeskError)
    def handle_quote_error(error):
        db.session.rollback()
        current_app.logger.info('%s: %s', type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'success': False, 'message': error.description}), error.code

    @app.errorhandler(500)
    def handle_server_error(error):
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Server error'}), 500
