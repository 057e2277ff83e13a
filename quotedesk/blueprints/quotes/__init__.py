from flask import Blueprint

quotes_bp = Blueprint('quotes', __name__)

from quotedesk.blueprints.quotes import routes  # noqa: E402,F401
