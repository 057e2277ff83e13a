"""Quote and lead number generation."""
from datetime import datetime

from quotedesk import db
from quotedesk.models import Lead, Quote
from config import Config


class NumberingService:
    @staticmethod
    def _next_sequence(prefix, model_class, number_column, date_part):
        pattern = f"{prefix}-{date_part}-%"
        column = getattr(model_class, number_column)
        last = (
            db.session.query(model_class)
            .filter(column.like(pattern))
            # Longer suffix first: "-10000" sorts below "-9999" as text
            .order_by(db.func.length(column).desc(), column.desc())
            .first()
        )
        if last:
            parts = getattr(last, number_column).split("-")
            seq = int(parts[-1]) + 1
        else:
            seq = 1
        return f"{prefix}-{date_part}-{seq:04d}"

    @staticmethod
    def next_quote_number():
        date_part = datetime.utcnow().strftime("%Y")
        return NumberingService._next_sequence(
            Config.QUOTE_NUMBER_PREFIX, Quote, "quote_number", date_part
        )

    @staticmethod
    def next_lead_number():
        date_part = datetime.utcnow().strftime("%Y%m")
        return NumberingService._next_sequence(
            Config.LEAD_NUMBER_PREFIX, Lead, "unique_number", date_part
        )
