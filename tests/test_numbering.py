"""Quote and lead number sequences."""
from datetime import datetime

from quotedesk import db
from quotedesk.models import Lead
from quotedesk.services import NumberingService


def _lead(number, salesman):
    db.session.add(Lead(unique_number=number, company_name=number, salesman_id=salesman.id))
    db.session.commit()


def test_first_numbers(member):
    year = datetime.utcnow().strftime('%Y')
    month = datetime.utcnow().strftime('%Y%m')
    assert NumberingService.next_quote_number() == f'Q-{year}-0001'
    assert NumberingService.next_lead_number() == f'L-{month}-0001'


def test_sequence_continues_past_four_digits(member):
    month = datetime.utcnow().strftime('%Y%m')
    _lead(f'L-{month}-9999', member)
    assert NumberingService.next_lead_number() == f'L-{month}-10000'
    _lead(f'L-{month}-10000', member)
    assert NumberingService.next_lead_number() == f'L-{month}-10001'


def test_other_periods_do_not_count(member):
    month = datetime.utcnow().strftime('%Y%m')
    _lead('L-199901-0042', member)
    assert NumberingService.next_lead_number() == f'L-{month}-0001'
