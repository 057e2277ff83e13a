"""Basic model and auth tests."""
from decimal import Decimal

from quotedesk import db
from quotedesk.models import User, Quote, QuoteItem, Setting


def test_user_password_hash(db_ctx):
    u = User(username='test', email='test@test.com', role='member')
    u.set_password('secret')
    assert u.check_password('secret')
    assert not u.check_password('wrong')


def test_user_roles(db_ctx):
    admin = User(username='a', email='a@a.com', role='admin')
    assert admin.is_admin()
    member = User(username='m', email='m@m.com', role='member')
    assert not member.is_admin()


def test_display_name_falls_back_to_username(db_ctx):
    assert User(username='kim', email='k@k.com').display_name == 'kim'
    assert User(username='kim', email='k@k.com', full_name='Kim Lee').display_name == 'Kim Lee'


def test_quote_finality(draft_quote):
    assert not draft_quote.is_final
    for status in Quote.FINAL_STATUSES:
        draft_quote.status = status
        assert draft_quote.is_final


def test_quote_item_as_line_item(draft_quote):
    qi = QuoteItem.query.filter_by(quote_id=draft_quote.id).first()
    line = qi.as_line_item()
    assert line.sl_no == 1
    assert line.quantity == Decimal('2')
    assert line.unit_price == Decimal('110')


def test_quote_to_dict(draft_quote):
    data = draft_quote.to_dict()
    assert data['status'] == 'Draft'
    assert data['totals']['subtotal'] == '220.00'
    assert len(data['items']) == 1
    assert 'items' not in draft_quote.to_dict(with_items=False)


def test_company_profile(db_ctx):
    Setting.set('company_name', 'Quote Desk Ltd', category='company')
    profile = Setting.company_profile()
    assert profile['company_name'] == 'Quote Desk Ltd'
    assert profile['company_phone'] == ''
    assert Setting.get('missing', 'fallback') == 'fallback'
    db.session.rollback()


def test_lead_to_dict(lead):
    assert set(lead.to_dict()) == {
        'id', 'unique_number', 'company_name', 'contact_person', 'phone', 'email', 'address',
        'main_quote_number', 'salesman_id', 'is_shared', 'share_percent',
    }
    assert lead.to_dict()['is_shared'] is False
