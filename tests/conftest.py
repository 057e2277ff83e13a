"""Shared fixtures."""
import pytest

from quotedesk import create_app, db
from quotedesk.models import User
from quotedesk.services import LeadService, QuoteService

PASSWORD = 'secret-pass'


@pytest.fixture
def app():
    app = create_app('testing')
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def db_ctx(app, app_ctx):
    db.create_all()
    yield
    db.session.remove()
    db.drop_all()


def make_user(username, role='member'):
    user = User(username=username, email=f'{username}@example.com', full_name=username.title(), role=role)
    user.set_password(PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user


def item(margin=10, quantity=2, unit_cost=100, vat=5, product='Widget', description=''):
    return {
        'product': product,
        'description': description,
        'quantity': quantity,
        'unit_cost': unit_cost,
        'margin_percent': margin,
        'vat_percent': vat,
    }


@pytest.fixture
def admin(db_ctx):
    return make_user('boss', role='admin')


@pytest.fixture
def member(db_ctx):
    return make_user('sam')


@pytest.fixture
def other_member(db_ctx):
    return make_user('olive')


@pytest.fixture
def lead(member):
    return LeadService.create_lead(member, company_name='Acme Trading', contact_person='Ann', email='ann@acme.test')


@pytest.fixture
def draft_quote(lead, member):
    return QuoteService.create_quote(lead.id, member, [item(margin=10)], discount_value=0)


@pytest.fixture
def pending_quote(lead, member, admin):
    return QuoteService.create_quote(lead.id, member, [item(margin=5), item(margin=12)], discount_value=0)
