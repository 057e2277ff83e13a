"""HTTP API: status codes and JSON error bodies."""
from quotedesk.models import Quote

from conftest import PASSWORD, item


def login(client, user):
    return client.post('/auth/login', json={'username': user.username, 'password': PASSWORD})


def test_requires_login(client, member):
    rv = client.get('/quotes/')
    assert rv.status_code == 401
    assert rv.get_json()['success'] is False


def test_bad_password(client, member):
    rv = client.post('/auth/login', json={'username': member.username, 'password': 'nope'})
    assert rv.status_code == 401


def test_login_and_me(client, member):
    assert login(client, member).status_code == 200
    rv = client.get('/auth/me')
    assert rv.get_json()['user']['username'] == member.username


def test_create_quote(client, member, lead):
    login(client, member)
    rv = client.post(f'/quotes/leads/{lead.id}', json={'items': [item()], 'discount_value': 0})
    assert rv.status_code == 201
    quote = rv.get_json()['quote']
    assert quote['status'] == Quote.DRAFT
    assert quote['is_approved'] is True
    assert quote['totals']['grand_total'] == '231.00'
    assert quote['items'][0]['sl_no'] == 1


def test_create_quote_validation_error(client, member, lead):
    login(client, member)
    rv = client.post(f'/quotes/leads/{lead.id}', json={'items': [item(quantity=0)], 'discount_value': 0})
    assert rv.status_code == 400
    body = rv.get_json()
    assert body['success'] is False
    assert '1' in body['errors']['items']


def test_create_quote_without_discount_value(client, member, lead):
    login(client, member)
    rv = client.post(f'/quotes/leads/{lead.id}', json={'items': [item()]})
    assert rv.status_code == 400
    assert 'discount_value' in rv.get_json()['errors']


def test_create_quote_unknown_lead(client, member):
    login(client, member)
    rv = client.post('/quotes/leads/missing', json={'items': [item()], 'discount_value': 0})
    assert rv.status_code == 404


def test_calculate(client, member):
    login(client, member)
    rv = client.post('/quotes/calculate', json={
        'items': [item(margin=5)], 'discount_mode': 'PERCENT', 'discount_value': 50,
    })
    assert rv.status_code == 200
    body = rv.get_json()
    assert body['totals']['grand_total'] == '115.50'
    assert body['requires_approval'] is True


def test_member_cannot_approve_over_http(client, member, pending_quote):
    login(client, member)
    rv = client.post(f'/quotes/{pending_quote.id}/approve')
    assert rv.status_code == 403
    assert rv.get_json()['success'] is False


def test_admin_approves_over_http(client, admin, pending_quote):
    login(client, admin)
    rv = client.post(f'/quotes/{pending_quote.id}/approve')
    assert rv.status_code == 200
    assert rv.get_json()['quote']['status'] == Quote.DRAFT


def test_approve_draft_is_conflict(client, admin, draft_quote):
    login(client, admin)
    rv = client.post(f'/quotes/{draft_quote.id}/approve')
    assert rv.status_code == 409


def test_reject_without_note(client, admin, pending_quote):
    login(client, admin)
    rv = client.post(f'/quotes/{pending_quote.id}/reject', json={})
    assert rv.status_code == 400


def test_reject_with_note(client, admin, pending_quote):
    login(client, admin)
    rv = client.post(f'/quotes/{pending_quote.id}/reject', json={'note': 'Below cost'})
    assert rv.status_code == 200
    assert rv.get_json()['quote']['reject_note'] == 'Below cost'


def test_status_change(client, member, draft_quote):
    login(client, member)
    rv = client.post(f'/quotes/{draft_quote.id}/status', json={'status': 'Sent'})
    assert rv.status_code == 200
    assert rv.get_json()['quote']['status'] == Quote.SENT


def test_unknown_quote(client, member):
    login(client, member)
    rv = client.get('/quotes/missing')
    assert rv.status_code == 404
    assert rv.get_json()['message'] == 'Quote not found.'


def test_pdf_gate(client, member, admin, pending_quote):
    login(client, member)
    assert client.get(f'/quotes/{pending_quote.id}/pdf').status_code == 403
    assert client.get(f'/quotes/{pending_quote.id}/preview').status_code == 403

    login(client, admin)
    rv = client.get(f'/quotes/{pending_quote.id}/pdf')
    assert rv.status_code == 200
    assert rv.mimetype == 'application/pdf'
    assert rv.data.startswith(b'%PDF')


def test_preview(client, member, draft_quote):
    login(client, member)
    rv = client.get(f'/quotes/{draft_quote.id}/preview')
    assert rv.status_code == 200
    assert draft_quote.quote_number in rv.get_data(as_text=True)


def test_clone_over_http(client, member, pending_quote):
    login(client, member)
    rv = client.post(f'/quotes/{pending_quote.id}/clone', json={'items': [item(margin=20)]})
    assert rv.status_code == 201
    assert rv.get_json()['quote']['status'] == Quote.DRAFT


def test_main_quote(client, member, lead, draft_quote):
    login(client, member)
    rv = client.post(f'/leads/{lead.id}/main-quote', json={'quote_number': draft_quote.quote_number})
    assert rv.status_code == 200
    assert rv.get_json()['main_quote_number'] == draft_quote.quote_number

    assert client.post(f'/leads/{lead.id}/main-quote', json={}).status_code == 400
    assert client.post(f'/leads/{lead.id}/main-quote', json={'quote_number': 'Q-1999-0001'}).status_code == 404

    rv = client.post(f'/leads/{lead.id}/main-quote', json={'quote_number': None})
    assert rv.get_json()['main_quote_number'] is None


def test_lead_detail_lists_quotes(client, member, lead, draft_quote):
    login(client, member)
    rv = client.get(f'/leads/{lead.id}')
    assert rv.status_code == 200
    assert [q['id'] for q in rv.get_json()['lead']['quotes']] == [draft_quote.id]


def test_other_member_cannot_see_lead(client, other_member, lead):
    login(client, other_member)
    assert client.get(f'/leads/{lead.id}').status_code == 403


def test_list_quotes(client, member, draft_quote):
    login(client, member)
    rv = client.get('/quotes/?status=Draft')
    body = rv.get_json()
    assert body['total'] == 1
    assert body['quotes'][0]['quote_number'] == draft_quote.quote_number


def test_member_cannot_edit_company_settings(client, member):
    login(client, member)
    rv = client.put('/settings/company', json={'company_name': 'Mine'})
    assert rv.status_code == 403
    assert rv.get_json()['success'] is False


def test_admin_edits_company_settings(client, admin):
    login(client, admin)
    rv = client.put('/settings/company', json={'company_name': 'Quote Desk Ltd', 'company_phone': '555-0100'})
    assert rv.status_code == 200
    assert client.get('/settings/company').get_json()['company']['company_phone'] == '555-0100'


def test_activity_log(client, admin, member, draft_quote):
    login(client, admin)
    rv = client.get(f'/settings/activity-log?lead_id={draft_quote.lead_id}')
    actions = [log['action'] for log in rv.get_json()['logs']]
    assert 'LEAD_CREATED' in actions
    assert 'QUOTE_CREATED' in actions


def test_calculate_rejects_non_finite_numbers(client, member):
    login(client, member)
    rv = client.post('/quotes/calculate', json={'items': [item(quantity='Infinity')], 'discount_value': 0})
    assert rv.status_code == 400
    assert rv.get_json()['errors']['items']['1'] == ['Quantity must be a finite number.']

    rv = client.post('/quotes/calculate', json={'items': [item()], 'discount_value': 'NaN'})
    assert rv.status_code == 400
