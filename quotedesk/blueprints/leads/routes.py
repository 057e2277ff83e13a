"""Lead routes."""
from flask import jsonify, request
from flask_login import login_required, current_user

from quotedesk.blueprints.leads import leads_bp
from quotedesk.errors import ValidationError
from quotedesk.forms import LeadForm, LeadShareForm, MainQuoteForm
from quotedesk.services import LeadService


@leads_bp.route('/', methods=['POST'])
@login_required
def add():
    form = LeadForm()
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    lead = LeadService.create_lead(
        current_user,
        company_name=form.company_name.data,
        contact_person=form.contact_person.data or None,
        phone=form.phone.data or None,
        email=form.email.data or None,
        address=form.address.data or None,
        salesman_id=form.salesman_id.data or None,
    )
    return jsonify({'success': True, 'lead': lead.to_dict()}), 201


@leads_bp.route('/<lead_id>')
@login_required
def detail(lead_id):
    lead = LeadService.get_lead(lead_id, current_user)
    data = lead.to_dict()
    data['quotes'] = [q.to_dict(with_items=False) for q in lead.quotes]
    return jsonify({'success': True, 'lead': data})


@leads_bp.route('/<lead_id>/shares', methods=['POST'])
@login_required
def share(lead_id):
    form = LeadShareForm()
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    share = LeadService.share_lead(
        lead_id, current_user, form.shared_member_id.data, form.profit_percentage.data,
    )
    return jsonify({'success': True, 'share_id': share.id}), 201


@leads_bp.route('/<lead_id>/main-quote', methods=['POST'])
@login_required
def main_quote(lead_id):
    form = MainQuoteForm()
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    payload = request.get_json(silent=True) or {}
    if 'quote_number' not in payload:
        raise ValidationError('Quote number is required.', {'quote_number': ['Send null to clear.']})
    # An explicit null clears the pointer
    lead = LeadService.set_main_quote(lead_id, current_user, form.quote_number.data or None)
    return jsonify({'success': True, 'main_quote_number': lead.main_quote_number})
