"""Settings routes (company details on documents, activity log)."""
from flask import jsonify, request
from flask_login import login_required

from quotedesk.blueprints.settings import settings_bp
from quotedesk.decorators import admin_required
from quotedesk.errors import ValidationError
from quotedesk.forms import CompanySettingsForm
from quotedesk.models import LeadLog, Setting


@settings_bp.route('/company')
@login_required
def company():
    return jsonify({'success': True, 'company': Setting.company_profile()})


@settings_bp.route('/company', methods=['PUT'])
@login_required
@admin_required
def save_company():
    form = CompanySettingsForm()
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    for key in Setting.COMPANY_KEYS:
        Setting.set(key, form[key].data or '', 'company')
    return jsonify({'success': True, 'company': Setting.company_profile()})


@settings_bp.route('/activity-log')
@login_required
@admin_required
def activity_log():
    page = request.args.get('page', 1, type=int)
    query = LeadLog.query
    if request.args.get('lead_id'):
        query = query.filter_by(lead_id=request.args['lead_id'])
    logs = query.order_by(LeadLog.created_at.desc()).paginate(page=page, per_page=50, error_out=False)
    return jsonify({
        'success': True,
        'logs': [log.to_dict() for log in logs.items],
        'page': logs.page,
        'pages': logs.pages,
        'total': logs.total,
    })
