"""Quote routes."""
from io import BytesIO

from flask import jsonify, request, send_file
from flask_login import login_required, current_user

from quotedesk.blueprints.quotes import quotes_bp
from quotedesk.errors import ValidationError
from quotedesk.forms import QuoteForm, RejectForm, StatusForm
from quotedesk.pricing import PricingService
from quotedesk.services import DocumentService, QuoteService
from quotedesk.services.validation import parse_discount, parse_line_items, parse_share_percent


def _items_payload():
    payload = request.get_json(silent=True) or {}
    return payload.get('items')


def _validated(form):
    if not form.validate_on_submit():
        raise ValidationError('Validation failed', form.errors)
    return form


@quotes_bp.route('/')
@login_required
def index():
    page = request.args.get('page', 1, type=int)
    quotes = QuoteService.list_quotes(
        current_user,
        lead_id=request.args.get('lead_id') or None,
        status=request.args.get('status') or None,
        page=page,
    )
    return jsonify({
        'success': True,
        'quotes': [q.to_dict(with_items=False) for q in quotes.items],
        'page': quotes.page,
        'pages': quotes.pages,
        'total': quotes.total,
    })


@quotes_bp.route('/calculate', methods=['POST'])
@login_required
def calculate():
    """Totals for unsaved items, used while a quote is being edited."""
    payload = request.get_json(silent=True) or {}
    items = parse_line_items(payload.get('items'))
    discount_mode, discount_value = parse_discount(payload.get('discount_mode'), payload.get('discount_value', 0))
    totals = PricingService.compute_totals(
        items,
        discount_mode=discount_mode,
        discount_value=discount_value,
        share_percent=parse_share_percent(payload.get('share_percent', 0)),
        lead_is_shared=bool(payload.get('lead_is_shared')),
    )
    return jsonify({
        'success': True,
        'items': [item.as_dict() for item in items],
        'totals': totals.as_dict(),
        'requires_approval': not QuoteService.initial_status(items)[1],
    })


@quotes_bp.route('/leads/<lead_id>', methods=['POST'])
@login_required
def add(lead_id):
    form = _validated(QuoteForm())
    quote = QuoteService.create_quote(lead_id, current_user, _items_payload(), **form.quote_fields())
    return jsonify({'success': True, 'quote': quote.to_dict()}), 201


@quotes_bp.route('/<quote_id>')
@login_required
def detail(quote_id):
    quote = QuoteService.get_quote(quote_id, current_user)
    return jsonify({'success': True, 'quote': quote.to_dict()})


@quotes_bp.route('/<quote_id>', methods=['PUT'])
@login_required
def edit(quote_id):
    form = _validated(QuoteForm())
    quote = QuoteService.update_quote(quote_id, current_user, _items_payload(), **form.quote_fields())
    return jsonify({'success': True, 'quote': quote.to_dict()})


@quotes_bp.route('/<quote_id>/clone', methods=['POST'])
@login_required
def clone(quote_id):
    form = _validated(QuoteForm())
    payload = request.get_json(silent=True) or {}
    quote = QuoteService.clone_quote(
        quote_id, current_user,
        items_data=payload.get('items'),
        lead_id=payload.get('lead_id'),
        **form.quote_fields(skip_empty=True),
    )
    return jsonify({'success': True, 'quote': quote.to_dict()}), 201


@quotes_bp.route('/<quote_id>/approve', methods=['POST'])
@login_required
def approve(quote_id):
    quote = QuoteService.approve(quote_id, current_user)
    return jsonify({'success': True, 'quote': quote.to_dict(with_items=False)})


@quotes_bp.route('/<quote_id>/reject', methods=['POST'])
@login_required
def reject(quote_id):
    form = _validated(RejectForm())
    quote = QuoteService.reject(quote_id, current_user, form.note.data)
    return jsonify({'success': True, 'quote': quote.to_dict(with_items=False)})


@quotes_bp.route('/<quote_id>/status', methods=['POST'])
@login_required
def update_status(quote_id):
    form = _validated(StatusForm())
    quote = QuoteService.update_status(quote_id, current_user, form.status.data)
    return jsonify({'success': True, 'quote': quote.to_dict(with_items=False)})


@quotes_bp.route('/<quote_id>/preview')
@login_required
def preview(quote_id):
    quote = QuoteService.get_quote(quote_id, current_user)
    html = DocumentService.render_preview(quote, current_user)
    return html, 200, {'Content-Type': 'text/html; charset=utf-8'}


@quotes_bp.route('/<quote_id>/pdf')
@login_required
def pdf(quote_id):
    quote = QuoteService.get_quote(quote_id, current_user)
    pdf_bytes = DocumentService.render_pdf(quote, current_user)
    return send_file(
        BytesIO(pdf_bytes),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=DocumentService.filename(quote),
    )
