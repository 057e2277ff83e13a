"""Input checks shared by quote create, edit and clone."""
from decimal import Decimal, InvalidOperation

from quotedesk.errors import ValidationError
from quotedesk.models import Quote
from quotedesk.pricing import CENTS, DISCOUNT_MODES, LineItem, to_decimal
from config import Config

# Precision of the Numeric(p, 2) column each value is stored in
ITEM_DIGITS = {'quantity': 10, 'unit_cost': 12, 'margin_percent': 5, 'vat_percent': 5}
ITEM_LABELS = {'quantity': 'Quantity', 'unit_cost': 'Unit cost', 'margin_percent': 'Margin %', 'vat_percent': 'VAT %'}
DISCOUNT_DIGITS = 12
SHARE_DIGITS = 5


def storage_error(value, digits):
    """Reason ``value`` would not be stored exactly in a Numeric(digits, 2) column, else None."""
    if not value.is_finite():
        return 'must be a finite number'
    if abs(value) >= Decimal(10) ** (digits - 2):
        return 'is too large'
    if value != value.quantize(CENTS):
        return 'can have at most 2 decimal places'
    return None


def parse_line_items(items_data):
    """Turn raw item dicts into :class:`LineItem` rows numbered from 1.

    Rows are renumbered in the order given, so removing a row upstream never
    leaves a gap in ``sl_no``. Values must fit their columns exactly, so the
    stored quote prices and gates the same way as the submitted one.
    """
    if not items_data:
        raise ValidationError('Add at least one item.', {'items': ['At least one item is required.']})
    if not isinstance(items_data, (list, tuple)):
        raise ValidationError('Items must be a list.', {'items': ['Items must be a list.']})

    items = []
    errors = {}
    for index, data in enumerate(items_data):
        sl_no = index + 1
        if not isinstance(data, dict):
            errors[str(sl_no)] = ['Item must be an object.']
            continue
        if data.get('vat_percent') in (None, ''):
            data = dict(data, vat_percent=Config.DEFAULT_VAT_PERCENT)
        try:
            item = LineItem.from_dict(data, sl_no=sl_no)
        except (InvalidOperation, TypeError, ValueError):
            errors[str(sl_no)] = ['Quantity, cost, margin and VAT must be numbers.']
            continue
        item_errors = []
        for field, digits in ITEM_DIGITS.items():
            problem = storage_error(getattr(item, field), digits)
            if problem:
                item_errors.append(f'{ITEM_LABELS[field]} {problem}.')
        if item_errors:
            errors[str(sl_no)] = item_errors
            continue
        if not item.product:
            item_errors.append('Product is required.')
        if item.quantity <= 0:
            item_errors.append('Quantity must be greater than 0.')
        if item.unit_cost < 0:
            item_errors.append('Unit cost cannot be negative.')
        if item.vat_percent < 0:
            item_errors.append('VAT % cannot be negative.')
        if item_errors:
            errors[str(sl_no)] = item_errors
        items.append(item)

    if errors:
        raise ValidationError('Each item must have a product name and quantity > 0.', {'items': errors})
    return items


def parse_discount(discount_mode, discount_value):
    discount_mode = (discount_mode or 'PERCENT').upper()
    if discount_mode not in DISCOUNT_MODES:
        raise ValidationError('Invalid discount mode.', {'discount_mode': [f'Must be one of {", ".join(DISCOUNT_MODES)}.']})
    if discount_value is None or discount_value == '':
        raise ValidationError('Discount value is required.', {'discount_value': ['This field is required.']})
    try:
        value = to_decimal(discount_value)
    except (InvalidOperation, ValueError):
        raise ValidationError('Discount value must be a number.', {'discount_value': ['Not a valid number.']})
    problem = storage_error(value, DISCOUNT_DIGITS)
    if problem:
        raise ValidationError(f'Discount {problem}.', {'discount_value': [f'Discount {problem}.']})
    if value < 0:
        raise ValidationError('Discount cannot be negative.', {'discount_value': ['Must be at least 0.']})
    return discount_mode, value


def parse_share_percent(share_percent):
    try:
        value = to_decimal(share_percent)
    except (InvalidOperation, ValueError):
        raise ValidationError('Share % must be a number.', {'share_percent': ['Not a valid number.']})
    problem = storage_error(value, SHARE_DIGITS)
    if problem:
        raise ValidationError(f'Share % {problem}.', {'share_percent': [f'Share % {problem}.']})
    if value < 0 or value > 100:
        raise ValidationError('Share % must be between 0 and 100.', {'share_percent': ['Must be between 0 and 100.']})
    return value


def require_note(note):
    note = (note or '').strip()
    if not note:
        raise ValidationError('A reason is required to reject a quote.', {'note': ['This field is required.']})
    return note


def parse_status(status):
    if status not in Quote.STATUSES:
        raise ValidationError('Unknown status.', {'status': [f'Must be one of {", ".join(Quote.STATUSES)}.']})
    return status


def ensure_sendable(quote):
    """A quote needs one real item before it can leave Draft."""
    for item in quote.items:
        if (item.product or '').strip() and to_decimal(item.quantity) > 0:
            return
    raise ValidationError('Quote needs at least one item with a product and quantity before it can leave Draft.')
