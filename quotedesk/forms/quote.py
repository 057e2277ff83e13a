"""Quote forms."""
from wtforms import StringField, SelectField, TextAreaField, DateField
from wtforms.validators import DataRequired, Optional, Email, Length

from quotedesk.forms.base import ApiForm
from quotedesk.pricing import DISCOUNT_MODES
from quotedesk.services.quote_service import HEADER_FIELDS


class QuoteForm(ApiForm):
    """Header and discount fields of a quote; items travel as a JSON list."""
    customer_name = StringField('Customer Name', validators=[Optional(), Length(0, 200)])
    contact_person = StringField('Contact Person', validators=[Optional(), Length(0, 160)])
    phone = StringField('Phone', validators=[Optional(), Length(0, 50)])
    email = StringField('Email', validators=[Optional(), Email()])
    address = TextAreaField('Address', validators=[Optional()])
    description = TextAreaField('Description', validators=[Optional()])
    payment_terms = TextAreaField('Payment Terms', validators=[Optional()])
    terms_and_conditions = TextAreaField('Terms & Conditions', validators=[Optional()])
    currency = StringField('Currency', validators=[Optional(), Length(0, 10)])
    quote_date = DateField('Quote Date', validators=[Optional()], format='%Y-%m-%d')
    valid_until = DateField('Valid Until', validators=[Optional()], format='%Y-%m-%d')
    salesman_id = StringField('Salesman', validators=[Optional()])
    discount_mode = SelectField('Discount Mode', choices=[(m, m.title()) for m in DISCOUNT_MODES], default='PERCENT')
    # Kept as text; the service parses it into a Decimal
    discount_value = StringField('Discount')
    share_percent = StringField('Share %', validators=[Optional()])

    def quote_fields(self, skip_empty=False):
        fields = {name: self[name].data for name in HEADER_FIELDS}
        fields['discount_mode'] = self.discount_mode.data
        fields['discount_value'] = self.discount_value.data
        if self.share_percent.data not in (None, ''):
            fields['share_percent'] = self.share_percent.data
        if self.salesman_id.data:
            fields['salesman_id'] = self.salesman_id.data
        if skip_empty:
            fields = {k: v for k, v in fields.items() if v not in (None, '')}
            if not self.discount_mode.raw_data:
                fields.pop('discount_mode', None)
        return fields


class RejectForm(ApiForm):
    note = TextAreaField('Reason', validators=[Optional()])


class StatusForm(ApiForm):
    status = StringField('Status *', validators=[DataRequired()])


class MainQuoteForm(ApiForm):
    quote_number = StringField('Quote Number', validators=[Optional(), Length(0, 30)])
