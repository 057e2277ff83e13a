"""Lead forms."""
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional, Email, Length

from quotedesk.forms.base import ApiForm


class LeadForm(ApiForm):
    company_name = StringField('Company Name *', validators=[DataRequired(), Length(1, 200)])
    contact_person = StringField('Contact Person', validators=[Optional(), Length(0, 160)])
    phone = StringField('Phone', validators=[Optional(), Length(0, 50)])
    email = StringField('Email', validators=[Optional(), Email()])
    address = TextAreaField('Address', validators=[Optional()])
    salesman_id = StringField('Salesman', validators=[Optional()])


class LeadShareForm(ApiForm):
    shared_member_id = StringField('Member *', validators=[DataRequired()])
    profit_percentage = StringField('Profit % *', validators=[DataRequired()])
