"""Settings forms."""
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional, Email, Length

from quotedesk.forms.base import ApiForm


class CompanySettingsForm(ApiForm):
    company_name = StringField('Company Name *', validators=[DataRequired(), Length(1, 200)])
    company_phone = StringField('Phone', validators=[Optional(), Length(0, 50)])
    company_email = StringField('Email', validators=[Optional(), Email()])
    company_address = TextAreaField('Address', validators=[Optional()])
