"""Authentication forms."""
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length

from quotedesk.forms.base import ApiForm


class LoginForm(ApiForm):
    username = StringField('Username *', validators=[DataRequired(), Length(1, 80)])
    password = PasswordField('Password *', validators=[DataRequired()])
    remember_me = BooleanField('Remember Me', default=False)
