"""Base form for JSON request bodies."""
from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict


def _form_value(value):
    if isinstance(value, bool):
        return 'y' if value else None
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ApiForm(FlaskForm):
    """FlaskForm that reads JSON like a posted form.

    Numbers become their text so Decimal parsing stays exact, ``false`` and
    ``null`` count as absent.
    """

    class Meta(FlaskForm.Meta):
        def wrap_formdata(self, form, formdata):
            formdata = super().wrap_formdata(form, formdata)
            if formdata is None or not request.is_json:
                return formdata
            pairs = []
            for key, value in formdata.items(multi=True):
                value = _form_value(value)
                if value is not None:
                    pairs.append((key, value))
            return ImmutableMultiDict(pairs)
