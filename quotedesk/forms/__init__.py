"""Flask-WTF forms."""
from quotedesk.forms.auth import LoginForm
from quotedesk.forms.lead import LeadForm, LeadShareForm
from quotedesk.forms.quote import QuoteForm, RejectForm, StatusForm, MainQuoteForm
from quotedesk.forms.settings import CompanySettingsForm

__all__ = [
    'LoginForm',
    'LeadForm',
    'LeadShareForm',
    'QuoteForm',
    'RejectForm',
    'StatusForm',
    'MainQuoteForm',
    'CompanySettingsForm',
]
