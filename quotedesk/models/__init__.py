"""Database models."""
from quotedesk.models.user import User
from quotedesk.models.lead import Lead, LeadShare, LeadLog
from quotedesk.models.quote import Quote, QuoteItem
from quotedesk.models.settings import Setting

__all__ = [
    'User',
    'Lead',
    'LeadShare',
    'LeadLog',
    'Quote',
    'QuoteItem',
    'Setting',
]
