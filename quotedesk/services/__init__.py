"""Business logic services."""
from quotedesk.services.access_service import AccessService
from quotedesk.services.document_service import DocumentService
from quotedesk.services.lead_log_service import LeadLogService
from quotedesk.services.lead_service import LeadService
from quotedesk.services.notification_service import NotificationService
from quotedesk.services.numbering_service import NumberingService
from quotedesk.services.quote_service import QuoteService

__all__ = [
    'AccessService',
    'DocumentService',
    'LeadLogService',
    'LeadService',
    'NotificationService',
    'NumberingService',
    'QuoteService',
]
