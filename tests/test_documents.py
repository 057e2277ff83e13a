"""Preview and PDF download gating."""
import pytest

from quotedesk.errors import AuthorizationError
from quotedesk.models import LeadLog, Setting
from quotedesk.services import DocumentService, QuoteService


def test_preview_of_approved_quote(draft_quote, member):
    Setting.set('company_name', 'Quote Desk Ltd', category='company')
    html = DocumentService.render_preview(draft_quote, member)
    assert draft_quote.quote_number in html
    assert 'Quote Desk Ltd' in html
    assert '231.00' in html


def test_pdf_of_approved_quote(draft_quote, member):
    pdf = DocumentService.render_pdf(draft_quote, member)
    assert pdf.startswith(b'%PDF')
    assert LeadLog.query.filter_by(action='QUOTE_DOWNLOADED').count() == 1


def test_member_blocked_from_pending_quote(pending_quote, member):
    with pytest.raises(AuthorizationError):
        DocumentService.render_preview(pending_quote, member)
    with pytest.raises(AuthorizationError):
        DocumentService.render_pdf(pending_quote, member)
    assert LeadLog.query.filter_by(action='QUOTE_DOWNLOADED').count() == 0


def test_admin_can_download_pending_quote(pending_quote, admin):
    assert DocumentService.render_pdf(pending_quote, admin).startswith(b'%PDF')


def test_rejected_quote_stays_blocked(pending_quote, member, admin):
    QuoteService.reject(pending_quote.id, admin, 'no')
    with pytest.raises(AuthorizationError):
        DocumentService.check_download(pending_quote, member)


def test_approval_unblocks_download(pending_quote, member, admin):
    QuoteService.approve(pending_quote.id, admin)
    DocumentService.check_download(pending_quote, member)


def test_download_needs_lead_access(draft_quote, other_member):
    with pytest.raises(AuthorizationError):
        DocumentService.check_download(draft_quote, other_member)


def test_filename(draft_quote):
    assert DocumentService.filename(draft_quote) == f'Quotation_{draft_quote.quote_number}.pdf'
