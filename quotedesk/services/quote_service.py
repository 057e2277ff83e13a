"""Quote lifecycle: creation, approval, status changes and cloning."""
from datetime import date, datetime

from flask import current_app

from quotedesk import db
from quotedesk.errors import InvalidTransitionError, NotFoundError, ValidationError
from quotedesk.models import Lead, Quote, QuoteItem, User
from quotedesk.pricing import PricingService
from quotedesk.services.access_service import AccessService
from quotedesk.services.lead_log_service import LeadLogService
from quotedesk.services.notification_service import NotificationService
from quotedesk.services.numbering_service import NumberingService
from quotedesk.services.validation import (
    ensure_sendable, parse_discount, parse_line_items, parse_share_percent, parse_status, require_note,
)
from config import Config

HEADER_FIELDS = (
    'customer_name', 'contact_person', 'phone', 'email', 'address', 'description',
    'payment_terms', 'terms_and_conditions', 'currency', 'quote_date', 'valid_until',
)

# Statuses a non-admin may move a quote into through update_status
MEMBER_STATUSES = (Quote.DRAFT, Quote.SENT)
ADMIN_STATUSES = (Quote.DRAFT, Quote.SENT, Quote.ACCEPTED, Quote.REJECTED, Quote.EXPIRED)


class QuoteService:
    @staticmethod
    def initial_status(items):
        """Status and approval flag for a quote holding ``items``.

        Any item under the margin floor parks the quote in PendingApproval.
        """
        if PricingService.requires_approval(items, Config.MARGIN_FLOOR):
            return Quote.PENDING_APPROVAL, False
        return Quote.DRAFT, True

    @staticmethod
    def _load_quote(quote_id, for_update=False):
        query = Quote.query.filter_by(id=quote_id)
        if for_update:
            query = query.with_for_update()
        quote = query.first()
        if quote is None:
            raise NotFoundError('Quote not found.')
        return quote

    @staticmethod
    def _load_lead(lead_id):
        lead = db.session.get(Lead, lead_id) if lead_id else None
        if lead is None:
            raise NotFoundError('Lead not found.')
        return lead

    @staticmethod
    def _transition(quote, expected_status, **values):
        """Write ``values`` only if the stored status is still ``expected_status``."""
        quote_number = quote.quote_number
        values['updated_at'] = datetime.utcnow()
        updated = (
            Quote.query
            .filter(Quote.id == quote.id, Quote.status == expected_status)
            .update(values, synchronize_session='evaluate')
        )
        if updated != 1:
            db.session.rollback()
            current_app.logger.warning('Quote %s left %s before it could be updated', quote_number, expected_status)
            raise InvalidTransitionError(f'Quote {quote_number} was changed by someone else. Reload and try again.')

    @staticmethod
    def _clean_header(header):
        unknown = set(header) - set(HEADER_FIELDS)
        if unknown:
            raise ValidationError('Unknown quote fields.', {field: ['Unknown field.'] for field in sorted(unknown)})
        return header

    @staticmethod
    def _resolve_salesman(caller, salesman_id, fallback=None):
        if salesman_id and AccessService.is_privileged(caller):
            salesman = db.session.get(User, salesman_id)
            if salesman is None:
                raise ValidationError('Invalid salesman.', {'salesman_id': ['No such user.']})
            return salesman
        if fallback is not None and AccessService.is_privileged(caller):
            return fallback
        return caller

    @staticmethod
    def _add_items(quote, items):
        for item in items:
            db.session.add(QuoteItem(
                quote_id=quote.id,
                sl_no=item.sl_no,
                product=item.product,
                description=item.description or None,
                quantity=item.quantity,
                unit_cost=item.unit_cost,
                margin_percent=item.margin_percent,
                vat_percent=item.vat_percent,
            ))

    @staticmethod
    def create_quote(lead_id, caller, items_data, discount_mode='PERCENT', discount_value=0,
                     share_percent=None, salesman_id=None, log_action='QUOTE_CREATED', **header):
        lead = QuoteService._load_lead(lead_id)
        AccessService.require_lead_access(caller, lead)
        header = QuoteService._clean_header(header)

        items = parse_line_items(items_data)
        discount_mode, discount_value = parse_discount(discount_mode, discount_value)
        if share_percent is None:
            share_percent = lead.share_percent if lead.is_shared else 0
        share_percent = parse_share_percent(share_percent)
        customer_name = (header.pop('customer_name', None) or lead.company_name or '').strip()
        if not customer_name:
            raise ValidationError('Customer name is required.', {'customer_name': ['This field is required.']})
        salesman = QuoteService._resolve_salesman(caller, salesman_id, fallback=lead.salesman)

        status, is_approved = QuoteService.initial_status(items)
        quote_number = NumberingService.next_quote_number()
        quote = Quote(
            quote_number=quote_number,
            lead=lead,
            quote_date=header.pop('quote_date', None) or date.today(),
            valid_until=header.pop('valid_until', None),
            salesman_id=salesman.id,
            prepared_by=salesman.display_name,
            customer_name=customer_name,
            contact_person=header.pop('contact_person', None) or lead.contact_person,
            phone=header.pop('phone', None) or lead.phone,
            email=header.pop('email', None) or lead.email,
            address=header.pop('address', None) or lead.address,
            currency=header.pop('currency', None) or Config.DEFAULT_CURRENCY,
            discount_mode=discount_mode,
            discount_value=discount_value,
            share_percent=share_percent,
            status=status,
            is_approved=is_approved,
            **header,
        )
        db.session.add(quote)
        db.session.flush()
        QuoteService._add_items(quote, items)

        label = LeadLogService.actor_label(caller)
        verb = 'cloned' if log_action == 'QUOTE_CLONED' else 'created'
        LeadLogService.log(lead.id, log_action, f'{label} {verb} quote #{quote_number}', caller, commit=False)
        db.session.commit()
        current_app.logger.info('Quote %s created for lead %s as %s', quote_number, lead.unique_number, status)

        if status == Quote.PENDING_APPROVAL:
            NotificationService.notify_admins_of_pending_quote(quote)
        return quote

    @staticmethod
    def clone_quote(quote_id, caller, items_data=None, lead_id=None, **overrides):
        """Create a new quote from an existing one.

        Items and header fields default to the source's; the approval
        requirement is always worked out again from the clone's own items.
        """
        source = QuoteService._load_quote(quote_id)
        AccessService.require_lead_access(caller, source.lead)
        if items_data is None:
            items_data = [item.as_line_item().as_dict() for item in source.items]
        params = {
            'discount_mode': source.discount_mode,
            'discount_value': source.discount_value,
            'share_percent': source.share_percent,
            'salesman_id': source.salesman_id,
        }
        params.update({field: getattr(source, field) for field in HEADER_FIELDS})
        params['quote_date'] = None
        params.update(overrides)
        return QuoteService.create_quote(
            lead_id or source.lead_id, caller, items_data, log_action='QUOTE_CLONED', **params
        )

    @staticmethod
    def update_quote(quote_id, caller, items_data, discount_mode='PERCENT', discount_value=0,
                     share_percent=None, salesman_id=None, **header):
        """Replace a quote's items and header while it is Draft or PendingApproval."""
        quote = QuoteService._load_quote(quote_id, for_update=True)
        if quote.status not in Quote.EDITABLE_STATUSES:
            raise InvalidTransitionError(f'A {quote.status} quote can no longer be edited.')
        AccessService.require_lead_access(caller, quote.lead)
        header = QuoteService._clean_header(header)

        items = parse_line_items(items_data)
        discount_mode, discount_value = parse_discount(discount_mode, discount_value)
        if share_percent is None:
            share_percent = quote.share_percent
        share_percent = parse_share_percent(share_percent)
        if 'customer_name' in header and not (header['customer_name'] or '').strip():
            raise ValidationError('Customer name is required.', {'customer_name': ['This field is required.']})

        previous_status = quote.status
        status, is_approved = QuoteService.initial_status(items)
        values = {k: v for k, v in header.items() if v is not None or k not in ('currency', 'quote_date')}
        values.update(
            discount_mode=discount_mode,
            discount_value=discount_value,
            share_percent=share_percent,
            status=status,
            is_approved=is_approved,
            reject_note=None,
            approved_by=None if status == Quote.PENDING_APPROVAL else quote.approved_by,
        )
        if salesman_id and salesman_id != quote.salesman_id:
            salesman = QuoteService._resolve_salesman(caller, salesman_id)
            values.update(salesman_id=salesman.id, prepared_by=salesman.display_name)
        QuoteService._transition(quote, previous_status, **values)
        for qi in list(quote.items):
            db.session.delete(qi)
        db.session.flush()
        QuoteService._add_items(quote, items)

        LeadLogService.log(
            quote.lead_id, 'QUOTE_UPDATED',
            f'{LeadLogService.actor_label(caller)} updated quote #{quote.quote_number}', caller, commit=False,
        )
        db.session.commit()
        current_app.logger.info('Quote %s updated (%s -> %s)', quote.quote_number, previous_status, status)

        if status == Quote.PENDING_APPROVAL and previous_status != Quote.PENDING_APPROVAL:
            NotificationService.notify_admins_of_pending_quote(quote)
        return quote

    @staticmethod
    def approve(quote_id, caller):
        quote = QuoteService._load_quote(quote_id, for_update=True)
        if quote.status != Quote.PENDING_APPROVAL:
            raise InvalidTransitionError(f'Only a quote pending approval can be approved (status is {quote.status}).')
        AccessService.require_privileged(caller, 'approve quotes')

        QuoteService._transition(
            quote, Quote.PENDING_APPROVAL,
            status=Quote.DRAFT, is_approved=True, reject_note=None, approved_by=caller.display_name,
        )
        LeadLogService.log(quote.lead_id, 'QUOTE_APPROVED', f'Admin approved quote #{quote.quote_number}', caller, commit=False)
        db.session.commit()
        current_app.logger.info('Quote %s approved by %s', quote.quote_number, caller.username)

        NotificationService.notify_salesman_of_decision(quote, approved=True)
        return quote

    @staticmethod
    def reject(quote_id, caller, note):
        quote = QuoteService._load_quote(quote_id, for_update=True)
        if quote.status != Quote.PENDING_APPROVAL:
            raise InvalidTransitionError(f'Only a quote pending approval can be rejected (status is {quote.status}).')
        AccessService.require_privileged(caller, 'reject quotes')
        note = require_note(note)

        QuoteService._transition(
            quote, Quote.PENDING_APPROVAL,
            status=Quote.REJECTED, is_approved=False, reject_note=note,
        )
        LeadLogService.log(quote.lead_id, 'QUOTE_REJECTED', f'Admin rejected quote #{quote.quote_number}: {note}', caller, commit=False)
        db.session.commit()
        current_app.logger.info('Quote %s rejected by %s', quote.quote_number, caller.username)

        NotificationService.notify_salesman_of_decision(quote, approved=False)
        return quote

    @staticmethod
    def update_status(quote_id, caller, new_status):
        quote = QuoteService._load_quote(quote_id, for_update=True)
        new_status = parse_status(new_status)
        current = quote.status
        if quote.is_final:
            raise InvalidTransitionError(f'Quote {quote.quote_number} is {current} and can no longer change status.')
        if current not in (Quote.DRAFT, Quote.SENT):
            raise InvalidTransitionError(f'A {current} quote must be approved or rejected first.')
        if new_status not in ADMIN_STATUSES:
            raise InvalidTransitionError(f'Cannot move a quote to {new_status}.')
        if new_status not in MEMBER_STATUSES:
            AccessService.require_privileged(caller, f'mark a quote as {new_status}')
        AccessService.require_lead_access(caller, quote.lead)
        if new_status == current:
            return quote
        if current == Quote.DRAFT:
            ensure_sendable(quote)

        QuoteService._transition(quote, current, status=new_status)
        LeadLogService.log(
            quote.lead_id, 'QUOTE_STATUS_CHANGED',
            f'{LeadLogService.actor_label(caller)} changed quote #{quote.quote_number} from {current} to {new_status}',
            caller, commit=False,
        )
        db.session.commit()
        current_app.logger.info('Quote %s: %s -> %s', quote.quote_number, current, new_status)
        return quote

    @staticmethod
    def get_quote(quote_id, caller):
        quote = QuoteService._load_quote(quote_id)
        AccessService.require_lead_access(caller, quote.lead)
        return quote

    @staticmethod
    def list_quotes(caller, lead_id=None, status=None, page=1, per_page=None):
        query = Quote.query.join(Lead, Quote.lead_id == Lead.id)
        if not AccessService.is_privileged(caller):
            query = query.filter(db.or_(Lead.salesman_id == caller.id, Lead.creator_id == caller.id))
        if lead_id:
            query = query.filter(Quote.lead_id == lead_id)
        if status:
            query = query.filter(Quote.status == parse_status(status))
        return query.order_by(Quote.created_at.desc()).paginate(
            page=page, per_page=per_page or Config.ITEMS_PER_PAGE, error_out=False,
        )
