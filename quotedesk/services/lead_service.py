"""Lead business logic: the parts quotes depend on."""
from flask import current_app
from sqlalchemy.exc import IntegrityError

from quotedesk import db
from quotedesk.errors import NotFoundError, ValidationError
from quotedesk.models import Lead, LeadShare, Quote, User
from quotedesk.services.access_service import AccessService
from quotedesk.services.lead_log_service import LeadLogService
from quotedesk.services.numbering_service import NumberingService
from quotedesk.services.validation import parse_share_percent


class LeadService:
    @staticmethod
    def get_lead(lead_id, caller):
        lead = db.session.get(Lead, lead_id) if lead_id else None
        if lead is None:
            raise NotFoundError('Lead not found.')
        AccessService.require_lead_access(caller, lead)
        return lead

    @staticmethod
    def create_lead(caller, company_name, contact_person=None, phone=None, email=None,
                    address=None, salesman_id=None):
        salesman = caller
        if salesman_id and salesman_id != caller.id:
            AccessService.require_privileged(caller, 'assign leads to other members')
            salesman = db.session.get(User, salesman_id)
            if salesman is None:
                raise ValidationError('Invalid salesman.', {'salesman_id': ['No such user.']})
        lead = Lead(
            unique_number=NumberingService.next_lead_number(),
            company_name=company_name,
            contact_person=contact_person,
            phone=phone,
            email=email,
            address=address,
            salesman_id=salesman.id,
            creator_id=caller.id,
        )
        db.session.add(lead)
        db.session.flush()
        LeadLogService.log(
            lead.id, 'LEAD_CREATED',
            f'{LeadLogService.actor_label(caller)} created lead #{lead.unique_number}', caller, commit=False,
        )
        db.session.commit()
        return lead

    @staticmethod
    def share_lead(lead_id, caller, shared_member_id, profit_percentage):
        lead = LeadService.get_lead(lead_id, caller)
        member = db.session.get(User, shared_member_id) if shared_member_id else None
        if member is None:
            raise ValidationError('Invalid member.', {'shared_member_id': ['No such user.']})
        if member.id == lead.salesman_id:
            raise ValidationError('A lead cannot be shared with its own salesman.',
                                  {'shared_member_id': ['Already the salesman of this lead.']})
        share = LeadShare(
            lead_id=lead.id,
            member_id=caller.id,
            shared_member_id=member.id,
            profit_percentage=parse_share_percent(profit_percentage),
        )
        db.session.add(share)
        try:
            db.session.flush()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError('Lead is already shared with this member.',
                                  {'shared_member_id': ['Already shared.']})
        LeadLogService.log(
            lead.id, 'LEAD_SHARED',
            f'Lead #{lead.unique_number} shared with {member.display_name} ({share.profit_percentage}%)',
            caller, commit=False,
        )
        db.session.commit()
        return share

    @staticmethod
    def set_main_quote(lead_id, caller, quote_number):
        """Point the lead at one of its own quotes by quote number.

        The pointer is the human-facing quote number rather than the id.
        Passing ``None`` clears it. The quote's status does not matter.
        """
        lead = db.session.get(Lead, lead_id) if lead_id else None
        if lead is None:
            raise NotFoundError('Lead not found.')
        AccessService.require_lead_access(caller, lead)

        if quote_number is None:
            lead.main_quote_number = None
            message = 'Main quote cleared'
        else:
            quote = Quote.query.filter_by(lead_id=lead.id, quote_number=quote_number).first()
            if quote is None:
                current_app.logger.warning('Lead %s has no quote %s', lead.unique_number, quote_number)
                raise NotFoundError(f'Quote {quote_number} does not belong to lead #{lead.unique_number}.')
            lead.main_quote_number = quote.quote_number
            message = f'Quote #{quote.quote_number} set as main quote'

        LeadLogService.log(lead.id, 'MAIN_QUOTE_SET', message, caller, commit=False)
        db.session.commit()
        return lead
