"""Per-lead activity log."""
from flask import current_app, has_request_context, request

from quotedesk import db
from quotedesk.models import LeadLog


class LeadLogService:
    @staticmethod
    def log(lead_id, action, message=None, actor=None, commit=True):
        entry = LeadLog(
            lead_id=lead_id,
            action=action,
            message=message,
            actor_role=getattr(actor, 'role', None),
            actor_id=getattr(actor, 'id', None),
            actor_name=actor.display_name if actor is not None else 'System',
            ip_address=request.remote_addr if has_request_context() else None,
        )
        db.session.add(entry)
        if commit:
            db.session.commit()
        current_app.logger.info('lead %s: %s %s', lead_id, action, message or '')
        return entry

    @staticmethod
    def actor_label(actor):
        return 'Admin' if actor is not None and actor.is_admin() else 'Member'
