"""Email notifications for quote approvals."""
import smtplib

from flask import current_app
from flask_mail import Message

from quotedesk import mail
from quotedesk.models import User


class NotificationService:
    @staticmethod
    def _send(recipients, subject, body):
        recipients = [r for r in recipients if r]
        if not recipients:
            return False
        msg = Message(subject=subject, recipients=recipients, body=body)
        try:
            mail.send(msg)
        except (smtplib.SMTPException, OSError) as e:
            current_app.logger.warning('Could not send "%s" to %s: %s', subject, recipients, e)
            return False
        return True

    @staticmethod
    def notify_admins_of_pending_quote(quote):
        admins = User.query.filter_by(role='admin', is_active=True).all()
        body = (
            f"Quote {quote.quote_number} for {quote.customer_name} needs approval.\n"
            f"Grand total: {quote.totals().as_dict()['grand_total']} {quote.currency}\n"
            f"Salesperson: {quote.prepared_by or '-'}\n\n"
            "One or more items are priced below the minimum margin. "
            "Please review and approve or reject it."
        )
        return NotificationService._send(
            [a.email for a in admins],
            f'Approval required: quote {quote.quote_number}',
            body,
        )

    @staticmethod
    def notify_salesman_of_decision(quote, approved):
        salesman = quote.salesman
        if salesman is None:
            return False
        decision = 'Approved' if approved else 'Rejected'
        body = f"Hi {salesman.display_name},\n\nYour quote {quote.quote_number} has been {decision} by an administrator.\n"
        if not approved and quote.reject_note:
            body += f"\nReason for rejection: {quote.reject_note}\n"
        return NotificationService._send(
            [salesman.email],
            f'Update on quote {quote.quote_number}: it has been {decision}',
            body,
        )
