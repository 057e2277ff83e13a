"""Authorization checks for quote operations.

Every check takes the caller explicitly so the rules can be exercised
without a request or a logged-in session.
"""
from quotedesk.errors import AuthorizationError


class AccessService:
    @staticmethod
    def is_privileged(caller):
        if caller is None or not getattr(caller, 'is_authenticated', False):
            return False
        return caller.is_admin()

    @staticmethod
    def require_privileged(caller, action):
        if not AccessService.is_privileged(caller):
            raise AuthorizationError(f'Only an admin can {action}.')

    @staticmethod
    def can_access_lead(caller, lead):
        return AccessService.is_privileged(caller) or lead.is_owned_by(caller)

    @staticmethod
    def require_lead_access(caller, lead):
        if not AccessService.can_access_lead(caller, lead):
            raise AuthorizationError('You do not have access to this lead.')

    @staticmethod
    def can_download(caller, quote):
        return bool(quote.is_approved) or AccessService.is_privileged(caller)
