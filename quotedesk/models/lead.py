"""Lead, LeadShare and LeadLog models."""
import uuid
from datetime import datetime
from decimal import Decimal

from quotedesk import db


class Lead(db.Model):
    __tablename__ = 'leads'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    unique_number = db.Column(db.String(40), unique=True, nullable=False, index=True)
    company_name = db.Column(db.String(200), nullable=False, default='')
    contact_person = db.Column(db.String(160), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(180), nullable=True)
    address = db.Column(db.Text, nullable=True)
    # Points at Quote.quote_number, not Quote.id
    main_quote_number = db.Column(db.String(30), nullable=True)
    salesman_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    creator_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    quotes = db.relationship('Quote', backref='lead', lazy='dynamic', cascade='all, delete-orphan')
    shares = db.relationship('LeadShare', backref='lead', lazy='dynamic', cascade='all, delete-orphan')
    logs = db.relationship('LeadLog', backref='lead', lazy='dynamic', cascade='all, delete-orphan')

    @property
    def is_shared(self):
        return self.shares.count() > 0

    @property
    def share_percent(self):
        total = Decimal('0')
        for share in self.shares:
            total += Decimal(str(share.profit_percentage or 0))
        return total

    def is_owned_by(self, user):
        return user is not None and user.id in (self.salesman_id, self.creator_id)

    def to_dict(self):
        return {
            'id': self.id,
            'unique_number': self.unique_number,
            'company_name': self.company_name,
            'contact_person': self.contact_person,
            'phone': self.phone,
            'email': self.email,
            'address': self.address,
            'main_quote_number': self.main_quote_number,
            'salesman_id': self.salesman_id,
            'is_shared': self.is_shared,
            'share_percent': str(self.share_percent),
        }

    def __repr__(self):
        return f'<Lead {self.unique_number}>'


class LeadShare(db.Model):
    """A lead shared with a second salesperson for a cut of the quote."""
    __tablename__ = 'lead_shares'
    __table_args__ = (db.UniqueConstraint('lead_id', 'shared_member_id'),)

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lead_id = db.Column(db.String(36), db.ForeignKey('leads.id'), nullable=False)
    member_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    shared_member_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    profit_percentage = db.Column(db.Numeric(5, 2), default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<LeadShare {self.lead_id} -> {self.shared_member_id}>'


class LeadLog(db.Model):
    __tablename__ = 'lead_logs'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lead_id = db.Column(db.String(36), db.ForeignKey('leads.id'), nullable=False, index=True)
    action = db.Column(db.String(50), nullable=False)
    message = db.Column(db.Text, nullable=True)
    actor_role = db.Column(db.String(20), nullable=True)
    actor_id = db.Column(db.String(36), nullable=True)
    actor_name = db.Column(db.String(120), nullable=True)
    ip_address = db.Column(db.String(45), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'lead_id': self.lead_id,
            'action': self.action,
            'message': self.message,
            'actor_role': self.actor_role,
            'actor_name': self.actor_name,
            'ip_address': self.ip_address,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<LeadLog {self.action} at {self.created_at}>'
