"""Quote and QuoteItem models."""
import uuid
from datetime import datetime, date

from quotedesk import db
from quotedesk.pricing import LineItem, PricingService, quantize_money, to_decimal


class Quote(db.Model):
    __tablename__ = 'quotes'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quote_number = db.Column(db.String(30), unique=True, nullable=False, index=True)
    lead_id = db.Column(db.String(36), db.ForeignKey('leads.id'), nullable=False, index=True)
    quote_date = db.Column(db.Date, nullable=False, default=date.today)
    valid_until = db.Column(db.Date, nullable=True)
    salesman_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)
    prepared_by = db.Column(db.String(120), nullable=True)
    approved_by = db.Column(db.String(120), nullable=True)
    customer_name = db.Column(db.String(200), nullable=False)
    contact_person = db.Column(db.String(160), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    address = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)
    payment_terms = db.Column(db.Text, nullable=True)
    terms_and_conditions = db.Column(db.Text, nullable=True)
    currency = db.Column(db.String(10), nullable=False, default='USD')
    discount_mode = db.Column(db.String(10), nullable=False, default='PERCENT')
    discount_value = db.Column(db.Numeric(12, 2), default=0, nullable=False)
    share_percent = db.Column(db.Numeric(5, 2), default=0, nullable=False)
    status = db.Column(db.String(20), default='Draft', nullable=False)
    is_approved = db.Column(db.Boolean, default=True, nullable=False)
    reject_note = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship(
        'QuoteItem', backref='quote', lazy='dynamic',
        cascade='all, delete-orphan', order_by='QuoteItem.sl_no',
    )

    DRAFT = 'Draft'
    PENDING_APPROVAL = 'PendingApproval'
    SENT = 'Sent'
    ACCEPTED = 'Accepted'
    REJECTED = 'Rejected'
    EXPIRED = 'Expired'

    STATUSES = [DRAFT, PENDING_APPROVAL, SENT, ACCEPTED, REJECTED, EXPIRED]
    FINAL_STATUSES = [ACCEPTED, REJECTED, EXPIRED]
    EDITABLE_STATUSES = [DRAFT, PENDING_APPROVAL]

    @property
    def is_final(self):
        return self.status in self.FINAL_STATUSES

    def line_items(self):
        return [qi.as_line_item() for qi in self.items]

    def totals(self):
        lead = self.lead
        return PricingService.compute_totals(
            self.line_items(),
            discount_mode=self.discount_mode,
            discount_value=self.discount_value,
            share_percent=self.share_percent,
            lead_is_shared=lead.is_shared if lead is not None else False,
        )

    def to_dict(self, with_items=True):
        data = {
            'id': self.id,
            'quote_number': self.quote_number,
            'lead_id': self.lead_id,
            'quote_date': self.quote_date.isoformat() if self.quote_date else None,
            'valid_until': self.valid_until.isoformat() if self.valid_until else None,
            'salesman_id': self.salesman_id,
            'prepared_by': self.prepared_by,
            'approved_by': self.approved_by,
            'customer_name': self.customer_name,
            'contact_person': self.contact_person,
            'phone': self.phone,
            'email': self.email,
            'address': self.address,
            'description': self.description,
            'payment_terms': self.payment_terms,
            'terms_and_conditions': self.terms_and_conditions,
            'currency': self.currency,
            'discount_mode': self.discount_mode,
            'discount_value': str(quantize_money(self.discount_value)),
            'share_percent': str(quantize_money(self.share_percent)),
            'status': self.status,
            'is_approved': self.is_approved,
            'reject_note': self.reject_note,
            'totals': self.totals().as_dict(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if with_items:
            data['items'] = [item.as_dict() for item in self.line_items()]
        return data

    def __repr__(self):
        return f'<Quote {self.quote_number}>'


class QuoteItem(db.Model):
    __tablename__ = 'quote_items'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quote_id = db.Column(db.String(36), db.ForeignKey('quotes.id'), nullable=False)
    sl_no = db.Column(db.Integer, nullable=False)
    product = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    quantity = db.Column(db.Numeric(10, 2), nullable=False)
    unit_cost = db.Column(db.Numeric(12, 2), nullable=False)
    margin_percent = db.Column(db.Numeric(5, 2), nullable=False)
    vat_percent = db.Column(db.Numeric(5, 2), nullable=False)

    def as_line_item(self):
        return LineItem(
            sl_no=self.sl_no,
            product=self.product,
            description=self.description or '',
            quantity=to_decimal(self.quantity),
            unit_cost=to_decimal(self.unit_cost),
            margin_percent=to_decimal(self.margin_percent),
            vat_percent=to_decimal(self.vat_percent),
        )

    def __repr__(self):
        return f'<QuoteItem {self.product} x {self.quantity}>'
