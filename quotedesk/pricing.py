"""Quote pricing: line items plus discount/share parameters to totals.

Everything here is pure Decimal arithmetic with no rounding; money is rounded
to two places only when presented (``QuoteTotals.as_dict``). Recomputing the
totals from the same inputs always gives the same result.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP

ZERO = Decimal('0')
HUNDRED = Decimal('100')
CENTS = Decimal('0.01')

DISCOUNT_PERCENT = 'PERCENT'
DISCOUNT_AMOUNT = 'AMOUNT'
DISCOUNT_MODES = (DISCOUNT_PERCENT, DISCOUNT_AMOUNT)


def to_decimal(value):
    if value is None or value == '':
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value):
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineItem:
    sl_no: int
    product: str
    quantity: Decimal
    unit_cost: Decimal
    margin_percent: Decimal
    vat_percent: Decimal
    description: str = ''

    @classmethod
    def from_dict(cls, data, sl_no=None):
        return cls(
            sl_no=int(sl_no if sl_no is not None else data.get('sl_no') or 1),
            product=(data.get('product') or '').strip(),
            description=data.get('description') or '',
            quantity=to_decimal(data.get('quantity')),
            unit_cost=to_decimal(data.get('unit_cost')),
            margin_percent=to_decimal(data.get('margin_percent')),
            vat_percent=to_decimal(data.get('vat_percent')),
        )

    @property
    def unit_price(self):
        return self.unit_cost * (1 + self.margin_percent / HUNDRED)

    @property
    def total_cost(self):
        return self.unit_cost * self.quantity

    @property
    def total_price(self):
        return self.unit_price * self.quantity

    @property
    def line_vat(self):
        return self.total_price * (self.vat_percent / HUNDRED)

    def as_dict(self):
        return {
            'sl_no': self.sl_no,
            'product': self.product,
            'description': self.description,
            'quantity': str(self.quantity),
            'unit_cost': str(self.unit_cost),
            'margin_percent': str(self.margin_percent),
            'vat_percent': str(self.vat_percent),
            'unit_price': str(quantize_money(self.unit_price)),
            'total_cost': str(quantize_money(self.total_cost)),
            'total_price': str(quantize_money(self.total_price)),
            'line_vat': str(quantize_money(self.line_vat)),
        }


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal = ZERO
    business_total_cost: Decimal = ZERO
    total_vat: Decimal = ZERO
    discount_amount: Decimal = ZERO
    net_after_discount: Decimal = ZERO
    grand_total: Decimal = ZERO
    gross_profit: Decimal = ZERO
    profit_percent: Decimal = ZERO
    profit_rate: Decimal = ZERO
    shared_profit: Decimal = ZERO

    def as_dict(self):
        return {key: str(quantize_money(value)) for key, value in asdict(self).items()}


class PricingService:
    @staticmethod
    def compute_totals(items, discount_mode=DISCOUNT_PERCENT, discount_value=0,
                       share_percent=0, lead_is_shared=False):
        """Aggregate ``items`` into a :class:`QuoteTotals`.

        Total over every numeric input: negative quantities or costs are
        computed as given, positivity is checked by the caller. VAT is taken
        on the pre-discount line totals, and an AMOUNT discount is clamped
        to the subtotal.
        """
        subtotal = ZERO
        business_total_cost = ZERO
        total_vat = ZERO
        total_quantity = ZERO
        for item in items:
            subtotal += item.total_price
            business_total_cost += item.total_cost
            total_vat += item.line_vat
            total_quantity += item.quantity

        discount_value = to_decimal(discount_value)
        if discount_mode == DISCOUNT_AMOUNT:
            discount_amount = min(discount_value, subtotal)
        else:
            discount_amount = subtotal * discount_value / HUNDRED

        net_after_discount = subtotal - discount_amount
        grand_total = net_after_discount + total_vat
        gross_profit = net_after_discount - business_total_cost
        if net_after_discount > 0:
            profit_percent = gross_profit / net_after_discount * HUNDRED
        else:
            profit_percent = ZERO
        profit_rate = gross_profit / total_quantity if total_quantity != 0 else ZERO
        if lead_is_shared:
            shared_profit = grand_total * to_decimal(share_percent) / HUNDRED
        else:
            shared_profit = ZERO

        return QuoteTotals(
            subtotal=subtotal,
            business_total_cost=business_total_cost,
            total_vat=total_vat,
            discount_amount=discount_amount,
            net_after_discount=net_after_discount,
            grand_total=grand_total,
            gross_profit=gross_profit,
            profit_percent=profit_percent,
            profit_rate=profit_rate,
            shared_profit=shared_profit,
        )

    @staticmethod
    def requires_approval(items, margin_floor):
        return any(item.margin_percent < margin_floor for item in items)
