"""Pricing calculator tests (no database needed)."""
from decimal import Decimal

import pytest

from quotedesk.pricing import LineItem, PricingService, QuoteTotals, quantize_money

from conftest import item


def _items(*rows):
    return [LineItem.from_dict(row, sl_no=i + 1) for i, row in enumerate(rows)]


def test_line_item_values():
    line = LineItem.from_dict(item(margin=10, quantity=2, unit_cost=100, vat=5))
    assert line.unit_price == Decimal('110')
    assert line.total_cost == Decimal('200')
    assert line.total_price == Decimal('220')
    assert line.line_vat == Decimal('11')


def test_single_item_no_discount():
    totals = PricingService.compute_totals(_items(item()), discount_value=0)
    assert totals.subtotal == Decimal('220')
    assert totals.business_total_cost == Decimal('200')
    assert totals.total_vat == Decimal('11')
    assert totals.discount_amount == 0
    assert totals.net_after_discount == Decimal('220')
    assert totals.grand_total == Decimal('231')
    assert totals.gross_profit == Decimal('20')
    assert quantize_money(totals.profit_percent) == Decimal('9.09')
    assert totals.profit_rate == Decimal('10')
    assert totals.shared_profit == 0


def test_percent_discount_keeps_vat_on_pre_discount_total():
    totals = PricingService.compute_totals(_items(item()), discount_mode='PERCENT', discount_value=50)
    assert totals.discount_amount == Decimal('110')
    assert totals.net_after_discount == Decimal('110')
    assert totals.total_vat == Decimal('11')
    assert totals.grand_total == Decimal('121')
    assert totals.gross_profit == Decimal('-90')
    assert quantize_money(totals.profit_percent) == Decimal('-81.82')


def test_amount_discount_is_clamped_to_subtotal():
    totals = PricingService.compute_totals(_items(item()), discount_mode='AMOUNT', discount_value=500)
    assert totals.discount_amount == totals.subtotal
    assert totals.net_after_discount == 0
    assert totals.profit_percent == 0
    assert totals.grand_total == totals.total_vat


def test_amount_discount_below_subtotal():
    totals = PricingService.compute_totals(_items(item()), discount_mode='AMOUNT', discount_value='20.50')
    assert totals.discount_amount == Decimal('20.50')
    assert totals.net_after_discount == Decimal('199.50')


def test_percent_discount_over_hundred_gives_zero_profit_percent():
    totals = PricingService.compute_totals(_items(item()), discount_mode='PERCENT', discount_value=150)
    assert totals.net_after_discount < 0
    assert totals.profit_percent == 0


def test_empty_items_total_to_zero():
    totals = PricingService.compute_totals([], discount_mode='AMOUNT', discount_value=10)
    assert totals == QuoteTotals()


def test_shared_profit_only_for_shared_lead():
    items = _items(item())
    unshared = PricingService.compute_totals(items, share_percent=10, lead_is_shared=False)
    shared = PricingService.compute_totals(items, share_percent=10, lead_is_shared=True)
    assert unshared.shared_profit == 0
    assert shared.shared_profit == Decimal('23.1')


def test_multiple_items_sum():
    items = _items(item(), item(margin=25, quantity=1, unit_cost=40, vat=0, product='Cable'))
    totals = PricingService.compute_totals(items)
    assert totals.subtotal == Decimal('270')
    assert totals.business_total_cost == Decimal('240')
    assert totals.total_vat == Decimal('11')
    assert totals.profit_rate == Decimal('10')


def test_recompute_is_identical():
    items = _items(item(margin='7.5', quantity='3', unit_cost='19.99', vat='5'))
    first = PricingService.compute_totals(items, discount_mode='PERCENT', discount_value='12.5')
    second = PricingService.compute_totals(items, discount_mode='PERCENT', discount_value='12.5')
    assert first == second
    assert first.as_dict() == second.as_dict()


def test_negative_inputs_are_computed_as_given():
    totals = PricingService.compute_totals(_items(item(quantity=-1)))
    assert totals.subtotal == Decimal('-110')
    assert totals.profit_percent == 0


def test_as_dict_rounds_only_for_display():
    totals = PricingService.compute_totals(_items(item()))
    data = totals.as_dict()
    assert data['profit_percent'] == '9.09'
    assert data['grand_total'] == '231.00'
    assert totals.profit_percent != Decimal('9.09')


@pytest.mark.parametrize('margins, expected', [
    ([5, 12], True),
    ([8, 12], False),
    (['7.99'], True),
    ([], False),
])
def test_requires_approval(margins, expected):
    items = _items(*[item(margin=m) for m in margins])
    assert PricingService.requires_approval(items, Decimal('8')) is expected
