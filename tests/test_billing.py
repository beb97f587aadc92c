from decimal import Decimal

from spice_pos.core.money import fmt_amount, round_amount
from spice_pos.services.billing import TAX_RATE, compute_bill, grand_total, subtotal, tax
from spice_pos.services.orders import OrderLine


def line(item_id, price, quantity, name="Dish"):
    return OrderLine(item_id, name, Decimal(str(price)), quantity)


def test_two_biryanis_bill():
    bill = compute_bill(2, "Table 2", [line(11, 350, 2, "Hyderabadi Biryani")], number=7)

    assert bill.subtotal == Decimal("700")
    assert bill.tax == Decimal("35")
    assert bill.total == Decimal("735")
    assert bill.number == 7
    assert bill.item_count == 2
    assert fmt_amount(bill.total) == "₹735.00"


def test_empty_order_totals_zero():
    bill = compute_bill(1, "Table 1", [])
    assert bill.subtotal == 0
    assert bill.tax == 0
    assert bill.total == 0


def test_tax_rate_is_five_percent():
    assert TAX_RATE == Decimal("0.05")
    assert tax(Decimal("123.40")) == Decimal("6.17")


def test_total_is_subtotal_plus_exact_tax():
    lines = [line(1, "80", 3), line(20, "50", 1), line(41, "40", 2)]
    sub = subtotal(lines)
    assert sub == Decimal("370")
    assert grand_total(sub, tax(sub)) == sub * Decimal("1.05")


def test_subtotal_is_additive_over_lines():
    a = [line(1, "19.99", 3)]
    b = [line(2, "4.25", 2), line(3, "0.10", 7)]
    assert subtotal(a + b) == subtotal(a) + subtotal(b)


def test_rounding_happens_only_for_display():
    bill = compute_bill(3, "Table 3", [line(1, "0.30", 1)])
    assert bill.tax == Decimal("0.0150")
    assert round_amount(bill.tax) == Decimal("0.02")
    assert fmt_amount(bill.total, "$") == "$0.32"


def test_doubling_quantities_doubles_subtotal():
    lines = [line(11, "350", 1), line(20, "50", 3), line(41, "19.99", 2)]
    doubled = [line(l.item_id, l.price, l.quantity * 2) for l in lines]

    assert subtotal(doubled) == 2 * subtotal(lines)
    assert tax(subtotal(doubled)) == 2 * tax(subtotal(lines))
