from datetime import datetime
from decimal import Decimal

from spice_pos.services.billing import compute_bill
from spice_pos.services.orders import OrderLine
from spice_pos.services.printer import BillPrinter, format_bill_lines


def biryani_bill(number=12):
    lines = [OrderLine(11, "Hyderabadi Biryani", Decimal("350"), 2, "mains")]
    bill = compute_bill(2, "Table 2", lines, number=number)
    return bill


def test_format_bill_lines():
    bill = biryani_bill()
    ts = bill.issued_at.strftime("%Y-%m-%d %H:%M")

    lines = format_bill_lines(bill, restaurant="Spice Route Kitchen", currency="₹", footer="Thanks!")

    assert lines == [
        "Spice Route Kitchen",
        "Bill #00012",
        f"Table 2 | {ts}",
        "-" * 32,
        "2 x Hyderabadi Biryani",
        "   @ ₹350.00 = ₹700.00",
        "-" * 32,
        "Items: 2",
        "Subtotal: ₹700.00",
        "Tax (5%): ₹35.00",
        "Grand total: ₹735.00",
        "Thanks!",
    ]


def test_unnumbered_bill_without_footer():
    lines = format_bill_lines(biryani_bill(number=0), restaurant="R", currency="")
    assert lines[1] == "Bill"
    assert lines[-1] == "Grand total: 735.00"


def test_render_writes_pdf(tmp_path):
    printer = BillPrinter(tmp_path / "bills")
    bill = biryani_bill()

    path = printer.render(bill, ["Spice Route Kitchen", "Grand total: 735.00"])

    assert path.parent == tmp_path / "bills"
    assert path.suffix == ".pdf"
    assert path.read_bytes().startswith(b"%PDF")
    assert "Table-2" in path.name
    assert isinstance(bill.issued_at, datetime)
