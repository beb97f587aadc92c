"""Bill arithmetic. Amounts stay unrounded; only the display layer rounds."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Tuple

TAX_RATE = Decimal("0.05")


def line_total(line) -> Decimal:
    return Decimal(line.price) * line.quantity


def subtotal(lines: Iterable) -> Decimal:
    return sum((line_total(line) for line in lines), Decimal("0"))


def tax(amount: Decimal) -> Decimal:
    return Decimal(amount) * TAX_RATE


def grand_total(amount: Decimal, tax_amount: Decimal) -> Decimal:
    return Decimal(amount) + Decimal(tax_amount)


@dataclass(frozen=True, slots=True)
class Bill:
    table_id: int
    table_name: str
    lines: Tuple
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    number: int = 0
    issued_at: datetime = field(default_factory=datetime.now)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


def compute_bill(table_id: int, table_name: str, lines: Iterable, *, number: int = 0) -> Bill:
    rows = tuple(lines)
    sub = subtotal(rows)
    tax_amount = tax(sub)
    return Bill(
        table_id=table_id,
        table_name=table_name,
        lines=rows,
        subtotal=sub,
        tax=tax_amount,
        total=grand_total(sub, tax_amount),
        number=number,
    )
