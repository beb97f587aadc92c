"""Bill rendering to text lines and to PDF files for the print dialog."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from reportlab.lib.pagesizes import portrait
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..core.config_store import load_config
from ..core.money import fmt_amount
from ..core.paths import PRINTS_DIR
from .billing import TAX_RATE, Bill, line_total

_FONT_NAME = "Helvetica"
_FONT_CANDIDATES = [
    "DejaVuSans.ttf",
    "dejavusans.ttf",
    "NotoSans-Regular.ttf",
    "arialuni.ttf",
    "arial.ttf",
    "segoeui.ttf",
]
_RULE = "-" * 32


def _font_search_paths() -> List[Path]:
    paths: List[Path] = []
    if sys.platform.startswith("win"):
        windir = Path(os.environ.get("WINDIR", r"C:\\Windows"))
        paths.append(windir / "Fonts")
    else:
        paths.extend(
            [
                Path.home() / ".fonts",
                Path("/usr/share/fonts"),
                Path("/usr/share/fonts/truetype/dejavu"),
                Path("/usr/local/share/fonts"),
                Path("/Library/Fonts"),
            ]
        )
    return [p for p in paths if p.exists()]


def _register_font() -> str:
    global _FONT_NAME
    if "SpicePOSFont" in pdfmetrics.getRegisteredFontNames():
        _FONT_NAME = "SpicePOSFont"
        return _FONT_NAME

    for folder in _font_search_paths():
        for candidate in _FONT_CANDIDATES:
            path = folder / candidate
            if not path.exists():
                continue
            try:
                pdfmetrics.registerFont(TTFont("SpicePOSFont", str(path)))
            except Exception:
                continue
            else:
                _FONT_NAME = "SpicePOSFont"
                return _FONT_NAME
    return _FONT_NAME


def _sanitize_filename(value: str) -> str:
    safe = [ch if ch.isalnum() else "-" for ch in value]
    return "".join(safe).strip("-") or "bill"


def format_bill_lines(bill: Bill, *, restaurant: str, currency: str, footer: str = "") -> List[str]:
    """Plain-text bill shared by the on-screen preview and the PDF."""
    ts = bill.issued_at.strftime("%Y-%m-%d %H:%M")
    lines = [
        restaurant,
        f"Bill #{bill.number:05d}" if bill.number else "Bill",
        f"{bill.table_name} | {ts}",
        _RULE,
    ]
    for line in bill.lines:
        lines.append(f"{line.quantity} x {line.name}")
        unit_txt = fmt_amount(line.price, currency)
        total_txt = fmt_amount(line_total(line), currency)
        lines.append(f"   @ {unit_txt} = {total_txt}")
    tax_pct = (TAX_RATE * 100).normalize()
    lines.extend(
        [
            _RULE,
            f"Items: {bill.item_count}",
            f"Subtotal: {fmt_amount(bill.subtotal, currency)}",
            f"Tax ({tax_pct}%): {fmt_amount(bill.tax, currency)}",
            f"Grand total: {fmt_amount(bill.total, currency)}",
        ]
    )
    if footer:
        lines.append(footer)
    return lines


def _line_height() -> float:
    return 14.0


def _page_dimensions(line_count: int) -> tuple[float, float]:
    width = 226  # ≈80mm roll
    base_height = 60
    height = max(base_height, base_height + line_count * _line_height())
    return portrait((width, height))


class BillPrinter:
    """Render bills to PDF files under the prints folder."""

    __slots__ = ("output_dir",)

    def __init__(self, output_dir: Path | str = PRINTS_DIR) -> None:
        self.output_dir = Path(output_dir)

    def bill_lines(self, bill: Bill) -> List[str]:
        config = load_config()
        return format_bill_lines(
            bill,
            restaurant=str(config.get("restaurant_name") or "Spice POS"),
            currency=str(config.get("currency") or ""),
            footer=str(config.get("bill_footer") or ""),
        )

    def render(self, bill: Bill, lines: Optional[List[str]] = None) -> Path:
        lines = lines if lines is not None else self.bill_lines(bill)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        font = _register_font()
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        slug = _sanitize_filename(f"bill-{bill.number}-{bill.table_name}")
        target = self.output_dir / f"{timestamp}-{slug}.pdf"
        width, height = _page_dimensions(len(lines) + 4)
        canv = canvas.Canvas(str(target), pagesize=(width, height))
        canv.setTitle(f"Bill {bill.number}")
        canv.setAuthor("Spice POS")
        canv.setFont(font, 10)

        x = 12
        y = height - 18
        for text in lines:
            canv.drawString(x, y, text)
            y -= _line_height()
        canv.showPage()
        canv.save()
        return target
