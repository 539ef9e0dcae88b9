"""
Display and export helpers for a price breakdown.

Everything here is presentation: amounts are only rounded when rendered,
and non-finite amounts render as zero instead of propagating.
"""
import math
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import PricingInput, PricingOutput

DEFAULT_SYMBOL = "₹"

_TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent.parent / "templates")),
    autoescape=select_autoescape(enabled_extensions=("html", "xml"), default=True),
)


def format_currency(amount, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format an amount with two decimals and a currency prefix."""
    try:
        value = float(amount)
    except (TypeError, ValueError, OverflowError):
        return f"{symbol}0.00"
    if not math.isfinite(value):
        return f"{symbol}0.00"
    return f"{symbol}{value:.2f}"


def format_price_per_drop(value: float, symbol: str = DEFAULT_SYMBOL) -> str:
    """Per-drop color price, shown with four decimals."""
    if not math.isfinite(value):
        value = 0.0
    return f"{symbol}{value:.4f}"


def _pct(value: float) -> str:
    return f"{value:g}"


def breakdown_rows(
    output: PricingOutput,
    pricing_input: PricingInput,
    symbol: str = DEFAULT_SYMBOL,
) -> list[tuple[str, float, bool]]:
    """
    Ordered (label, amount, strong) rows of the calculation breakdown.

    GST rows are only included when GST is applied.
    """
    rows = [
        ("Wax Price", output.wax_cost, False),
        ("Fragrance Price", output.fragrance_cost, False),
        (f"Color Price ({format_price_per_drop(output.price_per_color_drop, symbol)} / drop)", output.color_cost, False),
        ("Wick Cost", output.wick_cost, False),
        ("Jar Price", output.jar_cost, False),
        ("Packaging Subtotal", output.packaging_subtotal, False),
        ("Additional Charges", output.additional_charges, False),
        ("Total Cost", output.total_cost, True),
        (f"Profit ({_pct(pricing_input.profit_percent)}%)", output.profit_amount, False),
        ("Selling Price (Excl. GST)", output.selling_price, True),
    ]
    if pricing_input.apply_gst:
        rows.append((f"GST ({_pct(pricing_input.gst_percent)}%)", output.gst_amount, False))
        rows.append(("Final Price (Incl. GST)", output.final_price, True))
    return rows


def results_text(
    name: str,
    pricing_input: PricingInput,
    output: PricingOutput,
    symbol: str = DEFAULT_SYMBOL,
) -> str:
    """Plain-text rendering of a breakdown, used for clipboard copy."""
    def fmt(amount):
        return format_currency(amount, symbol)

    text = (
        f"Candle: {name or 'Unnamed'}\n\n"
        f"Wax: {fmt(output.wax_cost)}\n"
        f"Fragrance: {fmt(output.fragrance_cost)}\n"
        f"Color: {fmt(output.color_cost)}\n"
        f"Wick: {fmt(output.wick_cost)}\n"
        f"Jar: {fmt(output.jar_cost)}\n"
        f"Packaging: {fmt(output.packaging_subtotal)}\n"
        f"Additional: {fmt(output.additional_charges)}\n"
        f"Total Cost: {fmt(output.total_cost)}\n"
        f"Profit ({_pct(pricing_input.profit_percent)}%): {fmt(output.profit_amount)}\n"
        f"Selling Price: {fmt(output.selling_price)}\n"
    )
    if pricing_input.apply_gst:
        text += (
            f"GST ({_pct(pricing_input.gst_percent)}%): {fmt(output.gst_amount)}\n"
            f"Final Price: {fmt(output.final_price)}"
        )
    return text


def render_report_html(
    name: str,
    pricing_input: PricingInput,
    output: PricingOutput,
    image: Optional[str] = None,
    symbol: str = DEFAULT_SYMBOL,
) -> str:
    """Standalone printable page of the breakdown (print / save as PDF)."""
    template = _TEMPLATE_ENV.get_template("price_report.html")
    return template.render(
        name=name,
        image=image if image and image.startswith("data:image/") else None,
        rows=[
            (label, format_currency(amount, symbol), strong)
            for label, amount, strong in breakdown_rows(output, pricing_input, symbol)
        ],
    )
