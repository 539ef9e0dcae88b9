"""
Pricing Engine - Core candle cost and price calculation with traceability.

Calculation order:
1. Wax (two half-batches at separate per-kg rates)
2. Fragrance (per-liter price applied per gram)
3. Color (per-drop price from the 100 mL bottle price)
4. Jar, wick, packaging and additional charges
5. Profit markup, then GST on the selling price
"""
import logging
from typing import Optional

from .models import PricingInput, PricingOutput

logger = logging.getLogger(__name__)

DROPS_PER_ML = 20  # drops of coloring per milliliter
COLOR_PRICE_PER_100ML = 149
WAX_RATES_PER_KG = (170, 175)


def price_per_color_drop() -> float:
    """Price of a single drop of coloring agent."""
    price_per_ml = COLOR_PRICE_PER_100ML / 100
    return price_per_ml / DROPS_PER_ML


def wax_cost(grams: float) -> float:
    """
    Cost of the wax used.

    The grams are split exactly in half and each half is priced at its
    own per-kg rate.
    """
    half = grams / 2
    first = (half / 1000) * WAX_RATES_PER_KG[0]
    second = (half / 1000) * WAX_RATES_PER_KG[1]
    return first + second


def compute(pricing_input: PricingInput) -> PricingOutput:
    """
    Calculate every cost and price line for one candle.

    Pure and total: no I/O, never raises for coerced input.
    """
    return PricingEngine().calculate(pricing_input)


class PricingEngine:
    """
    Stateless calculator mapping a PricingInput to a PricingOutput.

    Every call recomputes from scratch; nothing is cached between calls.
    """

    def calculate(self, pricing_input: PricingInput) -> PricingOutput:
        """
        Calculate the price breakdown with a step trace.

        Args:
            pricing_input: Coerced candle inputs

        Returns:
            PricingOutput with every cost line and the trace
        """
        inp = pricing_input

        waxes = wax_cost(inp.wax_grams)

        price_per_gram = inp.fragrance_price_per_liter / 1000
        fragrance = price_per_gram * inp.fragrance_grams

        per_drop = price_per_color_drop()
        color = per_drop * inp.color_drops

        packaging = inp.packaging_subtotal
        extra = inp.additional_charges

        total = (
            inp.jar_cost + inp.wick_cost + waxes + fragrance + color + packaging + extra
        )

        # Negative or zero markup means no profit, never a loss
        profit = total * inp.profit_percent / 100 if inp.profit_percent > 0 else 0.0
        selling = total + profit

        gst = selling * inp.gst_percent / 100 if inp.apply_gst else 0.0
        final = selling + gst

        output = PricingOutput(
            wax_cost=waxes,
            fragrance_cost=fragrance,
            color_cost=color,
            jar_cost=inp.jar_cost,
            wick_cost=inp.wick_cost,
            packaging_subtotal=packaging,
            additional_charges=extra,
            total_cost=total,
            profit_amount=profit,
            selling_price=selling,
            gst_amount=gst,
            final_price=final,
            price_per_color_drop=per_drop,
        )

        output.add_trace("Wax", f"{inp.wax_grams:g} g split at {WAX_RATES_PER_KG[0]}/{WAX_RATES_PER_KG[1]} per kg", f"{waxes:.4f}")
        output.add_trace("Fragrance", f"{inp.fragrance_grams:g} g at {price_per_gram:.4f} per g", f"{fragrance:.4f}")
        output.add_trace("Color", f"{inp.color_drops:g} drops at {per_drop:.4f} per drop", f"{color:.4f}")
        output.add_trace("Packaging", "Box + sticker + ribbon", f"{packaging:.4f}")
        output.add_trace("Total Cost", "Sum of all cost lines", f"{total:.4f}")
        if inp.profit_percent > 0:
            output.add_trace("Profit", f"{inp.profit_percent:g}% of total cost", f"{profit:.4f}")
        else:
            output.add_trace("Profit", "No markup applied")
        if inp.apply_gst:
            output.add_trace("GST", f"{inp.gst_percent:g}% of selling price", f"{gst:.4f}")
        else:
            output.add_trace("GST", "Not applied")
        output.add_trace("Final Price", "Selling price + GST", f"{final:.4f}")

        return output

    def calculate_dict(self, raw: Optional[dict]) -> dict:
        """
        Calculate from a loosely typed mapping (dict format for history and the API).

        Args:
            raw: Mapping of input field names to raw values

        Returns:
            Dict of output amounts keyed by their stored names
        """
        result = self.calculate(PricingInput.from_dict(raw))
        logger.debug("Calculated final price %s", result.final_price)
        return result.to_dict()
