"""
Pricing engine tests: the worked example, cost invariants over random
input vectors, and the profit/GST gating rules.
"""
import math
import random

import pytest

from candle_pricing.engine import PricingInput, compute
from candle_pricing.engine.pricing_engine import (
    COLOR_PRICE_PER_100ML, DROPS_PER_ML, price_per_color_drop, wax_cost,
)


def random_input(seed: int, **overrides) -> PricingInput:
    rng = random.Random(seed)
    values = {
        "jar_cost": rng.uniform(0, 500),
        "wax_grams": rng.uniform(0, 2000),
        "wick_cost": rng.uniform(0, 50),
        "fragrance_price_per_liter": rng.uniform(0, 5000),
        "fragrance_grams": rng.uniform(0, 100),
        "color_drops": rng.randint(0, 200),
        "packaging_box": rng.uniform(0, 100),
        "packaging_sticker": rng.uniform(0, 20),
        "packaging_ribbon": rng.uniform(0, 20),
        "additional_charges": rng.uniform(0, 100),
        "profit_percent": rng.uniform(0, 200),
        "gst_percent": rng.uniform(0, 28),
        "apply_gst": rng.random() < 0.5,
    }
    values.update(overrides)
    return PricingInput(**values)


SEEDS = list(range(25))


def test_worked_example(engine, sample_inputs):
    """200 g wax, 1200/L fragrance at 6 g, 10 drops, 30% profit, no GST."""
    result = engine.calculate(PricingInput.from_dict(sample_inputs))

    assert result.wax_cost == pytest.approx(34.5)
    assert result.fragrance_cost == pytest.approx(7.2)
    assert result.color_cost == pytest.approx(0.745)
    assert result.total_cost == pytest.approx(97.445)
    assert result.profit_amount == pytest.approx(29.2335)
    assert result.selling_price == pytest.approx(126.6785)
    assert result.gst_amount == 0
    assert result.final_price == pytest.approx(126.6785)


def test_worked_example_with_gst(engine, sample_inputs):
    sample_inputs["applyGst"] = True
    result = engine.calculate(PricingInput.from_dict(sample_inputs))

    assert result.gst_amount == pytest.approx(126.6785 * 0.18)
    assert result.final_price == pytest.approx(126.6785 * 1.18)


def test_wax_uses_two_half_rates():
    # 1 kg: 500 g at 170/kg + 500 g at 175/kg
    assert wax_cost(1000) == pytest.approx(85 + 87.5)
    assert wax_cost(0) == 0


def test_color_price_per_drop():
    assert DROPS_PER_ML == 20
    assert COLOR_PRICE_PER_100ML == 149
    assert price_per_color_drop() == pytest.approx(0.0745)


def test_empty_input_is_all_zero(engine):
    result = engine.calculate(PricingInput())

    assert result.total_cost == 0
    assert result.selling_price == 0
    assert result.final_price == 0
    assert result.price_per_color_drop == pytest.approx(0.0745)


@pytest.mark.parametrize("seed", SEEDS)
def test_total_is_sum_of_components(seed):
    result = compute(random_input(seed))
    components = (
        result.wax_cost + result.wick_cost + result.jar_cost + result.fragrance_cost
        + result.color_cost + result.packaging_subtotal + result.additional_charges
    )
    assert result.total_cost == pytest.approx(components)
    assert result.selling_price == pytest.approx(result.total_cost + result.profit_amount)
    assert result.final_price == pytest.approx(result.selling_price + result.gst_amount)


@pytest.mark.parametrize("seed", SEEDS)
def test_packaging_subtotal_sums_three_parts(seed):
    inp = random_input(seed)
    result = compute(inp)
    assert result.packaging_subtotal == pytest.approx(
        inp.packaging_box + inp.packaging_sticker + inp.packaging_ribbon
    )


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("profit", [0, -10, -0.5])
def test_no_markup_without_positive_profit(seed, profit):
    """Zero or negative profit percent means selling price equals total cost."""
    result = compute(random_input(seed, profit_percent=profit))
    assert result.profit_amount == 0
    assert result.selling_price == result.total_cost


@pytest.mark.parametrize("seed", SEEDS)
def test_gst_ignored_when_not_applied(seed):
    result = compute(random_input(seed, apply_gst=False, gst_percent=18))
    assert result.gst_amount == 0
    assert result.final_price == result.selling_price


@pytest.mark.parametrize("seed", SEEDS)
def test_wax_cost_is_linear(seed):
    grams = random.Random(seed).uniform(0, 5000)
    single = compute(PricingInput(wax_grams=grams)).wax_cost
    double = compute(PricingInput(wax_grams=2 * grams)).wax_cost
    assert double == pytest.approx(2 * single)


def test_negative_gst_is_not_clamped():
    """Only profit is clamped at zero; a negative GST rate reduces the price."""
    result = compute(PricingInput(jar_cost=100, gst_percent=-10, apply_gst=True))
    assert result.gst_amount == pytest.approx(-10)
    assert result.final_price == pytest.approx(90)


def test_negative_costs_pass_through():
    result = compute(PricingInput(jar_cost=-20, wick_cost=5))
    assert result.total_cost == pytest.approx(-15)


def test_compute_is_pure(sample_inputs):
    inp = PricingInput.from_dict(sample_inputs)
    assert compute(inp) == compute(inp)
    assert inp == PricingInput.from_dict(sample_inputs)


def test_infinite_input_gives_non_finite_output():
    result = compute(PricingInput(jar_cost=float("inf")))
    assert math.isinf(result.total_cost)


def test_calculate_dict_coerces_raw_values(engine):
    result = engine.calculate_dict({"jar": "50", "waxGrams": "abc", "wick": None, "profitPct": ""})
    assert result["jarCost"] == 50
    assert result["waxCost"] == 0
    assert result["total"] == pytest.approx(50)
    assert result["profitAmount"] == 0


def test_trace_lists_each_step(engine, sample_inputs):
    result = engine.calculate(PricingInput.from_dict(sample_inputs))
    steps = [t.step for t in result.trace]

    assert steps == ["Wax", "Fragrance", "Color", "Packaging", "Total Cost", "Profit", "GST", "Final Price"]
    assert "GST: Not applied" in result.get_trace_text()
