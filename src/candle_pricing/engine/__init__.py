"""Engine subpackage - core price calculation and display formatting."""
from .pricing_engine import PricingEngine, compute, DROPS_PER_ML, COLOR_PRICE_PER_100ML
from .models import PricingInput, PricingOutput, TraceStep
from .formatting import format_currency, results_text

__all__ = [
    'PricingEngine', 'compute', 'DROPS_PER_ML', 'COLOR_PRICE_PER_100ML',
    'PricingInput', 'PricingOutput', 'TraceStep',
    'format_currency', 'results_text',
]
