"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
Inputs and outputs serialize to the field names used by saved history,
so older history files keep loading.
"""
import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Optional


# Strings accepted the way a browser's Number() accepts them
_DECIMAL = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_INFINITY = re.compile(r'([+-]?)Infinity')
_RADIX = {'0x': 16, '0o': 8, '0b': 2}


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _parse_number(text: str) -> float:
    if _DECIMAL.fullmatch(text):
        return float(text)
    match = _INFINITY.fullmatch(text)
    if match:
        return -math.inf if match.group(1) == '-' else math.inf
    base = _RADIX.get(text[:2].lower())
    if base and text[2:].isalnum():
        try:
            return _int_to_float(int(text[2:], base))
        except ValueError:
            return 0.0
    return 0.0


def to_number(value: Any) -> float:
    """
    Coerce a raw form value to a float.

    Missing, blank, unparsable and NaN values become 0.0. Infinities
    (including integers too large for a float) are kept and only
    neutralized when formatted for display.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        number = _parse_number(text)
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
    if math.isnan(number):
        return 0.0
    return number


def to_flag(value: Any) -> bool:
    """Coerce a raw checkbox value to a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float):
        return not math.isnan(value) and value != 0
    return False


def to_json_safe(value: Any) -> Any:
    """Replace non-finite floats with None, as JSON.stringify writes them."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    return value


@dataclass
class TraceStep:
    """A single step in the price calculation trace."""
    step: str
    description: str
    value: Optional[str] = None


# attribute -> (storage key, accepted aliases...)
INPUT_KEYS = {
    'jar_cost': ('jar', 'jarCost'),
    'wax_grams': ('waxGrams',),
    'wick_cost': ('wick', 'wickCost'),
    'fragrance_price_per_liter': ('fragPricePerL', 'fragrancePricePerLiter'),
    'fragrance_grams': ('fragGrams', 'fragranceGrams'),
    'color_drops': ('colorDrops',),
    'packaging_box': ('packBox', 'packagingBox'),
    'packaging_sticker': ('packSticker', 'packagingSticker'),
    'packaging_ribbon': ('packRibbon', 'packagingRibbon'),
    'additional_charges': ('additional', 'additionalCharges'),
    'profit_percent': ('profitPct', 'profitPercent'),
    'gst_percent': ('gstPct', 'gstPercent'),
    'apply_gst': ('applyGst',),
}

OUTPUT_KEYS = {
    'wax_cost': 'waxCost',
    'fragrance_cost': 'fragCost',
    'color_cost': 'colorCost',
    'jar_cost': 'jarCost',
    'wick_cost': 'wickCost',
    'packaging_subtotal': 'packaging',
    'additional_charges': 'extra',
    'total_cost': 'total',
    'profit_amount': 'profitAmount',
    'selling_price': 'sellingPrice',
    'final_price': 'finalPrice',
    'gst_amount': 'gstAmount',
    'price_per_color_drop': 'pricePerDrop',
}


def _lookup(raw: dict, attr: str, keys: tuple) -> Any:
    for key in keys + (attr,):
        if key in raw:
            return raw[key]
    return None


@dataclass
class PricingInput:
    """Raw material quantities and costs for one candle."""
    jar_cost: float = 0.0
    wax_grams: float = 0.0
    wick_cost: float = 0.0
    fragrance_price_per_liter: float = 0.0
    fragrance_grams: float = 0.0
    color_drops: float = 0.0
    packaging_box: float = 0.0
    packaging_sticker: float = 0.0
    packaging_ribbon: float = 0.0
    additional_charges: float = 0.0
    profit_percent: float = 0.0
    gst_percent: float = 0.0
    apply_gst: bool = False

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == 'apply_gst':
                setattr(self, f.name, to_flag(value))
            else:
                setattr(self, f.name, to_number(value))

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> 'PricingInput':
        """
        Create a PricingInput from a loosely typed mapping.

        Accepts storage keys ("jar", "fragPricePerL"), camelCase names
        ("jarCost", "fragrancePricePerLiter") and attribute names.
        Anything missing or invalid becomes 0.
        """
        raw = raw or {}
        return cls(**{
            attr: _lookup(raw, attr, keys)
            for attr, keys in INPUT_KEYS.items()
        })

    def to_dict(self) -> dict:
        """Convert to the storage format used by saved history."""
        return {
            keys[0]: getattr(self, attr)
            for attr, keys in INPUT_KEYS.items()
        }

    @property
    def packaging_subtotal(self) -> float:
        return self.packaging_box + self.packaging_sticker + self.packaging_ribbon


@dataclass
class PricingOutput:
    """Complete result of a price calculation."""
    wax_cost: float
    fragrance_cost: float
    color_cost: float
    jar_cost: float
    wick_cost: float
    packaging_subtotal: float
    additional_charges: float
    total_cost: float
    profit_amount: float
    selling_price: float
    gst_amount: float
    final_price: float
    price_per_color_drop: float
    trace: list[TraceStep] = field(default_factory=list, compare=False, repr=False)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the calculation trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to the storage format used by saved history."""
        return {key: getattr(self, attr) for attr, key in OUTPUT_KEYS.items()}

    @classmethod
    def from_dict(cls, raw: Optional[dict]) -> 'PricingOutput':
        """Read a stored output mapping back; missing values become 0."""
        raw = raw or {}
        return cls(**{
            attr: to_number(_lookup(raw, attr, (key,)))
            for attr, key in OUTPUT_KEYS.items()
        })


def input_attribute(key: str) -> str:
    """Resolve a stored or camelCase input name to its attribute name."""
    if key in INPUT_KEYS:
        return key
    for attr, keys in INPUT_KEYS.items():
        if key in keys:
            return attr
    raise KeyError(f"Unknown input field '{key}'")
