import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from candle_pricing.config.settings import Settings
from candle_pricing.engine import PricingEngine
from candle_pricing.history import HistoryStore, MemoryKeyValueStorage


@pytest.fixture
def engine():
    return PricingEngine()


@pytest.fixture
def settings(tmp_path):
    return Settings.load(project_root=tmp_path)


@pytest.fixture
def storage():
    return MemoryKeyValueStorage()


@pytest.fixture
def history(storage):
    return HistoryStore(storage)


@pytest.fixture
def sample_inputs():
    """Worked example: 200 g wax, 6 g fragrance, 10 drops, 30% profit."""
    return {
        "jar": 50,
        "waxGrams": 200,
        "wick": 5,
        "fragPricePerL": 1200,
        "fragGrams": 6,
        "colorDrops": 10,
        "packBox": 0,
        "packSticker": 0,
        "packRibbon": 0,
        "additional": 0,
        "profitPct": 30,
        "gstPct": 18,
        "applyGst": False,
    }
