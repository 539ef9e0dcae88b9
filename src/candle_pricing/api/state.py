"""
Shared engine and history store for the API process.
"""
from typing import Optional

from ..config.settings import get_settings
from ..engine.pricing_engine import PricingEngine
from ..history.store import HistoryStore

engine = PricingEngine()

_history: Optional[HistoryStore] = None


def get_history() -> HistoryStore:
    """History store loaded once per process."""
    global _history
    if _history is None:
        _history = HistoryStore.from_settings(get_settings())
    return _history
