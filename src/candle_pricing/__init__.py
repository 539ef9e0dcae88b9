"""
Candle Pricing Package

Prices a handmade candle from raw-material quantities and costs.
Computes Wax → Fragrance → Color → Packaging costs, then Profit and GST,
and keeps a rolling history of saved calculations.
"""

__version__ = "1.0.0"
