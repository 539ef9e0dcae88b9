"""
History Store - rolling log of saved calculations.

Records are kept newest first and capped (10 by default). The whole list
lives in one storage slot as a JSON array and is rewritten in full on
every append or clear.
"""
import json
import logging
from typing import Iterator, Optional

import pandas as pd

from ..config.settings import Settings, get_settings
from ..engine.formatting import format_currency
from ..engine.models import PricingInput, PricingOutput, to_json_safe, to_number
from .models import HistoryRecord
from .storage import FileKeyValueStorage, KeyValueStorage

logger = logging.getLogger(__name__)

HISTORY_KEY = "candle_calc_history_v2"
HISTORY_LIMIT = 10

HISTORY_COLUMNS = [
    'Time', 'Name', 'Total', 'Profit %', 'Selling Price', 'Final Price',
    'Wax g', 'Frag g', 'Color drops',
]


class HistoryStore:
    """
    Bounded, newest-first history backed by a key-value slot.

    Single writer: the interactive session that owns the store.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = HISTORY_KEY,
        limit: int = HISTORY_LIMIT,
        currency_symbol: str = "₹",
    ):
        self.storage = storage
        self.key = key
        self.limit = limit
        self.currency_symbol = currency_symbol
        self._records: list[HistoryRecord] = []

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'HistoryStore':
        """File-backed store in the configured data directory, already loaded."""
        settings = settings or get_settings()
        store = cls(
            FileKeyValueStorage(settings.data_dir),
            key=settings.history_key,
            limit=settings.history_limit,
            currency_symbol=settings.currency_symbol,
        )
        store.load()
        return store

    @property
    def records(self) -> list[HistoryRecord]:
        """Copy of the in-memory records, newest first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(list(self._records))

    def load(self) -> list[HistoryRecord]:
        """
        Read the stored history.

        A missing slot, unparsable JSON or a non-array value all mean
        "no history"; nothing is raised.
        """
        self._records = []
        raw = self.storage.get_item(self.key)
        if not raw:
            return self.records

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Ignoring unreadable history in '%s': %s", self.key, e)
            return self.records

        if not isinstance(data, list):
            logger.warning("Ignoring history in '%s': expected a JSON array", self.key)
            return self.records

        self._records = [HistoryRecord.from_dict(row) for row in data if isinstance(row, dict)]
        return self.records

    def append(self, record: HistoryRecord) -> list[HistoryRecord]:
        """Prepend a record, drop the oldest past the limit, and persist."""
        records = ([record] + self._records)[:self.limit]
        self._write(records)
        self._records = records
        logger.info("Saved calculation '%s' to history (%d entries)", record.name or 'Unnamed', len(self._records))
        return self.records

    def save(
        self,
        pricing_input: PricingInput,
        output: PricingOutput,
        name: str = "",
        image: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> HistoryRecord:
        """Create a record for a calculation and append it."""
        record = HistoryRecord.create(
            pricing_input, output, name=name, image=image, timestamp=timestamp
        )
        self.append(record)
        return record

    def clear(self):
        """Forget every record and remove the stored slot."""
        self.storage.remove_item(self.key)
        self._records = []
        logger.info("Cleared calculation history")

    def _write(self, records: list[HistoryRecord]):
        # non-finite amounts are stored as null so the array stays strict JSON
        payload = json.dumps(
            to_json_safe([r.to_dict() for r in records]), ensure_ascii=False, allow_nan=False
        )
        self.storage.set_item(self.key, payload)

    def to_dataframe(self) -> pd.DataFrame:
        """Table of recent calculations for display or CSV export."""
        rows = []
        for record in self._records:
            inputs = record.inputs
            outputs = record.outputs
            rows.append({
                'Time': _display_time(record.timestamp),
                'Name': record.name or '-',
                'Total': format_currency(outputs.get('total'), self.currency_symbol),
                'Profit %': f"{to_number(inputs.get('profitPct')):g}%",
                'Selling Price': format_currency(outputs.get('sellingPrice'), self.currency_symbol),
                'Final Price': format_currency(outputs.get('finalPrice'), self.currency_symbol) if inputs.get('applyGst') else '-',
                'Wax g': inputs.get('waxGrams'),
                'Frag g': inputs.get('fragGrams'),
                'Color drops': inputs.get('colorDrops'),
            })
        return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


def _display_time(timestamp: str) -> str:
    moment = pd.to_datetime(timestamp, utc=True, errors='coerce')
    if pd.isna(moment):
        return timestamp
    return moment.tz_convert(None).strftime('%Y-%m-%d %H:%M:%S')
