"""
History record model.

A record keeps the stored inputs/outputs mappings as they were saved so
that loading and re-saving never changes existing entries.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..engine.models import PricingInput, PricingOutput


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with milliseconds, e.g. 2026-10-18T09:30:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


@dataclass
class HistoryRecord:
    """A saved calculation: when, what went in, what came out."""
    timestamp: str
    inputs: dict
    outputs: dict
    image: Optional[str] = None
    extra: dict = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Display name saved with the inputs."""
        return str(self.inputs.get('name') or '')

    @property
    def pricing_input(self) -> PricingInput:
        return PricingInput.from_dict(self.inputs)

    @property
    def pricing_output(self) -> PricingOutput:
        return PricingOutput.from_dict(self.outputs)

    @classmethod
    def create(
        cls,
        pricing_input: PricingInput,
        output: PricingOutput,
        name: str = "",
        image: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> 'HistoryRecord':
        """Build a record for a fresh calculation."""
        inputs = {'name': name}
        inputs.update(pricing_input.to_dict())
        return cls(
            timestamp=timestamp or iso_timestamp(),
            inputs=inputs,
            outputs=output.to_dict(),
            image=image,
        )

    def to_dict(self) -> dict:
        """Convert to the stored JSON object."""
        data = dict(self.extra)
        data.update({
            'ts': self.timestamp,
            'inputs': self.inputs,
            'outputs': self.outputs,
            'image': self.image,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'HistoryRecord':
        """Create a record from a stored JSON object."""
        known = ('ts', 'inputs', 'outputs', 'image')
        inputs = data.get('inputs')
        outputs = data.get('outputs')
        return cls(
            timestamp=str(data.get('ts') or data.get('timestamp') or ''),
            inputs=inputs if isinstance(inputs, dict) else {},
            outputs=outputs if isinstance(outputs, dict) else {},
            image=data.get('image') if isinstance(data.get('image'), str) else None,
            extra={k: v for k, v in data.items() if k not in known},
        )
