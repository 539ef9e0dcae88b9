"""
Calculator Service - the state behind the calculator form.

Holds the current name, image and inputs, recomputes the breakdown on
every read, and wires save/clear/copy actions to the history store.
"""
import base64
import binascii
import logging
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from ..config.settings import Settings, get_settings
from ..engine.formatting import render_report_html, results_text
from ..engine.models import PricingInput, PricingOutput, input_attribute
from ..engine.pricing_engine import PricingEngine
from ..history.models import HistoryRecord
from ..history.store import HistoryStore

logger = logging.getLogger(__name__)

COPY_SUCCESS_MESSAGE = "Results copied to clipboard ✅"
COPY_FAILURE_MESSAGE = "Copy failed. You can select and copy manually."


@dataclass
class CopyResult:
    """Outcome of a clipboard copy, shown to the user as a notification."""
    success: bool
    message: str
    text: str


class CalculatorSession:
    """Form state for one user session."""

    def __init__(
        self,
        history: HistoryStore,
        engine: Optional[PricingEngine] = None,
        settings: Optional[Settings] = None,
    ):
        self.history = history
        self.engine = engine or PricingEngine()
        self.settings = settings or get_settings()
        self.name = ""
        self.image: Optional[str] = None
        self.inputs = PricingInput()
        self.reset()

    @property
    def result(self) -> PricingOutput:
        """Breakdown for the current inputs, recomputed on every access."""
        return self.engine.calculate(self.inputs)

    def update(self, **fields) -> PricingOutput:
        """
        Change one or more input fields.

        Keys may be attribute names or stored names; values are coerced.
        Unknown keys are skipped, as PricingInput.from_dict skips them.
        """
        values = asdict(self.inputs)
        for key, value in fields.items():
            try:
                values[input_attribute(key)] = value
            except KeyError:
                logger.warning("Ignoring unknown input field '%s'", key)
        self.inputs = PricingInput(**values)
        return self.result

    def reset(self):
        """Back to an empty form with the default GST rate (unapplied)."""
        self.name = ""
        self.image = None
        self.inputs = PricingInput(gst_percent=self.settings.default_gst_percent)

    def set_image(self, data: bytes, mime_type: str = "image/png"):
        """Embed an uploaded image as a data URL."""
        encoded = base64.b64encode(data).decode('ascii')
        self.image = f"data:{mime_type};base64,{encoded}"

    def image_bytes(self) -> Optional[bytes]:
        """Decoded bytes of the embedded image, if any."""
        if not self.image or ";base64," not in self.image:
            return None
        try:
            return base64.b64decode(self.image.split(",", 1)[1])
        except (binascii.Error, ValueError) as e:
            logger.warning("Ignoring undecodable image: %s", e)
            return None

    def save_to_history(self) -> HistoryRecord:
        """Persist the current calculation as the newest history entry."""
        return self.history.save(
            self.inputs, self.result, name=self.name, image=self.image
        )

    def clear_history(self):
        self.history.clear()

    def restore(self, record: HistoryRecord):
        """Load a saved calculation back into the form."""
        self.name = record.name
        self.image = record.image
        self.inputs = record.pricing_input

    def results_text(self) -> str:
        return results_text(self.name, self.inputs, self.result, self.settings.currency_symbol)

    def report_html(self) -> str:
        return render_report_html(
            self.name, self.inputs, self.result, self.image, self.settings.currency_symbol
        )

    def copy_results(self, writer: Callable[[str], None]) -> CopyResult:
        """
        Hand the results text to a clipboard writer.

        A failing writer is reported in the returned CopyResult; the form
        and history are left untouched either way.
        """
        text = self.results_text()
        try:
            writer(text)
        except Exception as e:
            logger.warning("Clipboard copy failed: %s", e)
            return CopyResult(success=False, message=COPY_FAILURE_MESSAGE, text=text)
        return CopyResult(success=True, message=COPY_SUCCESS_MESSAGE, text=text)
