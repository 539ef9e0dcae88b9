from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional
import logging
from contextlib import asynccontextmanager

from candle_pricing import __version__
from candle_pricing.config.settings import get_settings
from candle_pricing.engine import PricingInput, format_currency, results_text
from candle_pricing.engine.models import to_json_safe
from candle_pricing.engine.pricing_engine import (
    COLOR_PRICE_PER_100ML, DROPS_PER_ML, WAX_RATES_PER_KG, price_per_color_drop,
)
from candle_pricing.history.store import HistoryStore
from candle_pricing.api.state import engine, get_history
from candle_pricing.logger import setup_file_logger

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_file_logger(get_settings().log_dir, front_end="api")
    yield


app = FastAPI(
    title="Candle Pricing API",
    description="Local API for the handmade candle price calculator",
    version=__version__,
    lifespan=lifespan
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalcRequest(BaseModel):
    """Any subset of input fields; unknown or invalid values become 0."""
    model_config = ConfigDict(extra="allow")


class SaveRequest(BaseModel):
    name: str = ""
    image: Optional[str] = None
    inputs: Dict[str, Any] = {}


def _calculation(raw: dict) -> tuple[PricingInput, dict]:
    settings = get_settings()
    pricing_input = PricingInput.from_dict(raw)
    result = engine.calculate(pricing_input)
    payload = result.to_dict()
    payload["formatted"] = {
        key: format_currency(value, settings.currency_symbol)
        for key, value in payload.items()
        if key != "pricePerDrop"
    }
    payload["text"] = results_text(
        str(raw.get("name") or ""), pricing_input, result, settings.currency_symbol
    )
    return pricing_input, to_json_safe(payload)


@app.get("/")
async def root():
    return {"status": "online", "message": "Candle Pricing API Active"}


@app.get("/constants")
async def get_constants():
    settings = get_settings()
    return {
        "drops_per_ml": DROPS_PER_ML,
        "color_price_per_100ml": COLOR_PRICE_PER_100ML,
        "price_per_drop": price_per_color_drop(),
        "wax_rates_per_kg": list(WAX_RATES_PER_KG),
        "history_limit": settings.history_limit,
        "currency_symbol": settings.currency_symbol,
        "default_gst_percent": settings.default_gst_percent,
    }


@app.post("/calculate")
async def calculate(req: CalcRequest):
    try:
        _, payload = _calculation(req.model_dump())
        return payload
    except Exception as e:
        logger.exception("Calculation failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/history")
async def list_history(history: HistoryStore = Depends(get_history)) -> List[dict]:
    return [to_json_safe(record.to_dict()) for record in history]


@app.post("/history")
async def save_history(req: SaveRequest, history: HistoryStore = Depends(get_history)):
    try:
        pricing_input = PricingInput.from_dict(req.inputs)
        record = history.save(
            pricing_input, engine.calculate(pricing_input), name=req.name, image=req.image
        )
        return to_json_safe(record.to_dict())
    except Exception as e:
        logger.exception("Saving history failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.delete("/history")
async def clear_history(history: HistoryStore = Depends(get_history)):
    try:
        history.clear()
        return {"success": True, "message": "History cleared"}
    except Exception as e:
        logger.exception("Clearing history failed")
        raise HTTPException(status_code=500, detail=str(e))
