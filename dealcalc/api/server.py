"""FastAPI request handlers for DealCalc."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dealcalc import __version__
from dealcalc.analysis.engine import DealCalculator, build_input
from dealcalc.config import AppConfig
from dealcalc.errors import InvalidInput
from dealcalc.models import (
    BRRRRInput,
    BRRRRResult,
    FlipInput,
    FlipResult,
    RentalInput,
    RentalResult,
    ScenarioRecord,
    Strategy,
)
from dealcalc.scenarios import build_scenario_record

logger = logging.getLogger(__name__)


def create_app(cfg: AppConfig) -> FastAPI:
    app = FastAPI(title="DealCalc", version=__version__)
    calculator = DealCalculator()

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=422, content={"error": exc.message, "field": exc.field})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # same body shape as range errors
        return await invalid_input_handler(
            request, InvalidInput.from_errors(exc.errors(), skip_prefix=("body", "path", "query"))
        )

    @app.get("/api/health")
    def health():
        return {"status": "ok", "version": __version__}

    @app.get("/api/defaults")
    def defaults():
        """Starting inputs for each calculator."""
        return cfg.defaults.model_dump()

    @app.post("/api/calculate/rental", response_model=RentalResult)
    def calculate_rental(inp: RentalInput):
        logger.debug("Rental calculation: %s", inp)
        return calculator.calculate(Strategy.RENTAL, inp)

    @app.post("/api/calculate/flip", response_model=FlipResult)
    def calculate_flip(inp: FlipInput):
        logger.debug("Flip calculation: %s", inp)
        return calculator.calculate(Strategy.FLIP, inp)

    @app.post("/api/calculate/brrrr", response_model=BRRRRResult)
    def calculate_brrrr(inp: BRRRRInput):
        logger.debug("BRRRR calculation: %s", inp)
        return calculator.calculate(Strategy.BRRRR, inp)

    @app.post("/api/scenarios/{strategy}", response_model=ScenarioRecord)
    def scenario(
        strategy: str,
        scenario_name: str = Body(...),
        inputs: dict[str, Any] = Body(...),
    ):
        """Calculate a named scenario and return it as a storage record."""
        inp = build_input(strategy, inputs)
        result = calculator.calculate(strategy, inp)
        record = build_scenario_record(scenario_name, inp, result)
        logger.debug("Built %s scenario %r", record.strategy_type.value, scenario_name)
        return record

    return app
