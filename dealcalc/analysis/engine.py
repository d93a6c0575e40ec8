"""Dispatches a calculation request to the analyzer for its strategy."""

from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import BaseModel, ValidationError

from dealcalc.analysis.brrrr import BRRRRAnalyzer
from dealcalc.analysis.flip import FlipAnalyzer
from dealcalc.analysis.rental import RentalAnalyzer
from dealcalc.errors import InvalidInput
from dealcalc.models import (
    BRRRRInput,
    BRRRRResult,
    FlipInput,
    FlipResult,
    RentalInput,
    RentalResult,
    Strategy,
)

AnyInput = Union[RentalInput, FlipInput, BRRRRInput]
AnyResult = Union[RentalResult, FlipResult, BRRRRResult]

INPUT_MODELS: dict[Strategy, type[BaseModel]] = {
    Strategy.RENTAL: RentalInput,
    Strategy.FLIP: FlipInput,
    Strategy.BRRRR: BRRRRInput,
}


def parse_strategy(strategy: str | Strategy) -> Strategy:
    if isinstance(strategy, Strategy):
        return strategy
    try:
        return Strategy(strategy)
    except ValueError:
        choices = ", ".join(s.value for s in Strategy)
        raise InvalidInput("strategy", f"unknown strategy {strategy!r}; expected one of {choices}") from None


def build_input(strategy: str | Strategy, payload: AnyInput | Mapping[str, Any]) -> AnyInput:
    """Coerce ``payload`` into the input model for ``strategy``.

    Field errors from pydantic (missing or non-numeric values) surface as
    :class:`InvalidInput` naming the first offending field.
    """
    strategy = parse_strategy(strategy)
    model = INPUT_MODELS[strategy]
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        raise InvalidInput(
            "strategy", f"{type(payload).__name__} cannot be used with strategy {strategy.value!r}"
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidInput.from_validation_error(e) from e


class DealCalculator:
    """Runs exactly one strategy analyzer per request."""

    def __init__(self):
        self._analyzers: dict[Strategy, RentalAnalyzer | FlipAnalyzer | BRRRRAnalyzer] = {
            Strategy.RENTAL: RentalAnalyzer(),
            Strategy.FLIP: FlipAnalyzer(),
            Strategy.BRRRR: BRRRRAnalyzer(),
        }

    def calculate(
        self,
        strategy: str | Strategy,
        payload: AnyInput | Mapping[str, Any],
    ) -> AnyResult:
        """Calculate investment metrics for one strategy.

        Args:
            strategy: ``"rental"``, ``"flip"``, ``"brrrr"`` or a Strategy member.
            payload: The matching input model, or a mapping of its fields.
        """
        strategy = parse_strategy(strategy)
        inp = build_input(strategy, payload)
        return self._analyzers[strategy].calculate(inp)
