"""Barcode resolution state machine.

A scanned or typed barcode is first matched against the local food database.
Only on a local miss is the external lookup service queried; a product found
there is saved as a new food item.

    idle -> searching_local -> found
                            -> searching_remote -> auto_created
                                                -> not_found
                                                -> error

Every outcome returns to ``idle`` through ``reset``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from diet_tracker.domain.errors import DietTrackerError, ValidationError
from diet_tracker.domain.foods import FoodItem
from diet_tracker.services.lookup import ProductNutrition

_logger = logging.getLogger(__name__)


class BarcodeState(str, Enum):
    """States of a barcode resolution."""

    IDLE = "idle"
    SEARCHING_LOCAL = "searching_local"
    FOUND = "found"
    SEARCHING_REMOTE = "searching_remote"
    AUTO_CREATED = "auto_created"
    NOT_FOUND = "not_found"
    ERROR = "error"


_OUTCOMES = frozenset(
    {
        BarcodeState.FOUND,
        BarcodeState.AUTO_CREATED,
        BarcodeState.NOT_FOUND,
        BarcodeState.ERROR,
    }
)

_TRANSITIONS: dict[BarcodeState, frozenset[BarcodeState]] = {
    BarcodeState.IDLE: frozenset({BarcodeState.SEARCHING_LOCAL}),
    BarcodeState.SEARCHING_LOCAL: frozenset(
        {BarcodeState.FOUND, BarcodeState.SEARCHING_REMOTE, BarcodeState.ERROR}
    ),
    BarcodeState.SEARCHING_REMOTE: frozenset(
        {BarcodeState.AUTO_CREATED, BarcodeState.NOT_FOUND, BarcodeState.ERROR}
    ),
    **{state: frozenset({BarcodeState.IDLE}) for state in _OUTCOMES},
}


class InvalidTransition(RuntimeError):
    """Raised when the flow is asked to move along an undefined edge."""


class FoodCatalog(Protocol):
    """Local food database operations used by the flow."""

    def find_by_barcode(self, barcode: str) -> FoodItem | None:
        """Return the local item for a barcode, if any."""

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item."""


class ProductLookup(Protocol):
    """External barcode-to-nutrition lookup."""

    async def lookup(self, barcode: str) -> ProductNutrition | None:
        """Return nutrition for a barcode, or None when unknown."""


@dataclass
class BarcodeFlow:
    """Explicit state holder for one barcode resolution."""

    state: BarcodeState = BarcodeState.IDLE
    barcode: str | None = None
    food: FoodItem | None = None
    message: str | None = None
    history: list[BarcodeState] = field(default_factory=list)

    def transition(
        self,
        target: BarcodeState,
        *,
        food: FoodItem | None = None,
        message: str | None = None,
    ) -> None:
        """Move to ``target`` or raise when the edge is not allowed."""
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {target.value}")
        self.history.append(self.state)
        self.state = target
        if food is not None:
            self.food = food
        self.message = message
        _logger.info("Barcode %s: %s", self.barcode, target.value)

    def start(self, barcode: str) -> None:
        """Begin resolving a barcode from idle."""
        if self.state is not BarcodeState.IDLE:
            self.reset()
        self.barcode = barcode
        self.food = None
        self.transition(BarcodeState.SEARCHING_LOCAL)

    def reset(self) -> None:
        """Return to idle from an outcome state."""
        if self.state is BarcodeState.IDLE:
            return
        self.transition(BarcodeState.IDLE)

    @property
    def is_finished(self) -> bool:
        """True when the flow has reached an outcome."""
        return self.state in _OUTCOMES


@dataclass
class BarcodeResolver:
    """Drives a ``BarcodeFlow`` against the local catalog and remote lookup."""

    catalog: FoodCatalog
    lookup: ProductLookup

    async def resolve(self, barcode: str, flow: BarcodeFlow | None = None) -> BarcodeFlow:
        """Resolve a barcode and return the finished flow."""
        flow = flow or BarcodeFlow()
        flow.start(barcode)

        try:
            local = self.catalog.find_by_barcode(barcode)
        except DietTrackerError as exc:
            flow.transition(BarcodeState.ERROR, message=exc.message)
            return flow
        if local is not None:
            flow.transition(BarcodeState.FOUND, food=local)
            return flow

        flow.transition(
            BarcodeState.SEARCHING_REMOTE, message="Searching OpenFoodFacts database..."
        )
        try:
            product = await self.lookup.lookup(barcode)
        except Exception:
            _logger.exception("Barcode lookup failed", extra={"barcode": barcode})
            flow.transition(
                BarcodeState.ERROR,
                message="Error searching for barcode. Please try again.",
            )
            return flow
        if product is None:
            flow.transition(
                BarcodeState.NOT_FOUND,
                message=(
                    f"No nutrition data found for barcode {barcode}. "
                    "Would you like to add it manually?"
                ),
            )
            return flow

        try:
            created = self.catalog.create_food(product.as_food_payload())
        except DietTrackerError as exc:
            _logger.warning("Failed to save looked-up product %s: %s", barcode, exc)
            flow.transition(
                BarcodeState.ERROR,
                message="Food found but failed to save. Please try adding manually.",
            )
            return flow
        flow.transition(BarcodeState.AUTO_CREATED, food=created)
        return flow

    async def resolve_manual(
        self, raw_barcode: str, flow: BarcodeFlow | None = None
    ) -> BarcodeFlow:
        """Resolve a typed barcode, skipping camera capture."""
        barcode = (raw_barcode or "").strip()
        if not barcode:
            raise ValidationError("Please enter a barcode")
        return await self.resolve(barcode, flow)
