"""Quantity to grams conversion."""

import logging
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)

DEFAULT_UNIT_GRAMS: dict[str, float] = {
    "g": 1,
    "gram": 1,
    "grams": 1,
    "kg": 1000,
    "kilogram": 1000,
    "kilograms": 1000,
    "oz": 28.35,
    "ounce": 28.35,
    "ounces": 28.35,
    "lb": 453.6,
    "lbs": 453.6,
    "pound": 453.6,
    "pounds": 453.6,
    "cup": 240,
    "cups": 240,
    "tbsp": 15,
    "tablespoon": 15,
    "tablespoons": 15,
    "tsp": 5,
    "teaspoon": 5,
    "teaspoons": 5,
    "slice": 30,
    "slices": 30,
    "piece": 150,
    "pieces": 150,
    "medium": 150,
    "large": 200,
    "small": 100,
    # corn
    "ear": 90,
    "ears": 90,
}

UNKNOWN_UNIT_GRAMS = 100.0


@dataclass
class QuantityNormalizer:
    """Converts a quantity in an arbitrary unit to grams.

    Unknown units count as 100g each so that noisy input still produces a
    number; callers that need precision must pass grams.
    """

    unit_grams: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_UNIT_GRAMS)
    )
    unknown_unit_grams: float = UNKNOWN_UNIT_GRAMS

    def normalize(self, quantity: float, unit: str | None) -> float:
        """Return ``quantity`` expressed in grams, unrounded."""
        key = (unit or "").strip().lower()
        factor = self.unit_grams.get(key)
        if factor is None:
            _logger.debug("Unknown unit %r, assuming %sg", unit, self.unknown_unit_grams)
            factor = self.unknown_unit_grams
        return quantity * factor
