"""
Rate table: the pricing configuration behind every estimate.

Loaded once per process from data/pricing.json (or PRICING_CONFIG_PATH),
validated, and handed out read-only. The pricing engine never loads it
itself; it receives a RateTable, falling back to get_pricing_config().
"""

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, Field, NonNegativeFloat, PositiveFloat, field_validator
from pydantic.alias_generators import to_camel

from .config import settings

logger = logging.getLogger(__name__)

# Fallbacks for entries older pricing.json files may not carry
DEFAULT_FILM_REMOVAL_MIN = 2.0
DEFAULT_FILM_REMOVAL_MAX = 3.0
DEFAULT_FRENCH_PANES = 2.0
DEFAULT_COMMERCIAL_ADDER = 1.0
DEFAULT_NJ_TAX_RATE = 0.06625


class _RateModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class FilmType(_RateModel):
    label: str
    price_per_sqft: NonNegativeFloat


class PerSqftAdders(_RateModel):
    wood_frame: NonNegativeFloat = 0.0
    skylight: NonNegativeFloat = 0.0
    custom_shape: NonNegativeFloat = 0.0
    exterior_install: NonNegativeFloat = 0.0
    existing_film_removal_min: NonNegativeFloat = DEFAULT_FILM_REMOVAL_MIN
    existing_film_removal_max: NonNegativeFloat = DEFAULT_FILM_REMOVAL_MAX
    french_panes: NonNegativeFloat = DEFAULT_FRENCH_PANES

    @property
    def existing_film_removal_avg(self) -> float:
        """Removal is quoted as a min/max band; pricing uses the midpoint."""
        return (self.existing_film_removal_min + self.existing_film_removal_max) / 2


class FlatAdders(_RateModel):
    stairwell_per_window: NonNegativeFloat = 0.0


class RateTable(_RateModel):
    film_types: Mapping[str, FilmType] = Field(default_factory=dict, validate_default=True)
    per_sqft_adders: PerSqftAdders = Field(default_factory=PerSqftAdders)
    flat_adders: FlatAdders = Field(default_factory=FlatAdders)

    minimum_project_investment: NonNegativeFloat = 350.0
    round_to_nearest: PositiveFloat = 10.0
    commercial_price_per_sqft_adder: NonNegativeFloat = DEFAULT_COMMERCIAL_ADDER
    nj_tax_rate: NonNegativeFloat = DEFAULT_NJ_TAX_RATE

    # Form limits, enforced by the request layer rather than the engine
    dimension_min_inches: NonNegativeFloat = 6.0
    dimension_max_inches: NonNegativeFloat = 200.0
    require_lead_before_estimate: bool = False

    # Informational; the engine's spread is fixed (see pricing_engine.RANGE_SPREAD)
    estimate_range_low_multiplier: NonNegativeFloat = 1.0
    estimate_range_high_multiplier: NonNegativeFloat = 1.15

    # Material overage added to each dimension before area conversion
    trim_inches: NonNegativeFloat = 1.0

    @field_validator("film_types")
    @classmethod
    def read_only_film_types(cls, value):
        return MappingProxyType(dict(value))

    def film_price(self, film_type_id: str) -> Optional[float]:
        """Price per sqft for a film type, or None if the id is not in the table."""
        film = self.film_types.get(film_type_id)
        return film.price_per_sqft if film is not None else None


# --- Process-wide accessor ---

_RATE_TABLE: Optional[RateTable] = None
_RATE_TABLE_LOCK = threading.Lock()


def load_rate_table(path) -> RateTable:
    """Read and validate a rate table JSON file."""
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"No pricing config found at {filepath}")

    with open(filepath) as f:
        raw = json.load(f)

    table = RateTable.model_validate(raw)
    logger.info(
        "Loaded rate table from %s (%d film types, minimum $%s)",
        filepath, len(table.film_types), table.minimum_project_investment,
    )
    return table


def get_pricing_config() -> RateTable:
    """The process-wide rate table. Loaded on first call, cached after."""
    global _RATE_TABLE
    if _RATE_TABLE is None:
        with _RATE_TABLE_LOCK:
            if _RATE_TABLE is None:
                _RATE_TABLE = load_rate_table(settings.PRICING_CONFIG_PATH)
    return _RATE_TABLE


def reload_pricing_config() -> RateTable:
    """Read the table from disk again. The cached table is kept if the new one fails to load."""
    global _RATE_TABLE
    table = load_rate_table(settings.PRICING_CONFIG_PATH)
    with _RATE_TABLE_LOCK:
        _RATE_TABLE = table
    return table
