"""
Shared test fixtures: test client, a baseline window, an explicit rate table.
"""

import pytest
from fastapi.testclient import TestClient

from filmquote.main import app
from filmquote.rate_table import FilmType, FlatAdders, PerSqftAdders, RateTable
from filmquote.schemas import WindowInput


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def rates():
    """Rate table with the production numbers, built in code so tests don't depend on the JSON."""
    return RateTable(
        film_types={
            "solar-ceramic": FilmType(label="Solar control (ceramic)", price_per_sqft=15),
            "solar-reflective": FilmType(label="Solar control (reflective)", price_per_sqft=12),
        },
        per_sqft_adders=PerSqftAdders(
            wood_frame=1,
            skylight=3,
            custom_shape=3,
            exterior_install=3,
            existing_film_removal_min=2,
            existing_film_removal_max=3,
            french_panes=2,
        ),
        flat_adders=FlatAdders(stairwell_per_window=150),
        minimum_project_investment=350,
        round_to_nearest=10,
        commercial_price_per_sqft_adder=1,
        nj_tax_rate=0.06625,
    )


@pytest.fixture
def base_window():
    """36" × 48" solar-ceramic vinyl rectangle, interior, standard location."""
    return WindowInput(
        label="Test",
        quantity=1,
        width_inches=36,
        height_inches=48,
        frame_type="vinyl",
        shape="rectangle",
        install_type="interior",
        location="standard",
        top_above_15_feet=False,
        film_type_id="solar-ceramic",
    )
