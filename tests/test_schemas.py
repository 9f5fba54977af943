"""
Request model tests: what the form layer coerces and what it rejects.
"""

import pytest
from pydantic import ValidationError

from filmquote.schemas import EstimateRequest, LeadInfo, WindowInput, WindowRequest


def test_defaults():
    window = WindowRequest()
    assert window.label == "Window"
    assert window.quantity == 1
    assert window.install_type == "interior"
    assert window.location == "standard"
    assert window.top_above_15_feet is False
    assert window.frame_type == ""


def test_accepts_camel_case_payload():
    window = WindowRequest.model_validate({
        "label": "Den", "widthInches": 30, "heightInches": 40, "frameType": "rubberGasket",
        "shape": "custom", "topAbove15Feet": True, "filmTypeId": "solar-ceramic",
    })
    assert window.width_inches == 30
    assert window.frame_type == "rubberGasket"
    assert window.top_above_15_feet is True


@pytest.mark.parametrize("raw,expected", [
    (None, 0),
    ("", 0),
    ("abc", 0),
    ("nan", 0),
    ("inf", 0),
    (-12, 0),
    ("36.5", 36.5),
    (48, 48),
])
def test_dimension_coercion(raw, expected):
    assert WindowRequest(width_inches=raw).width_inches == expected


def test_dimension_over_max_rejected():
    with pytest.raises(ValidationError) as exc:
        WindowRequest(height_inches=201)
    assert "Max 200 in" in str(exc.value)


def test_quantity_below_one_rejected():
    with pytest.raises(ValidationError):
        WindowRequest(quantity=0)


def test_blank_selects_normalised():
    window = WindowRequest(frame_type=None, shape=None, film_type_id="  solar-ceramic ")
    assert window.frame_type == ""
    assert window.shape == ""
    assert window.film_type_id == "solar-ceramic"


def test_unknown_frame_rejected():
    with pytest.raises(ValidationError):
        WindowRequest(frame_type="aluminium")


def test_request_windows_are_engine_inputs():
    request = EstimateRequest.model_validate({"windows": [{"label": "A"}]})
    assert request.project_type == "residential"
    assert isinstance(request.windows[0], WindowInput)


def test_window_input_is_frozen():
    window = WindowInput(label="A")
    with pytest.raises(ValidationError):
        window.label = "B"


@pytest.mark.parametrize("email", ["", "a@b.co", " pat@example.com "])
def test_lead_email_accepted(email):
    assert LeadInfo(email=email).email == email.strip()


@pytest.mark.parametrize("email", ["pat", "pat@", "pat@example", "p at@example.com"])
def test_lead_email_rejected(email):
    with pytest.raises(ValidationError):
        LeadInfo(email=email)
