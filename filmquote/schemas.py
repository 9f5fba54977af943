import math
import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .rate_table import get_pricing_config

FrameType = Literal["vinyl", "metal", "rubberGasket", "wood"]
ShapeType = Literal["rectangle", "skylight", "custom"]
InstallType = Literal["interior", "exterior"]
LocationType = Literal["standard", "stairwell"]
ProjectType = Literal["residential", "commercial"]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class FrozenCamelModel(CamelModel):
    class Config:
        frozen = True


# --- Pricing engine input/output ---

class WindowInput(FrozenCamelModel):
    label: str = "Window"
    quantity: int = 1
    width_inches: float = 0.0
    height_inches: float = 0.0
    frame_type: Union[FrameType, Literal[""], None] = ""
    shape: Union[ShapeType, Literal[""], None] = ""
    install_type: InstallType = "interior"
    location: LocationType = "standard"
    top_above_15_feet: bool = Field(default=False, alias="topAbove15Feet")
    existing_film_removal: bool = False
    french_panes: bool = False
    film_type_id: Optional[str] = ""


class WindowLineItem(FrozenCamelModel):
    label: str
    sqft: float = 0.0
    base_price: float = 0.0
    per_sqft_adders: float = 0.0
    flat_adders: float = 0.0
    window_total: float = 0.0
    breakdown: List[str] = []


class ProjectEstimate(FrozenCamelModel):
    window_line_items: List[WindowLineItem] = []
    subtotal: float
    total_after_minimum: float
    tax_amount: float
    total_with_tax: float
    low: float
    high: float
    special_equipment_required: bool
    can_show_price_range: bool
    project_type: ProjectType


# --- Request models (form layer) ---

class WindowRequest(WindowInput):
    """
    A window as submitted by the estimate form.

    Coerces the loose values a browser form sends into what the pricing
    engine expects: blank numbers become 0, negative dimensions clamp to 0,
    missing selects become "". Quantity below 1 and dimensions above the
    rate table's maximum are rejected.
    """

    quantity: int = Field(default=1, ge=1)

    @field_validator("label", mode="before")
    @classmethod
    def default_label(cls, value):
        label = str(value or "").strip()
        return label or "Window"

    @field_validator("width_inches", "height_inches", mode="before")
    @classmethod
    def coerce_dimension(cls, value):
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            number = float(str(value).strip())
        except (ValueError, TypeError):
            return 0.0
        if not math.isfinite(number):
            return 0.0
        return max(0.0, number)

    @field_validator("width_inches", "height_inches")
    @classmethod
    def check_dimension_max(cls, value: float) -> float:
        max_inches = get_pricing_config().dimension_max_inches
        if value > max_inches:
            raise ValueError(f"Max {max_inches:g} in")
        return value

    @field_validator("frame_type", "shape", "film_type_id", mode="before")
    @classmethod
    def blank_select(cls, value):
        if value is None:
            return ""
        return str(value).strip()


class EstimateRequest(CamelModel):
    project_type: ProjectType = "residential"
    windows: List[WindowRequest] = Field(min_length=1)


class LeadInfo(CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    zip_code: str = ""
    notes: str = ""
    sms_consent: bool = False

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = value.strip()
        if value and not _EMAIL_RE.match(value):
            raise ValueError("Invalid email")
        return value


class LeadSubmission(CamelModel):
    project_type: ProjectType = "residential"
    lead: LeadInfo = Field(default_factory=LeadInfo)
    # Client-side estimate is accepted for compatibility but never trusted
    estimate: Optional[dict] = None
    windows: List[WindowRequest] = Field(min_length=1)
