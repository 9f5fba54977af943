"""
Pricing Engine: window film estimates.

Pure math, no I/O. Window inputs in, priced line items and a project
estimate out. The rate table is injected; when none is given the
process-wide table from rate_table.get_pricing_config() is used.

Per window:   (w + trim) × (h + trim) / 144 sqft × film rate
              + per-sqft adders + flat adders, × quantity
Per project:  Σ windows → minimum floor → NJ tax (commercial) → low/high range
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from .rate_table import RateTable, get_pricing_config
from .schemas import ProjectEstimate, WindowInput, WindowLineItem

logger = logging.getLogger(__name__)

INCHES_PER_SQFT = 144
DEFAULT_PRICE_PER_SQFT = 15.0   # Unknown film type ids price at this rate
RANGE_SPREAD = 1.15             # high end of the displayed range


def inches_to_sqft(width_inches: float, height_inches: float) -> float:
    """Square footage from dimensions in inches."""
    return (width_inches * height_inches) / INCHES_PER_SQFT


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero on the given decimal place (not banker's rounding)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_nearest(value: float, nearest: float) -> float:
    """Round to the nearest multiple of `nearest`, halves going up."""
    step = Decimal(str(nearest))
    multiples = (Decimal(str(value)) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(multiples * step)


def _format_rate(value: float) -> str:
    # 15.0 -> "15", 2.5 -> "2.5"
    return f"{value:g}"


def _display_label(label: str, quantity: int) -> str:
    return f"{label} (×{quantity})" if quantity > 1 else label


# --- Completeness gate ---

@dataclass(frozen=True)
class CompleteWindow:
    """A window with everything needed to price it."""
    window: WindowInput
    film_type_id: str
    frame_type: str
    shape: str
    width_inches: float
    height_inches: float
    quantity: int


@dataclass(frozen=True)
class IncompleteWindow:
    """A partially filled window: shown as a placeholder, priced at zero."""
    window: WindowInput


def classify_window(window: WindowInput) -> Union[CompleteWindow, IncompleteWindow]:
    film_type_id = (window.film_type_id or "").strip()
    frame_type = window.frame_type or ""
    shape = window.shape or ""
    width = window.width_inches or 0
    height = window.height_inches or 0

    if not film_type_id or not frame_type or not shape or width <= 0 or height <= 0:
        return IncompleteWindow(window=window)

    return CompleteWindow(
        window=window,
        film_type_id=film_type_id,
        frame_type=frame_type,
        shape=shape,
        width_inches=width,
        height_inches=height,
        quantity=max(1, window.quantity),
    )


class PricingEngine:
    """
    Turns window descriptions into line items and a project estimate.

    Stateless apart from the rate table it was built with, so one instance
    can be shared across threads.
    """

    def __init__(self, rates: Optional[RateTable] = None):
        self.rates = rates if rates is not None else get_pricing_config()

    # --- Line items ---

    def compute_window_line_item(self, window: WindowInput,
                                 project_type: str = "residential") -> WindowLineItem:
        """
        Price one window (all `quantity` identical units together).

        Incomplete windows come back as a zeroed line item with an empty
        breakdown, so a half-filled form still lists the window without
        moving the totals.
        """
        classified = classify_window(window)
        if isinstance(classified, IncompleteWindow):
            return WindowLineItem(label=_display_label(window.label, window.quantity))

        rates = self.rates
        qty = classified.quantity
        trim = rates.trim_inches
        sqft = inches_to_sqft(classified.width_inches + trim, classified.height_inches + trim)

        rate_per_sqft = self._base_rate(classified.film_type_id, project_type)
        base_price = sqft * rate_per_sqft

        per_sqft_total, per_sqft_lines = self._per_sqft_adders(classified, sqft)
        flat_per_unit, flat_lines = self._flat_adders(classified)

        single_window_total = base_price + per_sqft_total + flat_per_unit
        qty_suffix = f" × {qty}" if qty > 1 else ""

        breakdown = [
            f"Base ({sqft:.2f} sqft × ${_format_rate(rate_per_sqft)}{qty_suffix}): "
            f"${base_price * qty:.2f}"
        ]
        breakdown.extend(line + qty_suffix for line in per_sqft_lines)
        breakdown.extend(flat_lines)

        return WindowLineItem(
            label=_display_label(window.label, qty),
            sqft=round_half_up(sqft),
            base_price=round_half_up(base_price * qty),
            per_sqft_adders=round_half_up(per_sqft_total * qty),
            flat_adders=round_half_up(flat_per_unit * qty),
            window_total=round_half_up(single_window_total * qty),
            breakdown=breakdown,
        )

    def _base_rate(self, film_type_id: str, project_type: str) -> float:
        """Film price per sqft, plus the commercial adder for commercial jobs."""
        price = self.rates.film_price(film_type_id)
        if price is None:
            price = DEFAULT_PRICE_PER_SQFT
        if project_type == "commercial":
            price += self.rates.commercial_price_per_sqft_adder
        return price

    def _per_sqft_adders(self, window: CompleteWindow, sqft: float) -> tuple[float, list[str]]:
        """
        Surcharges billed by area. Order here is the order on the breakdown:
        wood, skylight, custom shape, exterior, film removal, french panes.
        """
        adders = self.rates.per_sqft_adders
        source = window.window
        total = 0.0
        lines = []

        applicable = []
        if window.frame_type == "wood":
            applicable.append((adders.wood_frame, f"Wood frame: ${_format_rate(adders.wood_frame)}/sqft"))
        if window.shape == "skylight":
            applicable.append((adders.skylight, f"Skylight: ${_format_rate(adders.skylight)}/sqft"))
        if window.shape == "custom":
            applicable.append((adders.custom_shape, f"Custom shape: ${_format_rate(adders.custom_shape)}/sqft"))
        if source.install_type == "exterior":
            applicable.append((
                adders.exterior_install,
                f"Exterior install: ${_format_rate(adders.exterior_install)}/sqft",
            ))
        if source.existing_film_removal:
            applicable.append((
                adders.existing_film_removal_avg,
                f"Existing film removal: ${_format_rate(adders.existing_film_removal_min)}"
                f"–${_format_rate(adders.existing_film_removal_max)}/sqft",
            ))
        if source.french_panes:
            applicable.append((adders.french_panes, f"French panes: ${_format_rate(adders.french_panes)}/sqft"))

        for rate, line in applicable:
            amount = sqft * rate
            if amount > 0:
                total += amount
                lines.append(line)

        return total, lines

    def _flat_adders(self, window: CompleteWindow) -> tuple[float, list[str]]:
        """Per-unit surcharges that do not depend on area."""
        if window.window.location != "stairwell":
            return 0.0, []
        per_unit = self.rates.flat_adders.stairwell_per_window
        if per_unit <= 0:
            return 0.0, []
        return per_unit, [f"Stairwell access: ${_format_rate(per_unit)} × {window.quantity}"]

    # --- Project estimate ---

    def compute_project_estimate(self, windows: Iterable[WindowInput],
                                 project_type: str = "residential") -> ProjectEstimate:
        """
        Price every window and fold them into one estimate.

        The minimum is applied once to the project, never per window. Tax is
        commercial only. Windows more than 15 ft up still get priced, but the
        estimate is flagged so the range is not shown to the customer.
        """
        windows = list(windows)
        rates = self.rates

        special_equipment_required = any(w.top_above_15_feet for w in windows)
        line_items = [self.compute_window_line_item(w, project_type) for w in windows]

        subtotal = sum(item.window_total for item in line_items)
        total_after_minimum = max(subtotal, rates.minimum_project_investment)

        tax_amount = total_after_minimum * rates.nj_tax_rate if project_type == "commercial" else 0.0
        total_with_tax = total_after_minimum + tax_amount

        low = round_to_nearest(total_with_tax, rates.round_to_nearest)
        high = round_to_nearest(total_with_tax * RANGE_SPREAD, rates.round_to_nearest)

        logger.debug(
            "Estimate: %d windows, %s, subtotal $%.2f, range $%s-$%s%s",
            len(windows), project_type, subtotal, low, high,
            " (special equipment)" if special_equipment_required else "",
        )

        return ProjectEstimate(
            window_line_items=line_items,
            subtotal=round_half_up(subtotal),
            total_after_minimum=round_half_up(total_after_minimum),
            tax_amount=round_half_up(tax_amount),
            total_with_tax=round_half_up(total_with_tax),
            low=low,
            high=high,
            special_equipment_required=special_equipment_required,
            can_show_price_range=not special_equipment_required,
            project_type=project_type,
        )


def compute_window_line_item(window: WindowInput, project_type: str = "residential",
                             rates: Optional[RateTable] = None) -> WindowLineItem:
    return PricingEngine(rates).compute_window_line_item(window, project_type)


def compute_project_estimate(windows: Iterable[WindowInput], project_type: str = "residential",
                             rates: Optional[RateTable] = None) -> ProjectEstimate:
    return PricingEngine(rates).compute_project_estimate(windows, project_type)
