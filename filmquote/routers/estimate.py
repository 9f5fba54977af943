"""
Estimate API: the HTTP shell around the pricing engine.

GET  /api/pricing-config    Public rate table subset for building the form
POST /api/estimate/preview  Price a list of windows, return the estimate
POST /api/estimate          Lead submission: re-price, log, acknowledge
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..lead_log import log_lead
from ..pricing_engine import PricingEngine
from ..rate_table import get_pricing_config
from ..schemas import EstimateRequest, LeadSubmission, ProjectEstimate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["estimate"])


@router.get("/pricing-config")
def pricing_config():
    rates = get_pricing_config()
    return {
        "filmTypes": [
            {"id": film_id, "label": film.label, "pricePerSqft": film.price_per_sqft}
            for film_id, film in rates.film_types.items()
        ],
        "dimensionMinInches": rates.dimension_min_inches,
        "dimensionMaxInches": rates.dimension_max_inches,
        "requireLeadBeforeEstimate": rates.require_lead_before_estimate,
        "minimumProjectInvestment": rates.minimum_project_investment,
    }


@router.post("/estimate/preview", response_model=ProjectEstimate)
def preview_estimate(request: EstimateRequest):
    engine = PricingEngine()
    return engine.compute_project_estimate(request.windows, request.project_type)


@router.post("/estimate")
def submit_estimate(submission: LeadSubmission):
    """
    Accept a lead with its windows.

    The estimate is recomputed from the windows; whatever the client sent
    in `estimate` is ignored.
    """
    try:
        engine = PricingEngine()
        estimate = engine.compute_project_estimate(submission.windows, submission.project_type)
        log_lead(submission, estimate)
    except Exception:
        logger.exception("Lead submission failed")
        return JSONResponse(status_code=500, content={"ok": False, "error": "Submission failed"})
    return {"ok": True}
