import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .rate_table import get_pricing_config
from .routers import estimate

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("filmquote")

app = FastAPI(
    title="Window Film Estimate",
    description=f"Instant window film estimates for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimate.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}


@app.on_event("startup")
def load_rates():
    """Load the rate table up front so a bad pricing.json fails at boot, not on first request."""
    rates = get_pricing_config()
    logger.info("Pricing ready: %d film types", len(rates.film_types))
