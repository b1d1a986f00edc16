"""
Pricing API — thin HTTP surface over the shared pricing aggregator.

POST /api/pricing/calculate  — Price a configuration snapshot and publish it
GET  /api/pricing/current    — Last calculated ledger
GET  /api/pricing/summary    — Counts and totals of the last calculated ledger
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from ..pricing_engine import PricingAggregator, pricing_aggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pricing", tags=["pricing"])

PRICING_FAILED_MESSAGE = "Could not price this order. Please retry or contact support."


def get_aggregator() -> PricingAggregator:
    return pricing_aggregator


@router.post("/calculate")
def calculate_pricing(
    snapshot: dict = Body(...),
    topic: Optional[str] = None,
    aggregator: PricingAggregator = Depends(get_aggregator),
):
    """Recalculate pricing for the snapshot and notify subscribers."""
    try:
        return aggregator.recalculate(snapshot, topic=topic, trigger="api")
    except (TypeError, ValueError) as e:
        logger.warning("Rejected pricing snapshot: %s", e)
        raise HTTPException(status_code=422, detail=PRICING_FAILED_MESSAGE)


@router.get("/current")
def get_current_pricing(aggregator: PricingAggregator = Depends(get_aggregator)):
    ledger = aggregator.get_current()
    if ledger is None:
        raise HTTPException(status_code=404, detail="No pricing calculated yet")
    return ledger


@router.get("/summary")
def get_pricing_summary(aggregator: PricingAggregator = Depends(get_aggregator)):
    summary = aggregator.get_summary()
    if summary is None:
        raise HTTPException(status_code=404, detail="No pricing calculated yet")
    return summary
