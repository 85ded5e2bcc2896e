from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from app.core import get_store, Settings
from app.services import StatsService, SpendStrategy
from app.stores import DocumentStore

router = APIRouter(tags=["Reporting"])


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/stats")
def record_stats(
    limit: Optional[int] = Query(None, ge=1),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """Record counts per type and the best sellers"""
    return {
        "types": StatsService.type_stats(store),
        "bestSelling": StatsService.best_selling_products(store, limit or settings.BEST_SELLING_LIMIT),
    }

@router.get("/products/stats")
def product_stats(
    limit: Optional[int] = Query(None, ge=1),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """Best-selling products with their product details"""
    return StatsService.best_selling_products(store, limit or settings.BEST_SELLING_LIMIT, with_details=True)

@router.get("/customers/stats")
def customer_stats(
    limit: Optional[int] = Query(None, ge=1),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings)
):
    """
    Top customers by spend plus the per-customer purchase breakdown.

    The two spend totals are configured separately:
    TOP_CUSTOMER_SPEND and CUSTOMER_STATS_SPEND (unit_cost | raw_cost).
    """
    return {
        "topCustomers": StatsService.top_customers(
            store,
            limit or settings.BEST_SELLING_LIMIT,
            SpendStrategy(settings.TOP_CUSTOMER_SPEND)
        ),
        "customers": StatsService.per_customer_stats(store, SpendStrategy(settings.CUSTOMER_STATS_SPEND)),
    }
