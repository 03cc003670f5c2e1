"""
Seller Analytics Endpoints.

Dashboard figures for a marketplace seller over a reporting window.
"""

from fastapi import APIRouter, Query

from cdi_platform.services.analytics import SellerAnalytics, Timeframe
from cdi_platform.server.deps import AnalyticsDep

router = APIRouter()


@router.get(
    "/sellers/{seller_id}",
    response_model=SellerAnalytics,
    summary="Get Seller Analytics",
    description="Aggregate a seller's listings created within the timeframe into sales stats, top categories, "
    "recent and best sales, and a six month revenue series.",
    response_description="Seller analytics.",
)
async def get_seller_analytics(
    seller_id: str,
    service: AnalyticsDep,
    timeframe: Timeframe = Query(default=Timeframe.MONTH, description="week, month, year or all"),
) -> SellerAnalytics:
    """
    Get analytics for a seller.

    - **seller_id**: Profile id of the seller.
    - **timeframe**: Only listings created in the last week, month (30 days) or year count; ``all`` disables the filter.
    """
    return await service.load(seller_id, timeframe)
