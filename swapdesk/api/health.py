from fastapi import APIRouter, Depends
from typing import Dict, Any

from ..services.prices import PriceService, get_price_service

router = APIRouter()


@router.get("/healthz")
async def health_check(prices: PriceService = Depends(get_price_service)) -> Dict[str, Any]:
    """Health check endpoint that verifies price provider status"""

    provider_status = {}
    for provider in prices.providers:
        provider_status[provider.name] = await provider.health_check()

    # Only one source is needed for prices; an empty price table is still usable.
    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] == "healthy"
    )

    return {
        "status": "healthy" if available_providers > 0 else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status)
    }
