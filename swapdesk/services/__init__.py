"""Service layer helpers"""

from .prices import PriceService, get_price_service, price_service

__all__ = [
    "PriceService",
    "price_service",
    "get_price_service",
]
