from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable


class Provider(ABC):
    """Base provider interface"""
    
    name: str
    timeout_s: int = 10
    
    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass
    
    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class PriceProvider(Provider):
    """Provider for token price data"""
    
    @abstractmethod
    async def get_prices(self, symbols: Iterable[str]) -> Dict[str, float]:
        """Get current USD prices keyed by symbol.

        Symbols the source cannot quote are left out. Implementations return
        an empty dict instead of raising on transport or payload errors.
        """
        pass
