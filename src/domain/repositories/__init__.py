"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/ and are wired at the
application boundary via dependency injection.
"""

from .api_keys import ApiKeyRepository
from .market_data import MarketDataSource

__all__ = [
    "ApiKeyRepository",
    "MarketDataSource",
]
