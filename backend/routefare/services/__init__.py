"""Services package for the routefare pricing system."""

from .fare_calculator import (
    get_pricing_engine,
    PricingEngineInterface,
    IndexBasedPricingEngine,
    LookupPricingEngine
)
from .tariff import (
    calculate_tariff,
    calculate_same_route_price,
    calculate_different_route_price
)

__all__ = [
    'get_pricing_engine',
    'PricingEngineInterface',
    'IndexBasedPricingEngine',
    'LookupPricingEngine',
    'calculate_tariff',
    'calculate_same_route_price',
    'calculate_different_route_price'
]
