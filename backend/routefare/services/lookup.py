"""Lookup-based pricing from flat per-stop prices."""

import logging
import math
from typing import Optional

from routefare.config import settings
from routefare.models import (
    LookupPriceBreakdown,
    PricingResult,
    SameRoutePriceBreakdown,
    ValidationResult,
)
from routefare.network import RouteNetwork, StopPriceRegistry, stop_key

logger = logging.getLogger(__name__)

MODE = "lookup"


def _fmt(value: float) -> str:
    return f"{value:g}"


def calculate_base_amount(pickup_price: float, dropoff_price: float, divisor: float) -> float:
    """Amount before the fixed fee: (pickup + dropoff) / divisor."""
    return (pickup_price + dropoff_price) / divisor


def calculate_lookup_total(
    pickup_price: float,
    dropoff_price: float,
    divisor: float,
    fixed_fee: Optional[float] = None,
) -> int:
    """Truncate (pickup + dropoff) / divisor + fixed_fee toward zero."""
    if fixed_fee is None:
        fixed_fee = settings.LOOKUP_FIXED_FEE
    return math.trunc(calculate_base_amount(pickup_price, dropoff_price, divisor) + fixed_fee)


def get_pricing_formula(
    pickup_price: float,
    dropoff_price: float,
    divisor: float,
    fixed_fee: float,
    total: int,
) -> str:
    """Human-readable arithmetic, e.g. "(200 + 250) / 1.8 + 50 = 300"."""
    return (
        f"({_fmt(pickup_price)} + {_fmt(dropoff_price)}) / {_fmt(divisor)} "
        f"+ {_fmt(fixed_fee)} = {total}"
    )


def validate_same_route_inputs(
    registry: StopPriceRegistry,
    route_name: str,
    pickup_stop: str,
    dropoff_stop: str,
) -> ValidationResult:
    """Check that a same-route trip can be priced from the route-scoped table."""
    if not route_name:
        return ValidationResult(is_valid=False, error="Route name is required")
    if not pickup_stop:
        return ValidationResult(is_valid=False, error="Pickup stop name is required")
    if not dropoff_stop:
        return ValidationResult(is_valid=False, error="Dropoff stop name is required")

    if not registry.has_route(route_name):
        return ValidationResult(
            is_valid=False, error=f'Route "{route_name}" not found in pricing data'
        )
    if registry.find_route_stop_price(route_name, pickup_stop) is None:
        return ValidationResult(
            is_valid=False,
            error=f'Pickup stop "{pickup_stop}" not found in {route_name}',
        )
    if registry.find_route_stop_price(route_name, dropoff_stop) is None:
        return ValidationResult(
            is_valid=False,
            error=f'Dropoff stop "{dropoff_stop}" not found in {route_name}',
        )
    return ValidationResult(is_valid=True)


def validate_different_route_inputs(
    registry: StopPriceRegistry,
    pickup_stop: str,
    dropoff_stop: str,
) -> ValidationResult:
    """Check that a cross-route trip can be priced from the route-agnostic table."""
    if not pickup_stop:
        return ValidationResult(is_valid=False, error="Pickup stop name is required")
    if not dropoff_stop:
        return ValidationResult(is_valid=False, error="Dropoff stop name is required")

    if not registry.has_stop(pickup_stop):
        return ValidationResult(
            is_valid=False,
            error=f'Pickup stop "{pickup_stop}" not found in pricing data',
        )
    if not registry.has_stop(dropoff_stop):
        return ValidationResult(
            is_valid=False,
            error=f'Dropoff stop "{dropoff_stop}" not found in pricing data',
        )
    return ValidationResult(is_valid=True)


def _invalid(error: str, is_same_route: bool, breakdown=None) -> PricingResult:
    return PricingResult(
        is_valid=False,
        price=0,
        error=error,
        mode=MODE,
        is_same_route=is_same_route,
        currency=settings.CURRENCY,
        breakdown=breakdown,
    )


def calculate_lookup_same_route_price(
    registry: StopPriceRegistry,
    route_name: str,
    pickup_stop: str,
    dropoff_stop: str,
    network: Optional[RouteNetwork] = None,
) -> PricingResult:
    """
    Price a same-route trip: trunc((pickup + dropoff) / 1.8 + 50).

    When a network is given, the stop positions are reported as
    from_index/to_index on the breakdown.
    """
    validation = validate_same_route_inputs(registry, route_name, pickup_stop, dropoff_stop)
    if not validation.is_valid:
        logger.warning("Same-route lookup failed: %s", validation.error)
        return _invalid(validation.error, True)

    if stop_key(pickup_stop) == stop_key(dropoff_stop):
        index = (network.resolve_stop(route_name, pickup_stop) if network else None) or 0
        return _invalid(
            "Pickup and dropoff stops cannot be the same",
            True,
            SameRoutePriceBreakdown(price=0, breakdown=[], from_index=index, to_index=index),
        )

    pickup_price = registry.find_route_stop_price(route_name, pickup_stop)
    dropoff_price = registry.find_route_stop_price(route_name, dropoff_stop)
    divisor = settings.LOOKUP_SAME_ROUTE_DIVISOR
    fixed_fee = settings.LOOKUP_FIXED_FEE
    total = calculate_lookup_total(pickup_price, dropoff_price, divisor, fixed_fee)

    from_index = to_index = None
    if network is not None:
        from_index = network.resolve_stop(route_name, pickup_stop)
        to_index = network.resolve_stop(route_name, dropoff_stop)

    breakdown = LookupPriceBreakdown(
        is_same_route=True,
        pickup_price=pickup_price,
        dropoff_price=dropoff_price,
        divisor=divisor,
        base_amount=round(calculate_base_amount(pickup_price, dropoff_price, divisor), 2),
        fixed_fee=fixed_fee,
        transfer_fee=0,
        price=total,
        formula=get_pricing_formula(pickup_price, dropoff_price, divisor, fixed_fee, total),
        from_index=from_index,
        to_index=to_index,
    )
    return PricingResult(
        is_valid=True,
        price=total,
        mode=MODE,
        is_same_route=True,
        currency=settings.CURRENCY,
        estimated_delivery_time=settings.SAME_ROUTE_DELIVERY_TIME,
        breakdown=breakdown,
    )


def calculate_lookup_different_route_price(
    registry: StopPriceRegistry,
    pickup_stop: str,
    dropoff_stop: str,
) -> PricingResult:
    """
    Price a cross-route trip: trunc((pickup + dropoff) / 2 + 50).

    The transfer fee is reported on the breakdown but is not added to the
    price.
    """
    validation = validate_different_route_inputs(registry, pickup_stop, dropoff_stop)
    if not validation.is_valid:
        logger.warning("Cross-route lookup failed: %s", validation.error)
        return _invalid(validation.error, False)

    pickup_price = registry.find_stop_price(pickup_stop)
    dropoff_price = registry.find_stop_price(dropoff_stop)
    divisor = settings.LOOKUP_DIFFERENT_ROUTE_DIVISOR
    fixed_fee = settings.LOOKUP_FIXED_FEE
    total = calculate_lookup_total(pickup_price, dropoff_price, divisor, fixed_fee)

    breakdown = LookupPriceBreakdown(
        is_same_route=False,
        pickup_price=pickup_price,
        dropoff_price=dropoff_price,
        divisor=divisor,
        base_amount=round(calculate_base_amount(pickup_price, dropoff_price, divisor), 2),
        fixed_fee=fixed_fee,
        transfer_fee=settings.LOOKUP_TRANSFER_FEE,
        price=total,
        formula=get_pricing_formula(pickup_price, dropoff_price, divisor, fixed_fee, total),
    )
    return PricingResult(
        is_valid=True,
        price=total,
        mode=MODE,
        is_same_route=False,
        currency=settings.CURRENCY,
        estimated_delivery_time=settings.DIFFERENT_ROUTE_DELIVERY_TIME,
        breakdown=breakdown,
    )
