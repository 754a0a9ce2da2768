"""Pricing engines: resolve route and stop names, then price the trip."""

import logging
from typing import Dict, Optional, Protocol, runtime_checkable
from abc import ABC, abstractmethod

from routefare.models import PricingResult, QuoteRequest
from routefare.config import settings
from routefare.network import (
    RouteNetwork,
    StopPriceRegistry,
    get_price_registry,
    get_route_network,
)
from routefare.services.lookup import (
    calculate_lookup_different_route_price,
    calculate_lookup_same_route_price,
)
from routefare.services.tariff import (
    calculate_different_route_price,
    calculate_same_route_price,
)

logger = logging.getLogger(__name__)


def estimate_delivery_time(pickup_route: str, dropoff_route: str) -> str:
    """Rough delivery window shown next to a quote."""
    if RouteNetwork.is_same_route(pickup_route, dropoff_route):
        return settings.SAME_ROUTE_DELIVERY_TIME
    return settings.DIFFERENT_ROUTE_DELIVERY_TIME


@runtime_checkable
class PricingEngineInterface(Protocol):
    """
    Interface for trip pricing.
    Callers depend on this protocol, not on a concrete pricing model.
    """

    mode: str

    def price_same_route(self, route_name: str, pickup_stop: str, dropoff_stop: str) -> PricingResult:
        """Price a trip between two stops on one route."""
        ...

    def price_different_route(
        self, pickup_route: str, pickup_stop: str, dropoff_route: str, dropoff_stop: str
    ) -> PricingResult:
        """Price a trip between stops on two different routes."""
        ...

    def quote(self, request: QuoteRequest) -> PricingResult:
        """Price a trip, choosing same-route or cross-route pricing."""
        ...


class BasePricingEngine(ABC):
    """Abstract base class for pricing engines."""

    mode: str = ""

    def _invalid(self, error: str, is_same_route: Optional[bool] = None, breakdown=None) -> PricingResult:
        return PricingResult(
            is_valid=False,
            price=0,
            error=error,
            mode=self.mode,
            is_same_route=is_same_route,
            currency=settings.CURRENCY,
            breakdown=breakdown,
        )

    @abstractmethod
    def price_same_route(self, route_name: str, pickup_stop: str, dropoff_stop: str) -> PricingResult:
        """
        Price a trip between two stops on one route.
        Must be implemented by subclasses.
        """
        pass

    @abstractmethod
    def price_different_route(
        self, pickup_route: str, pickup_stop: str, dropoff_route: str, dropoff_stop: str
    ) -> PricingResult:
        """
        Price a trip between stops on two different routes.
        Must be implemented by subclasses.
        """
        pass

    def quote(self, request: QuoteRequest) -> PricingResult:
        """
        Price a trip from route and stop names.

        Route names are compared case-insensitively to decide between
        same-route and cross-route pricing.
        """
        if not all((request.pickup_route, request.pickup_stop,
                    request.dropoff_route, request.dropoff_stop)):
            return self._invalid("Please select both pickup and dropoff locations")

        if RouteNetwork.is_same_route(request.pickup_route, request.dropoff_route):
            return self.price_same_route(
                request.pickup_route, request.pickup_stop, request.dropoff_stop
            )
        return self.price_different_route(
            request.pickup_route, request.pickup_stop,
            request.dropoff_route, request.dropoff_stop,
        )


class IndexBasedPricingEngine(BasePricingEngine):
    """
    Prices trips from stop positions and each route's tariff parameters.
    Stop names are resolved to 1-based indices on the route network.
    """

    mode = "index"

    def __init__(self, network: RouteNetwork, transfer_fee: Optional[float] = None):
        self.network = network
        self.transfer_fee = settings.TRANSFER_FEE if transfer_fee is None else transfer_fee

    def _resolve(self, route_name: str, stop_name: str, role: str):
        route = self.network.get_route(route_name)
        if route is None:
            return None, None, f'Route "{route_name}" not found'
        index = route.index_of(stop_name)
        if index is None:
            return route, None, f'{role} stop "{stop_name}" not found in {route.name}'
        return route, index, None

    def price_same_route(self, route_name: str, pickup_stop: str, dropoff_stop: str) -> PricingResult:
        route, pickup_index, error = self._resolve(route_name, pickup_stop, "Pickup")
        if error is None:
            _, dropoff_index, error = self._resolve(route_name, dropoff_stop, "Dropoff")
        if error is not None:
            logger.warning("Same-route pricing failed: %s", error)
            return self._invalid(error, True)

        breakdown = calculate_same_route_price(
            pickup_index, dropoff_index, route.tariff.base, route.tariff.step
        )

        if pickup_index == dropoff_index:
            return self._invalid(
                "Pickup and dropoff stops cannot be the same", True, breakdown
            )

        return PricingResult(
            is_valid=True,
            price=breakdown.price,
            mode=self.mode,
            is_same_route=True,
            currency=settings.CURRENCY,
            estimated_delivery_time=settings.SAME_ROUTE_DELIVERY_TIME,
            breakdown=breakdown,
        )

    def price_different_route(
        self, pickup_route: str, pickup_stop: str, dropoff_route: str, dropoff_stop: str
    ) -> PricingResult:
        pickup, pickup_index, error = self._resolve(pickup_route, pickup_stop, "Pickup")
        if error is None:
            dropoff, dropoff_index, error = self._resolve(dropoff_route, dropoff_stop, "Dropoff")
        if error is not None:
            logger.warning("Cross-route pricing failed: %s", error)
            return self._invalid(error, False)

        breakdown = calculate_different_route_price(
            pickup_index, pickup.tariff.base, pickup.tariff.step,
            dropoff_index, dropoff.tariff.base, dropoff.tariff.step,
            self.transfer_fee,
        )

        return PricingResult(
            is_valid=True,
            price=breakdown.price,
            mode=self.mode,
            is_same_route=False,
            currency=settings.CURRENCY,
            estimated_delivery_time=settings.DIFFERENT_ROUTE_DELIVERY_TIME,
            breakdown=breakdown,
        )


class LookupPricingEngine(BasePricingEngine):
    """
    Prices trips from flat per-stop prices.
    Same-route trips use route-scoped prices, cross-route trips the
    route-agnostic ones.
    """

    mode = "lookup"

    def __init__(self, registry: StopPriceRegistry, network: Optional[RouteNetwork] = None):
        self.registry = registry
        self.network = network

    def price_same_route(self, route_name: str, pickup_stop: str, dropoff_stop: str) -> PricingResult:
        return calculate_lookup_same_route_price(
            self.registry, route_name, pickup_stop, dropoff_stop, self.network
        )

    def _check_on_route(self, route_name: str, stop_name: str, role: str) -> Optional[str]:
        # Without a network only the price table is consulted
        if self.network is None:
            return None
        route = self.network.get_route(route_name)
        if route is None:
            return f'Route "{route_name}" not found'
        if route.index_of(stop_name) is None:
            return f'{role} stop "{stop_name}" not found in {route.name}'
        return None

    def price_different_route(
        self, pickup_route: str, pickup_stop: str, dropoff_route: str, dropoff_stop: str
    ) -> PricingResult:
        error = (self._check_on_route(pickup_route, pickup_stop, "Pickup")
                 or self._check_on_route(dropoff_route, dropoff_stop, "Dropoff"))
        if error is not None:
            logger.warning("Cross-route lookup failed: %s", error)
            return self._invalid(error, False)

        return calculate_lookup_different_route_price(self.registry, pickup_stop, dropoff_stop)


def create_pricing_engine(
    mode: str,
    network: Optional[RouteNetwork] = None,
    registry: Optional[StopPriceRegistry] = None,
) -> PricingEngineInterface:
    """
    Build an engine for a pricing mode.

    Args:
        mode: "index" or "lookup"
        network: Route network, defaults to the loaded one
        registry: Stop price registry, defaults to the loaded one

    Raises:
        ValueError: If the mode is not supported
    """
    if not settings.is_valid_mode(mode):
        raise ValueError(f"Unknown pricing mode: {mode}")

    network = network or get_route_network()
    if mode == "index":
        return IndexBasedPricingEngine(network)
    return LookupPricingEngine(registry or get_price_registry(), network)


# Engines per mode, built on first use
_engines: Dict[str, PricingEngineInterface] = {}


def get_pricing_engine(mode: Optional[str] = None) -> PricingEngineInterface:
    """
    Get the engine for a mode (Singleton pattern per mode).

    Returns:
        Engine for `mode`, or for settings.PRICING_MODE when not given
    """
    mode = mode or settings.PRICING_MODE
    if mode not in _engines:
        _engines[mode] = create_pricing_engine(mode)
        logger.info("Using %s pricing engine", mode)
    return _engines[mode]
