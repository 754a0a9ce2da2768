"""Route network and stop price registries.

Both are built once from static data (the built-in tables or a JSON file)
and are read-only afterwards.
"""

import json
import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from routefare.config import settings
from routefare.models import Route, StopPriceEntry

logger = logging.getLogger(__name__)


class NetworkConfigError(ValueError):
    """Raised when the static route or price data is malformed."""


# Known spelling variants of stop names across the data sets
STOP_NAME_ALIASES: Dict[str, str] = {
    "All Sops": "Allsops",
    "All sops": "Allsops",
    "Ngong'": "Ngong",
    "Athi River'": "Athi River",
    "KQ Base": "Kenya Airways HQ",
    "Tena": "Tena Estate",
    "Kariobangi North'": "Kariobangi North",
    "Tom Mboya Str.": "Tom Mboya Street",
    "Upper Hill": "Upperhill",
    "T-mall": "T-Mall",
    "Langata Hospital": "Langata Hosp",
    "Mbagathi Way": "Mbagathi",
    "Buruburu Farms": "Mawe Mbili",
    "Manyanja Road": "Manyanja Rd",
}

_ALIASES_BY_KEY = {alias.casefold(): name for alias, name in STOP_NAME_ALIASES.items()}

_WHITESPACE = re.compile(r"\s+")


def normalize_stop_name(stop_name: str) -> str:
    """Map a stop name to its canonical spelling."""
    cleaned = _WHITESPACE.sub(" ", stop_name.strip())
    return _ALIASES_BY_KEY.get(cleaned.casefold(), cleaned)


def stop_key(stop_name: str) -> str:
    """Comparison key for stop names: canonical spelling, case-insensitive."""
    return normalize_stop_name(stop_name).casefold()


def route_key(route_name: str) -> str:
    return _WHITESPACE.sub(" ", route_name.strip()).casefold()


class RouteNetwork:
    """Read-only set of routes, addressable by name."""

    def __init__(self, routes: Iterable[Route]):
        self._routes: Dict[str, Route] = {}
        for route in routes:
            key = route_key(route.name)
            if key in self._routes:
                raise NetworkConfigError(f"Duplicate route name: {route.name}")
            self._routes[key] = route

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def route_names(self) -> List[str]:
        return [route.name for route in self._routes.values()]

    def get_route(self, route_name: str) -> Optional[Route]:
        """Find a route by name (case-insensitive)."""
        if not route_name:
            return None
        return self._routes.get(route_key(route_name))

    def resolve_stop(self, route_name: str, stop_name: str) -> Optional[int]:
        """Return the 1-based index of a stop on a route, or None if unknown."""
        route = self.get_route(route_name)
        if route is None or not stop_name:
            return None
        return route.index_of(stop_name)

    @staticmethod
    def is_same_route(pickup_route: str, dropoff_route: str) -> bool:
        return route_key(pickup_route) == route_key(dropoff_route)


class StopPriceRegistry:
    """
    Flat per-stop prices used by the lookup pricing mode.

    Holds two independent tables:
    1. Route-agnostic: stop name -> price (cross-route trips)
    2. Route-scoped: (route name, stop name) -> price (same-route trips)

    A stop priced at 0 is treated the same as a missing stop.
    """

    def __init__(
        self,
        stop_prices: Iterable[StopPriceEntry],
        route_stop_prices: Iterable[StopPriceEntry],
    ):
        self._stop_names: Dict[str, str] = {}
        self._by_stop: Dict[str, float] = {}
        for entry in stop_prices:
            key = stop_key(entry.stop_name)
            self._stop_names.setdefault(key, entry.stop_name)
            self._by_stop[key] = entry.price

        self._route_names: Dict[str, str] = {}
        self._by_route: Dict[Tuple[str, str], float] = {}
        for entry in route_stop_prices:
            if not entry.route_name:
                raise NetworkConfigError(
                    f"Route-scoped price for {entry.stop_name} has no route name"
                )
            rkey = route_key(entry.route_name)
            self._route_names.setdefault(rkey, entry.route_name)
            self._by_route[(rkey, stop_key(entry.stop_name))] = entry.price

    def find_stop_price(self, stop_name: str) -> Optional[float]:
        """Route-agnostic price of a stop, or None when not priced."""
        if not stop_name:
            return None
        price = self._by_stop.get(stop_key(stop_name))
        return price if price else None

    def find_route_stop_price(self, route_name: str, stop_name: str) -> Optional[float]:
        """Route-scoped price of a stop, or None when not priced."""
        if not route_name or not stop_name:
            return None
        price = self._by_route.get((route_key(route_name), stop_key(stop_name)))
        return price if price else None

    def has_route(self, route_name: str) -> bool:
        return bool(route_name) and route_key(route_name) in self._route_names

    def has_stop(self, stop_name: str) -> bool:
        return self.find_stop_price(stop_name) is not None

    def available_stops(self) -> List[str]:
        """Stops priced in the route-agnostic table."""
        return list(self._stop_names.values())

    def available_routes(self) -> List[str]:
        """Routes that have route-scoped prices."""
        return list(self._route_names.values())


def build_network(data: dict) -> Tuple[RouteNetwork, StopPriceRegistry]:
    """
    Build the network and price registry from plain data.

    Args:
        data: Mapping with "routes", "stop_prices" and "route_stop_prices" lists

    Raises:
        NetworkConfigError: If any entry fails validation
    """
    try:
        routes = [Route(**item) for item in data.get("routes", [])]
        stop_prices = [StopPriceEntry(**item) for item in data.get("stop_prices", [])]
        route_stop_prices = [
            StopPriceEntry(**item) for item in data.get("route_stop_prices", [])
        ]
    except (ValidationError, TypeError) as e:
        raise NetworkConfigError(f"Invalid network data: {e}") from e

    if not routes:
        raise NetworkConfigError("Network data defines no routes")

    network = RouteNetwork(routes)
    registry = StopPriceRegistry(stop_prices, route_stop_prices)
    logger.info(
        "Loaded %d routes, %d stop prices, %d route stop prices",
        len(network), len(stop_prices), len(route_stop_prices),
    )
    return network, registry


def load_network_file(path: str) -> Tuple[RouteNetwork, StopPriceRegistry]:
    """Load the network and price registry from a JSON file."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise NetworkConfigError(f"Cannot read network file {path}: {e}") from e

    if not isinstance(data, dict):
        raise NetworkConfigError(f"Network file {path} must contain a JSON object")
    return build_network(data)


def load_default_network() -> Tuple[RouteNetwork, StopPriceRegistry]:
    """Load the configured network: the JSON file if set, else built-in tables."""
    if settings.NETWORK_FILE:
        logger.info("Loading network from %s", settings.NETWORK_FILE)
        return load_network_file(settings.NETWORK_FILE)

    from routefare.network_data import (
        DEFAULT_ROUTES,
        DEFAULT_ROUTE_STOP_PRICES,
        DEFAULT_STOP_PRICES,
    )

    return build_network({
        "routes": DEFAULT_ROUTES,
        "stop_prices": DEFAULT_STOP_PRICES,
        "route_stop_prices": DEFAULT_ROUTE_STOP_PRICES,
    })


# Singleton instances
_network: Optional[RouteNetwork] = None
_registry: Optional[StopPriceRegistry] = None


def _ensure_loaded() -> None:
    global _network, _registry
    if _network is None or _registry is None:
        _network, _registry = load_default_network()


def get_route_network() -> RouteNetwork:
    """Get singleton route network instance."""
    _ensure_loaded()
    return _network


def get_price_registry() -> StopPriceRegistry:
    """Get singleton stop price registry instance."""
    _ensure_loaded()
    return _registry
