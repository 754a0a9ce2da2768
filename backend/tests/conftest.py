"""Shared fixtures: the built-in route network and price tables."""

import pytest

from routefare.network import build_network
from routefare.network_data import (
    DEFAULT_ROUTES,
    DEFAULT_ROUTE_STOP_PRICES,
    DEFAULT_STOP_PRICES,
)


@pytest.fixture(scope="session")
def default_network():
    return build_network({
        "routes": DEFAULT_ROUTES,
        "stop_prices": DEFAULT_STOP_PRICES,
        "route_stop_prices": DEFAULT_ROUTE_STOP_PRICES,
    })


@pytest.fixture
def network(default_network):
    return default_network[0]


@pytest.fixture
def registry(default_network):
    return default_network[1]
