"""API endpoints for delivery pricing."""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from routefare.models import (
    DifferentRoutePriceRequest,
    DifferentRoutePriceBreakdown,
    QuoteRequest,
    QuoteResponse,
    SameRoutePriceBreakdown,
    SameRoutePriceRequest,
)
from routefare.services import get_pricing_engine
from routefare.services.fare_calculator import PricingEngineInterface
from routefare.services.formatter import format_breakdown
from routefare.services.tariff import (
    build_tariff_table,
    calculate_different_route_price,
    calculate_same_route_price,
)
from routefare.config import settings
from routefare.network import RouteNetwork, get_route_network

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Delivery Pricing"])


def get_engine() -> PricingEngineInterface:
    """
    Dependency injection for the pricing engine.
    Returns the engine for the configured pricing mode.
    """
    return get_pricing_engine()


def get_network() -> RouteNetwork:
    """Dependency injection for the route network."""
    return get_route_network()


@router.post("/quote", response_model=QuoteResponse)
async def quote_trip(
    request: QuoteRequest,
    engine: PricingEngineInterface = Depends(get_engine)
) -> QuoteResponse:
    """
    Price a trip between a pickup and a dropoff stop.

    Pricing failures (unknown stop, same stop twice) come back as a result
    with is_valid=false and an error message rather than an HTTP error.

    Args:
        request: Pickup and dropoff route/stop names, optional pricing mode
        engine: Injected engine for the configured mode

    Returns:
        QuoteResponse with the pricing result and display lines
    """
    try:
        if request.mode and request.mode != engine.mode:
            engine = get_pricing_engine(request.mode)

        result = engine.quote(request)
        lines = format_breakdown(result.breakdown) if result.is_valid else []
        return QuoteResponse(result=result, lines=lines)

    except Exception as e:
        logger.exception("Quote failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@router.post("/same-route-price", response_model=SameRoutePriceBreakdown)
async def same_route_price(request: SameRoutePriceRequest) -> SameRoutePriceBreakdown:
    """
    Index-based price between two stop positions on one route.
    Base and step default to the configured tariff parameters.
    """
    return calculate_same_route_price(
        request.from_index,
        request.to_index,
        settings.TARIFF_BASE if request.base is None else request.base,
        settings.TARIFF_STEP if request.step is None else request.step,
    )


@router.post("/different-route-price", response_model=DifferentRoutePriceBreakdown)
async def different_route_price(request: DifferentRoutePriceRequest) -> DifferentRoutePriceBreakdown:
    """Index-based price of a trip with a transfer between two routes."""

    def _or(value, default):
        return default if value is None else value

    return calculate_different_route_price(
        request.pickup_index,
        _or(request.pickup_base, settings.TARIFF_BASE),
        _or(request.pickup_step, settings.TARIFF_STEP),
        request.dropoff_index,
        _or(request.dropoff_base, settings.TARIFF_BASE),
        _or(request.dropoff_step, settings.TARIFF_STEP),
        _or(request.transfer_fee, settings.TRANSFER_FEE),
    )


@router.get("/routes")
async def list_routes(network: RouteNetwork = Depends(get_network)):
    """
    Get all routes with their stops and tariff parameters.

    Returns:
        Dictionary of routes in network order
    """
    routes = []
    for route in network.routes:
        routes.append({
            "name": route.name,
            "stops": [
                {"index": index, "name": stop}
                for index, stop in enumerate(route.stops, 1)
            ],
            "tariff": route.tariff.model_dump(),
        })

    return {
        "routes": routes,
        "total_routes": len(routes),
        "pricing_mode": settings.PRICING_MODE,
        "transfer_fee": settings.TRANSFER_FEE,
        "currency": settings.CURRENCY,
    }


@router.get("/tariff-table")
async def tariff_table(
    route_name: Optional[str] = Query(None, description="Route to use tariff parameters from"),
    length: Optional[int] = Query(None, ge=1, le=200, description="Number of stops"),
    network: RouteNetwork = Depends(get_network)
):
    """
    Tariff per stop index for a route, or for the default parameters.

    Args:
        route_name: Route name (optional)
        length: Number of indices, defaults to the route's stop count
    """
    if route_name:
        route = network.get_route(route_name)
        if route is None:
            raise HTTPException(
                status_code=404,
                detail=f"Route {route_name} not found. Available routes: {network.route_names()}"
            )
        base, step = route.tariff.base, route.tariff.step
        length = length or len(route.stops)
        name = route.name
    else:
        base, step = settings.TARIFF_BASE, settings.TARIFF_STEP
        length = length or 10
        name = None

    return {
        "route_name": name,
        "base": base,
        "step": step,
        "tariffs": [entry.model_dump() for entry in build_tariff_table(length, base, step)],
    }


@router.get("/health")
async def health_check():
    """Health check endpoint including route network status."""
    network_status = "healthy"
    try:
        routes_count = len(get_route_network())
    except Exception as e:
        network_status = f"unhealthy: {str(e)}"
        routes_count = 0

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "network_status": network_status,
        "routes_count": routes_count,
        "pricing_mode": settings.PRICING_MODE,
    }
