"""Index-based pricing: tariff table, same-route and cross-route calculators."""

from typing import List

from routefare.models import (
    CrossRouteLegs,
    DifferentRoutePriceBreakdown,
    SameRoutePriceBreakdown,
    TariffEntry,
)

DEFAULT_BASE = 100
DEFAULT_STEP = 20
DEFAULT_TRANSFER_FEE = 150


def calculate_tariff(index: int, base: float = DEFAULT_BASE, step: float = DEFAULT_STEP) -> float:
    """
    Tariff for the stop at a given distance index.

    Args:
        index: 1-based position from the route origin (0 means the origin itself)
        base: Fixed part of the tariff
        step: Increment per stop

    Returns:
        0 for index 0, otherwise base + step * index
    """
    if index == 0:
        return 0
    return base + step * index


def build_tariff_table(length: int, base: float = DEFAULT_BASE, step: float = DEFAULT_STEP) -> List[TariffEntry]:
    """Tariffs for indices 1..length in ascending order."""
    return [
        TariffEntry(index=i, tariff=calculate_tariff(i, base, step))
        for i in range(1, length + 1)
    ]


def _leg(start: int, end: int, base: float, step: float) -> List[TariffEntry]:
    # Inclusive of both ends
    return [
        TariffEntry(index=i, tariff=calculate_tariff(i, base, step))
        for i in range(start, end + 1)
    ]


def calculate_same_route_price(
    from_index: int,
    to_index: int,
    base: float = DEFAULT_BASE,
    step: float = DEFAULT_STEP,
) -> SameRoutePriceBreakdown:
    """
    Price a trip between two stops on one route.

    Sums the tariffs of every stop after the lower index up to and including
    the higher one. The direction of travel does not matter: (2, 5) and
    (5, 2) give the same result, and the reported indices are normalised.

    Returns:
        SameRoutePriceBreakdown; price 0 with an empty breakdown when both
        indices are equal
    """
    lo, hi = min(from_index, to_index), max(from_index, to_index)

    if lo == hi:
        return SameRoutePriceBreakdown(price=0, breakdown=[], from_index=lo, to_index=hi)

    breakdown = _leg(lo + 1, hi, base, step)
    price = sum(entry.tariff for entry in breakdown)

    return SameRoutePriceBreakdown(
        price=price,
        breakdown=breakdown,
        from_index=lo,
        to_index=hi,
    )


def calculate_different_route_price(
    pickup_index: int,
    pickup_base: float = DEFAULT_BASE,
    pickup_step: float = DEFAULT_STEP,
    dropoff_index: int = 1,
    dropoff_base: float = DEFAULT_BASE,
    dropoff_step: float = DEFAULT_STEP,
    transfer_fee: float = DEFAULT_TRANSFER_FEE,
) -> DifferentRoutePriceBreakdown:
    """
    Price a trip whose pickup and dropoff stops are on different routes.

    Three legs:
    1. Pickup leg: origin of the pickup route out to the pickup stop
    2. Transfer: fixed fee, reported as given
    3. Dropoff leg: origin of the dropoff route out to the dropoff stop

    Both legs are measured from their route's origin (index 1), not between
    the two stops.
    """
    pickup = _leg(1, pickup_index, pickup_base, pickup_step)
    dropoff = _leg(1, dropoff_index, dropoff_base, dropoff_step)

    price = (
        sum(entry.tariff for entry in pickup)
        + transfer_fee
        + sum(entry.tariff for entry in dropoff)
    )

    return DifferentRoutePriceBreakdown(
        price=price,
        breakdown=CrossRouteLegs(pickup=pickup, transfer=transfer_fee, dropoff=dropoff),
    )
