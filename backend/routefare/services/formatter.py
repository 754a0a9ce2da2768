"""Display projection of price breakdowns.

Nothing here computes prices: the total line always carries the price the
calculator reported.
"""

from typing import List, Optional

from routefare.config import settings
from routefare.models import (
    BreakdownLine,
    DifferentRoutePriceBreakdown,
    LookupPriceBreakdown,
    PriceBreakdown,
    SameRoutePriceBreakdown,
)


def format_price(amount: float, currency: Optional[str] = None) -> str:
    """Format an amount with currency code and thousand separators."""
    currency = currency or settings.CURRENCY
    if float(amount).is_integer():
        return f"{currency} {int(amount):,}"
    return f"{currency} {amount:,.2f}"


def format_breakdown(breakdown: PriceBreakdown) -> List[BreakdownLine]:
    """Itemised lines for a breakdown, ending with the total."""
    lines: List[BreakdownLine] = []

    if isinstance(breakdown, SameRoutePriceBreakdown):
        for entry in breakdown.breakdown:
            lines.append(BreakdownLine(label=f"Stop {entry.index}", amount=entry.tariff))

    elif isinstance(breakdown, DifferentRoutePriceBreakdown):
        legs = breakdown.breakdown
        for entry in legs.pickup:
            lines.append(BreakdownLine(label=f"Pickup leg stop {entry.index}", amount=entry.tariff))
        lines.append(BreakdownLine(label="Transfer fee", amount=legs.transfer))
        for entry in legs.dropoff:
            lines.append(BreakdownLine(label=f"Dropoff leg stop {entry.index}", amount=entry.tariff))

    elif isinstance(breakdown, LookupPriceBreakdown):
        lines.append(BreakdownLine(label="Pickup stop price", amount=breakdown.pickup_price))
        lines.append(BreakdownLine(label="Dropoff stop price", amount=breakdown.dropoff_price))
        lines.append(BreakdownLine(
            label=f"Base amount (/ {breakdown.divisor:g})", amount=breakdown.base_amount
        ))
        lines.append(BreakdownLine(label="Fixed fee", amount=breakdown.fixed_fee))
        if not breakdown.is_same_route:
            lines.append(BreakdownLine(label="Transfer fee", amount=breakdown.transfer_fee))

    else:
        raise TypeError(f"Unsupported breakdown type: {type(breakdown).__name__}")

    lines.append(BreakdownLine(label="Total", amount=breakdown.price))
    return lines


def render_breakdown(breakdown: PriceBreakdown, currency: Optional[str] = None) -> str:
    """Plain-text rendering, one line per item."""
    currency = currency or settings.CURRENCY
    lines = format_breakdown(breakdown)
    width = max(len(line.label) for line in lines)
    rendered = [
        f"{line.label:<{width}}  {format_price(line.amount, currency)}" for line in lines
    ]
    if isinstance(breakdown, LookupPriceBreakdown):
        rendered.append(f"Formula: {breakdown.formula}")
    return "\n".join(rendered)
