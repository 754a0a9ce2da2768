"""Models for the routefare pricing system."""

from pydantic import BaseModel, Field, field_validator
from typing import Annotated, List, Literal, Optional, Union

from routefare.config import settings


class TariffParameters(BaseModel):
    """Linear tariff coefficients: tariff(i) = base + step * i."""
    base: float = Field(100.0, ge=0, description="Fixed part of every stop tariff")
    step: float = Field(20.0, ge=0, description="Increment per stop away from the origin")


def default_tariff() -> TariffParameters:
    """Tariff for routes that do not set their own, taken from settings."""
    return TariffParameters(base=settings.TARIFF_BASE, step=settings.TARIFF_STEP)


class Route(BaseModel):
    """A named route with its ordered stops."""
    name: str = Field(..., min_length=1, description="Route name")
    stops: List[str] = Field(..., min_length=1, description="Stops in order from the origin")
    tariff: TariffParameters = Field(default_factory=default_tariff)

    @field_validator('stops')
    @classmethod
    def validate_unique_stops(cls, v):
        from routefare.network import stop_key

        seen = set()
        for stop in v:
            key = stop_key(stop)
            if key in seen:
                raise ValueError(f"Duplicate stop name on route: {stop}")
            seen.add(key)
        return v

    def index_of(self, stop_name: str) -> Optional[int]:
        """Return the 1-based distance index of a stop, or None if absent."""
        from routefare.network import stop_key

        wanted = stop_key(stop_name)
        for position, stop in enumerate(self.stops, 1):
            if stop_key(stop) == wanted:
                return position
        return None


class StopPriceEntry(BaseModel):
    """Pre-assigned flat price of a stop, optionally scoped to a route."""
    route_name: Optional[str] = None
    stop_name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)


class TariffEntry(BaseModel):
    """Tariff charged for reaching the stop at `index`."""
    index: int
    tariff: float


class SameRoutePriceBreakdown(BaseModel):
    """Index-based price of a trip between two stops on one route."""
    kind: Literal["same_route"] = "same_route"
    price: float
    breakdown: List[TariffEntry] = Field(default_factory=list)
    from_index: int
    to_index: int


class CrossRouteLegs(BaseModel):
    pickup: List[TariffEntry] = Field(default_factory=list)
    transfer: float
    dropoff: List[TariffEntry] = Field(default_factory=list)


class DifferentRoutePriceBreakdown(BaseModel):
    """Index-based price of a trip whose stops lie on two different routes."""
    kind: Literal["different_route"] = "different_route"
    price: float
    breakdown: CrossRouteLegs


class LookupPriceBreakdown(BaseModel):
    """Price derived from flat per-stop prices, with the arithmetic spelled out."""
    kind: Literal["lookup"] = "lookup"
    is_same_route: bool
    pickup_price: float
    dropoff_price: float
    divisor: float
    base_amount: float = Field(..., description="(pickup + dropoff) / divisor, 2 decimals")
    fixed_fee: float
    transfer_fee: float = Field(0, description="Reported separately, not part of price")
    price: float
    formula: str
    from_index: Optional[int] = None
    to_index: Optional[int] = None


PriceBreakdown = Annotated[
    Union[SameRoutePriceBreakdown, DifferentRoutePriceBreakdown, LookupPriceBreakdown],
    Field(discriminator="kind"),
]


class PricingResult(BaseModel):
    """Outcome of a pricing request. Failures are carried as values."""
    is_valid: bool
    price: float = 0
    error: Optional[str] = None
    mode: str
    is_same_route: Optional[bool] = None
    currency: str = "KES"
    estimated_delivery_time: Optional[str] = None
    breakdown: Optional[PriceBreakdown] = None


class ValidationResult(BaseModel):
    is_valid: bool
    error: Optional[str] = None


class QuoteRequest(BaseModel):
    """Request model for pricing a trip by route and stop names."""
    pickup_route: str = Field("", description="Route of the pickup stop")
    pickup_stop: str = Field("", description="Pickup stop name")
    dropoff_route: str = Field("", description="Route of the dropoff stop")
    dropoff_stop: str = Field("", description="Dropoff stop name")
    mode: Optional[Literal["index", "lookup"]] = Field(
        None, description="Pricing mode, defaults to the configured one"
    )


class SameRoutePriceRequest(BaseModel):
    """Request model for index-based same-route pricing."""
    from_index: int = Field(..., ge=0, description="Distance index of the pickup stop")
    to_index: int = Field(..., ge=0, description="Distance index of the dropoff stop")
    base: Optional[float] = Field(None, ge=0)
    step: Optional[float] = Field(None, ge=0)


class DifferentRoutePriceRequest(BaseModel):
    """Request model for index-based cross-route pricing."""
    pickup_index: int = Field(..., ge=1)
    pickup_base: Optional[float] = Field(None, ge=0)
    pickup_step: Optional[float] = Field(None, ge=0)
    dropoff_index: int = Field(..., ge=1)
    dropoff_base: Optional[float] = Field(None, ge=0)
    dropoff_step: Optional[float] = Field(None, ge=0)
    transfer_fee: Optional[float] = Field(None, ge=0)


class BreakdownLine(BaseModel):
    """One display line of a price breakdown."""
    label: str
    amount: float


class QuoteResponse(BaseModel):
    """Response model for a quote: the result and its display lines."""
    result: PricingResult
    lines: List[BreakdownLine] = Field(default_factory=list)
