"""Unit tests for the pricing engines and API."""

import pytest
from fastapi.testclient import TestClient

from routefare.main import app
from routefare.models import (
    DifferentRoutePriceBreakdown,
    PricingResult,
    QuoteRequest,
    SameRoutePriceBreakdown,
)
from routefare.services.fare_calculator import (
    IndexBasedPricingEngine,
    LookupPricingEngine,
    PricingEngineInterface,
    create_pricing_engine,
    estimate_delivery_time,
    get_pricing_engine,
)
from routefare.config import settings
from routefare.network import build_network
from routefare.network_data import DEFAULT_ROUTES

# Test client
client = TestClient(app)


def _quote(pickup_route, pickup_stop, dropoff_route, dropoff_stop, **kwargs):
    return QuoteRequest(
        pickup_route=pickup_route,
        pickup_stop=pickup_stop,
        dropoff_route=dropoff_route,
        dropoff_stop=dropoff_stop,
        **kwargs
    )


class TestModels:
    """Test model validation."""

    def test_quote_request_defaults(self):
        request = QuoteRequest()
        assert request.pickup_route == ""
        assert request.mode is None

    def test_quote_request_invalid_mode(self):
        with pytest.raises(ValueError):
            QuoteRequest(mode="distance")


class TestIndexBasedEngine:
    """Test index-based pricing by route and stop names."""

    @pytest.fixture(autouse=True)
    def _engine(self, network):
        """Setup test fixtures."""
        self.engine = IndexBasedPricingEngine(network, transfer_fee=150)

    def test_same_route(self):
        """South B (3) to Mlolongo (6) pays stops 4, 5 and 6."""
        result = self.engine.quote(_quote("Mombasa Road", "South B", "Mombasa Road", "Mlolongo"))

        assert result.is_valid
        assert result.mode == "index"
        assert result.is_same_route is True
        assert result.price == 600
        assert isinstance(result.breakdown, SameRoutePriceBreakdown)
        assert [e.index for e in result.breakdown.breakdown] == [4, 5, 6]
        assert result.estimated_delivery_time == settings.SAME_ROUTE_DELIVERY_TIME

    def test_same_route_reverse_direction(self):
        forward = self.engine.quote(_quote("Mombasa Road", "South B", "Mombasa Road", "Mlolongo"))
        backward = self.engine.quote(_quote("Mombasa Road", "Mlolongo", "Mombasa Road", "South B"))

        assert backward.price == forward.price
        assert backward.breakdown.from_index == 3
        assert backward.breakdown.to_index == 6

    def test_same_route_name_case(self):
        result = self.engine.quote(_quote("Mombasa Road", "CBD", "mombasa road", "Nyayo Stadium"))

        assert result.is_same_route is True
        assert result.price == 140

    def test_same_route_uses_route_tariff(self):
        """Thika Road prices with base 80, step 15."""
        result = self.engine.price_same_route("Thika Road", "CBD", "Allsops")

        # t(2) + t(3) = 110 + 125
        assert result.price == 235

    def test_different_routes(self):
        result = self.engine.quote(_quote("Mombasa Road", "Nyayo Stadium", "Kangundo Road", "Njiru"))

        assert result.is_valid
        assert result.is_same_route is False
        assert isinstance(result.breakdown, DifferentRoutePriceBreakdown)
        assert [e.tariff for e in result.breakdown.breakdown.pickup] == [120, 140]
        assert result.breakdown.breakdown.transfer == 150
        assert [e.tariff for e in result.breakdown.breakdown.dropoff] == [120, 140, 160, 180]
        assert result.price == 1010
        assert result.estimated_delivery_time == settings.DIFFERENT_ROUTE_DELIVERY_TIME

    def test_default_tariff_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "TARIFF_BASE", 500.0)
        network, _ = build_network({"routes": DEFAULT_ROUTES})
        engine = IndexBasedPricingEngine(network)

        result = engine.quote(_quote("Mombasa Road", "CBD", "Mombasa Road", "Nyayo Stadium"))

        # t(2) = 500 + 20 * 2
        assert result.price == 540

    def test_different_routes_with_own_tariffs(self):
        result = self.engine.quote(_quote("Thika Road", "All Sops", "Ngong Road", "Upper Hill"))

        assert result.is_valid
        assert result.price == 795

    def test_unknown_stop(self):
        result = self.engine.quote(_quote("Mombasa Road", "Westlands", "Mombasa Road", "CBD"))

        assert not result.is_valid
        assert result.price == 0
        assert result.breakdown is None
        assert result.error == 'Pickup stop "Westlands" not found in Mombasa Road'

    def test_unknown_dropoff_route(self):
        result = self.engine.quote(_quote("Mombasa Road", "CBD", "Waiyaki Way", "Westlands"))

        assert not result.is_valid
        assert result.error == 'Route "Waiyaki Way" not found'

    def test_same_stop(self):
        result = self.engine.quote(_quote("Kangundo Road", "Ruai", "Kangundo Road", "Ruai"))

        assert not result.is_valid
        assert result.price == 0
        assert result.error == "Pickup and dropoff stops cannot be the same"
        assert result.breakdown.from_index == result.breakdown.to_index == 5
        assert result.breakdown.breakdown == []

    def test_missing_location(self):
        result = self.engine.quote(_quote("Mombasa Road", "CBD", "", ""))

        assert not result.is_valid
        assert result.error == "Please select both pickup and dropoff locations"

    def test_price_equals_sum_of_items(self):
        result = self.engine.quote(_quote("Ngong Road", "Karen", "Kangundo Road", "Joska"))
        legs = result.breakdown.breakdown

        assert result.price == (
            sum(e.tariff for e in legs.pickup) + legs.transfer + sum(e.tariff for e in legs.dropoff)
        )


class TestLookupEngine:
    """Test lookup pricing by route and stop names."""

    @pytest.fixture(autouse=True)
    def _engine(self, registry, network):
        self.engine = LookupPricingEngine(registry, network)

    def test_same_route(self):
        result = self.engine.quote(_quote("Mombasa Road", "South B", "Mombasa Road", "Capital Centre"))

        assert result.is_valid
        assert result.mode == "lookup"
        assert result.price == 300

    def test_different_routes(self):
        result = self.engine.quote(_quote("Thika Road", "Roysambu", "Mombasa Road", "Mlolongo"))

        assert result.is_valid
        assert result.is_same_route is False
        assert result.price == 350
        assert result.breakdown.transfer_fee == 50

    def test_different_routes_unknown_route(self):
        result = self.engine.quote(_quote("Atlantis Road", "Juja", "Ngong Road", "Karen"))

        assert not result.is_valid
        assert result.price == 0
        assert result.error == 'Route "Atlantis Road" not found'

    def test_different_routes_stop_not_on_route(self):
        result = self.engine.quote(_quote("Mombasa Road", "Juja", "Ngong Road", "Karen"))

        assert not result.is_valid
        assert result.error == 'Pickup stop "Juja" not found in Mombasa Road'

    def test_different_routes_dropoff_not_on_route(self):
        result = self.engine.quote(_quote("Thika Road", "Juja", "Ngong Road", "Mlolongo"))

        assert not result.is_valid
        assert result.error == 'Dropoff stop "Mlolongo" not found in Ngong Road'

    def test_different_routes_without_network(self, registry):
        """Without a network only the route-agnostic prices are checked."""
        engine = LookupPricingEngine(registry)
        result = engine.quote(_quote("Atlantis Road", "Juja", "Ngong Road", "Karen"))

        assert result.is_valid

    def test_lookup_miss(self):
        result = self.engine.quote(_quote("Thika Road", "Roysambu", "Mombasa Road", "Westlands"))

        assert not result.is_valid
        assert result.price == 0
        assert "Westlands" in result.error


class TestEngineSelection:
    """Test engine construction and the protocol."""

    def test_engines_implement_protocol(self, network, registry):
        """Test that all engines implement the PricingEngineInterface protocol."""
        for engine in (IndexBasedPricingEngine(network), LookupPricingEngine(registry)):
            assert isinstance(engine, PricingEngineInterface), \
                f"{engine.__class__.__name__} does not implement PricingEngineInterface"

            result = engine.quote(_quote("Mombasa Road", "CBD", "Mombasa Road", "South B"))
            assert isinstance(result, PricingResult)

    def test_create_engine(self, network, registry):
        assert create_pricing_engine("index", network, registry).mode == "index"
        assert create_pricing_engine("lookup", network, registry).mode == "lookup"

    def test_create_engine_unknown_mode(self, network, registry):
        with pytest.raises(ValueError):
            create_pricing_engine("distance", network, registry)

    def test_default_engine_is_singleton(self):
        assert get_pricing_engine("index") is get_pricing_engine("index")
        assert get_pricing_engine("lookup").mode == "lookup"

    def test_default_transfer_fee(self, network):
        assert IndexBasedPricingEngine(network).transfer_fee == settings.TRANSFER_FEE

    def test_estimate_delivery_time(self):
        assert estimate_delivery_time("Thika Road", "thika road") == "60-90 minutes"
        assert estimate_delivery_time("Thika Road", "Ngong Road") == "90-120 minutes"


class TestAPI:
    """Test API endpoints."""

    def test_root_endpoint(self):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert data["version"] == settings.API_VERSION

    def test_health_check(self):
        """Test health check endpoint."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["network_status"] == "healthy"
        assert data["routes_count"] > 0

    def test_routes_endpoint(self):
        response = client.get("/api/routes")
        assert response.status_code == 200
        data = response.json()
        assert data["total_routes"] == len(data["routes"])
        first = data["routes"][0]
        assert first["stops"][0]["index"] == 1
        assert "base" in first["tariff"]

    def test_tariff_table_default(self):
        response = client.get("/api/tariff-table", params={"length": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["route_name"] is None
        assert len(data["tariffs"]) == 3
        assert data["tariffs"][0]["index"] == 1

    def test_tariff_table_unknown_route(self):
        response = client.get("/api/tariff-table", params={"route_name": "Nowhere"})
        assert response.status_code == 404

    def test_same_route_price(self):
        payload = {"from_index": 5, "to_index": 2, "base": 100, "step": 20}

        response = client.post("/api/same-route-price", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["price"] == 540
        assert data["from_index"] == 2
        assert data["to_index"] == 5
        assert [e["tariff"] for e in data["breakdown"]] == [160, 180, 200]

    def test_same_route_price_negative_index(self):
        response = client.post("/api/same-route-price", json={"from_index": -1, "to_index": 2})
        assert response.status_code == 422  # Validation error

    def test_different_route_price(self):
        payload = {
            "pickup_index": 2, "pickup_base": 100, "pickup_step": 20,
            "dropoff_index": 4, "dropoff_base": 100, "dropoff_step": 20,
            "transfer_fee": 150,
        }

        response = client.post("/api/different-route-price", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["price"] == 1010
        assert data["breakdown"]["transfer"] == 150
        assert len(data["breakdown"]["pickup"]) == 2
        assert len(data["breakdown"]["dropoff"]) == 4

    def test_different_route_price_zero_index(self):
        payload = {"pickup_index": 0, "dropoff_index": 2}
        response = client.post("/api/different-route-price", json=payload)
        assert response.status_code == 422

    def test_quote_index(self):
        payload = {
            "pickup_route": "Mombasa Road", "pickup_stop": "Nyayo Stadium",
            "dropoff_route": "Kangundo Road", "dropoff_stop": "Njiru",
            "mode": "index",
        }

        response = client.post("/api/quote", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["result"]["is_valid"] is True
        assert data["result"]["price"] == settings.TRANSFER_FEE + 860
        assert data["result"]["breakdown"]["kind"] == "different_route"
        assert data["lines"][-1]["label"] == "Total"
        assert data["lines"][-1]["amount"] == data["result"]["price"]

    def test_quote_lookup(self):
        payload = {
            "pickup_route": "Mombasa Road", "pickup_stop": "South B",
            "dropoff_route": "Mombasa Road", "dropoff_stop": "Capital Centre",
            "mode": "lookup",
        }

        response = client.post("/api/quote", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["result"]["price"] == 300
        assert data["result"]["breakdown"]["formula"] == "(200 + 250) / 1.8 + 50 = 300"

    def test_quote_unknown_stop(self):
        """Pricing failures come back as values, not HTTP errors."""
        payload = {
            "pickup_route": "Mombasa Road", "pickup_stop": "Westlands",
            "dropoff_route": "Mombasa Road", "dropoff_stop": "CBD",
            "mode": "index",
        }

        response = client.post("/api/quote", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["result"]["is_valid"] is False
        assert data["result"]["price"] == 0
        assert "Westlands" in data["result"]["error"]
        assert data["lines"] == []

    def test_quote_invalid_mode(self):
        payload = {"pickup_route": "Mombasa Road", "mode": "distance"}
        response = client.post("/api/quote", json=payload)
        assert response.status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
