"""
Command line utility for the routefare pricing system.

Usage:
    routefare-cli routes                                   - Show all routes and stops
    routefare-cli tariff <route> [length]                  - Show a route's tariff table
    routefare-cli quote <pickup route> <pickup stop> <dropoff route> <dropoff stop> [mode]
                                                           - Price a trip
"""

import sys

from routefare.config import settings
from routefare.models import QuoteRequest
from routefare.network import get_route_network
from routefare.services import get_pricing_engine
from routefare.services.formatter import render_breakdown
from routefare.services.tariff import build_tariff_table


def show_routes(args) -> int:
    """Display all routes with their stop indices."""
    network = get_route_network()

    print("\n" + "="*50)
    print("ROUTE NETWORK")
    print("="*50)

    for route in network.routes:
        print(f"\n{route.name} (base {route.tariff.base:g}, step {route.tariff.step:g})")
        print("-"*30)
        for index, stop in enumerate(route.stops, 1):
            print(f"  {index:<4} {stop}")

    print("\n" + "-"*30)
    print(f"Total routes: {len(network)}")
    print(f"Pricing mode: {settings.PRICING_MODE}")
    print("="*50)
    return 0


def show_tariff(args) -> int:
    """Display the tariff table of one route."""
    if not args:
        print("Route name is required")
        return 1

    network = get_route_network()
    route = network.get_route(args[0])
    if route is None:
        print(f"Unknown route: {args[0]}. Available routes: {network.route_names()}")
        return 1

    try:
        length = int(args[1]) if len(args) > 1 else len(route.stops)
    except ValueError:
        print("Invalid length! Please enter a number.")
        return 1

    print(f"\nTARIFF TABLE - {route.name}")
    print("-"*30)
    print(f"{'Index':<8} {'Tariff':<10}")
    for entry in build_tariff_table(length, route.tariff.base, route.tariff.step):
        print(f"{entry.index:<8} {entry.tariff:<10g}")
    return 0


def quote_trip(args) -> int:
    """Price a trip and print its breakdown."""
    if len(args) < 4:
        print("quote needs: <pickup route> <pickup stop> <dropoff route> <dropoff stop> [mode]")
        return 1

    mode = args[4].lower() if len(args) > 4 else None
    if mode and not settings.is_valid_mode(mode):
        print(f"Unknown pricing mode: {mode}")
        return 1

    request = QuoteRequest(
        pickup_route=args[0],
        pickup_stop=args[1],
        dropoff_route=args[2],
        dropoff_stop=args[3],
    )
    result = get_pricing_engine(mode).quote(request)

    if not result.is_valid:
        print(f"✗ {result.error}")
        return 1

    kind = "same route" if result.is_same_route else "different routes"
    print(f"\nQUOTE ({result.mode} pricing, {kind})")
    print("-"*30)
    print(render_breakdown(result.breakdown, result.currency))
    print(f"Estimated delivery: {result.estimated_delivery_time}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(__doc__)
        return 0

    command = argv[0].lower()

    commands = {
        'routes': show_routes,
        'tariff': show_tariff,
        'quote': quote_trip,
    }

    if command in commands:
        return commands[command](argv[1:])

    print(f"Unknown command: {command}")
    print(__doc__)
    return 1


if __name__ == "__main__":
    sys.exit(main())
