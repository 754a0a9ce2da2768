"""Built-in route network and stop price tables.

Used when ROUTEFARE_NETWORK_FILE is not set. The same structure is accepted
from a JSON file (see routefare.network.load_network_file).
"""

DEFAULT_ROUTES = [
    {
        "name": "Mombasa Road",
        "stops": [
            "CBD", "Nyayo Stadium", "South B", "Capital Centre",
            "Cabanas", "Mlolongo", "Athi River",
        ],
    },
    {
        "name": "Kangundo Road",
        "stops": [
            "CBD", "Donholm", "Savannah", "Njiru",
            "Ruai", "Kamulu", "Joska",
        ],
    },
    {
        "name": "Thika Road",
        "stops": [
            "CBD", "Pangani", "Allsops", "Roysambu",
            "Kahawa", "Ruiru", "Juja",
        ],
        "tariff": {"base": 80, "step": 15},
    },
    {
        "name": "Ngong Road",
        "stops": [
            "CBD", "Upperhill", "Adams Arcade", "Prestige",
            "Junction", "Karen", "Ngong",
        ],
        "tariff": {"base": 120, "step": 25},
    },
]

# Route-agnostic prices, priced from the CBD (cross-route mode)
DEFAULT_STOP_PRICES = [
    {"stop_name": "CBD", "price": 100},
    {"stop_name": "Nyayo Stadium", "price": 150},
    {"stop_name": "South B", "price": 180},
    {"stop_name": "Capital Centre", "price": 200},
    {"stop_name": "Cabanas", "price": 260},
    {"stop_name": "Mlolongo", "price": 350},
    {"stop_name": "Athi River", "price": 450},
    {"stop_name": "Donholm", "price": 200},
    {"stop_name": "Savannah", "price": 230},
    {"stop_name": "Njiru", "price": 280},
    {"stop_name": "Ruai", "price": 320},
    {"stop_name": "Kamulu", "price": 380},
    {"stop_name": "Joska", "price": 450},
    {"stop_name": "Pangani", "price": 150},
    {"stop_name": "Allsops", "price": 180},
    {"stop_name": "Roysambu", "price": 250},
    {"stop_name": "Kahawa", "price": 300},
    {"stop_name": "Ruiru", "price": 380},
    {"stop_name": "Juja", "price": 450},
    {"stop_name": "Upperhill", "price": 150},
    {"stop_name": "Adams Arcade", "price": 180},
    {"stop_name": "Prestige", "price": 200},
    {"stop_name": "Junction", "price": 230},
    {"stop_name": "Karen", "price": 300},
    {"stop_name": "Ngong", "price": 400},
]

# Route-scoped prices (same-route mode)
DEFAULT_ROUTE_STOP_PRICES = [
    {"route_name": "Mombasa Road", "stop_name": "CBD", "price": 100},
    {"route_name": "Mombasa Road", "stop_name": "Nyayo Stadium", "price": 150},
    {"route_name": "Mombasa Road", "stop_name": "South B", "price": 200},
    {"route_name": "Mombasa Road", "stop_name": "Capital Centre", "price": 250},
    {"route_name": "Mombasa Road", "stop_name": "Cabanas", "price": 300},
    {"route_name": "Mombasa Road", "stop_name": "Mlolongo", "price": 350},
    {"route_name": "Mombasa Road", "stop_name": "Athi River", "price": 400},
    {"route_name": "Kangundo Road", "stop_name": "CBD", "price": 100},
    {"route_name": "Kangundo Road", "stop_name": "Donholm", "price": 160},
    {"route_name": "Kangundo Road", "stop_name": "Savannah", "price": 200},
    {"route_name": "Kangundo Road", "stop_name": "Njiru", "price": 240},
    {"route_name": "Kangundo Road", "stop_name": "Ruai", "price": 280},
    {"route_name": "Kangundo Road", "stop_name": "Kamulu", "price": 320},
    {"route_name": "Kangundo Road", "stop_name": "Joska", "price": 380},
    {"route_name": "Thika Road", "stop_name": "CBD", "price": 100},
    {"route_name": "Thika Road", "stop_name": "Pangani", "price": 140},
    {"route_name": "Thika Road", "stop_name": "Allsops", "price": 170},
    {"route_name": "Thika Road", "stop_name": "Roysambu", "price": 220},
    {"route_name": "Thika Road", "stop_name": "Kahawa", "price": 260},
    {"route_name": "Thika Road", "stop_name": "Ruiru", "price": 320},
    {"route_name": "Thika Road", "stop_name": "Juja", "price": 400},
    {"route_name": "Ngong Road", "stop_name": "CBD", "price": 100},
    {"route_name": "Ngong Road", "stop_name": "Upperhill", "price": 130},
    {"route_name": "Ngong Road", "stop_name": "Adams Arcade", "price": 160},
    {"route_name": "Ngong Road", "stop_name": "Prestige", "price": 180},
    {"route_name": "Ngong Road", "stop_name": "Junction", "price": 210},
    {"route_name": "Ngong Road", "stop_name": "Karen", "price": 280},
    {"route_name": "Ngong Road", "stop_name": "Ngong", "price": 360},
]
