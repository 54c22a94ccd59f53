"""
Sample transfer network.

Istanbul, Ankara and London locations connected by ground transfers and
flights, used for demos and end-to-end tests.
"""

import logging
from typing import Dict, Tuple

from src.route_planner.schemas.location import Location
from src.route_planner.schemas.transportation import TransportMode
from src.route_planner.services.location_service import LocationService
from src.route_planner.services.transportation_service import TransportationService

logger = logging.getLogger(__name__)

EVERY_DAY = (1, 2, 3, 4, 5, 6, 7)
WEEKDAYS = (1, 2, 3, 4, 5)
MON_WED_FRI_SUN = (1, 3, 5, 7)
TUE_THU_SAT = (2, 4, 6)

SAMPLE_LOCATIONS: Tuple[Location, ...] = (
    Location("Taksim Square", "Turkey", "Istanbul", "CCIST"),
    Location("Istanbul Airport", "Turkey", "Istanbul", "IST"),
    Location("Sabiha Gokcen Airport", "Turkey", "Istanbul", "SAW"),
    Location("London Heathrow Airport", "United Kingdom", "London", "LHR"),
    Location("Wembley Stadium", "United Kingdom", "London", "WEMB"),
    Location("Kabatas Pier", "Turkey", "Istanbul", "KBTSP"),
    Location("Ankara Esenboga Airport", "Turkey", "Ankara", "ESB"),
    Location("Ankara City Centre", "Turkey", "Ankara", "CCANK"),
)

# (origin code, destination code, mode, operating days)
SAMPLE_TRANSPORTATIONS: Tuple[Tuple[str, str, TransportMode, Tuple[int, ...]], ...] = (
    # Before-flight transfers
    ("CCIST", "IST", TransportMode.BUS, EVERY_DAY),
    ("CCIST", "IST", TransportMode.UBER, EVERY_DAY),
    ("CCIST", "SAW", TransportMode.BUS, WEEKDAYS),
    ("KBTSP", "IST", TransportMode.SUBWAY, EVERY_DAY),
    ("KBTSP", "CCIST", TransportMode.SUBWAY, EVERY_DAY),
    ("CCANK", "ESB", TransportMode.BUS, EVERY_DAY),
    ("CCANK", "ESB", TransportMode.UBER, WEEKDAYS),
    # Flights
    ("IST", "LHR", TransportMode.FLIGHT, EVERY_DAY),
    ("SAW", "LHR", TransportMode.FLIGHT, MON_WED_FRI_SUN),
    ("IST", "ESB", TransportMode.FLIGHT, WEEKDAYS),
    ("ESB", "LHR", TransportMode.FLIGHT, TUE_THU_SAT),
    # After-flight transfers
    ("LHR", "WEMB", TransportMode.BUS, EVERY_DAY),
    ("LHR", "WEMB", TransportMode.UBER, EVERY_DAY),
    ("ESB", "CCANK", TransportMode.BUS, EVERY_DAY),
    ("ESB", "CCANK", TransportMode.UBER, WEEKDAYS),
)


def seed_sample_network(
    locations: LocationService,
    transportations: TransportationService,
) -> bool:
    """
    Insert the sample network unless locations already exist.

    Args:
        locations: Location service used for inserts.
        transportations: Transportation service used for inserts.

    Returns:
        True if the network was inserted, False if skipped.
    """
    if locations.list_locations():
        logger.info("Sample data already exists, skipping initialization")
        return False

    ids: Dict[str, int] = {}
    for location in SAMPLE_LOCATIONS:
        ids[location.code] = locations.create_location(location).id
    logger.info("Sample locations created: %d locations", len(ids))

    for origin_code, destination_code, mode, days in SAMPLE_TRANSPORTATIONS:
        transportations.create_transportation(
            ids[origin_code], ids[destination_code], mode, days
        )
    logger.info(
        "Sample transportations created: %d transportations",
        len(SAMPLE_TRANSPORTATIONS),
    )
    return True
