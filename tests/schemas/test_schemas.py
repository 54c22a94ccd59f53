"""
Tests for route_planner schema definitions.

Validates that:
1. Location and ScheduleEdge enforce their invariants on construction
2. TransportMode parsing and ground/flight classification
3. Itinerary.from_segments rejects malformed segment sequences
4. Pandera schemas accept valid rows and reject invalid ones
"""

import pandas as pd
import pandera as pa
import pytest

from src.route_planner.exceptions import InvalidInputError
from src.route_planner.schemas.location import Location, LocationSchema
from src.route_planner.schemas.route import Itinerary, Segment, SegmentKind
from src.route_planner.schemas.transportation import (
    ScheduleEdge,
    ScheduleEdgeSchema,
    TransportMode,
    parse_operating_days,
    validate_operating_days,
    validate_weekday,
)


# -------------------------
# Fixtures
# -------------------------


@pytest.fixture
def valid_location_df() -> pd.DataFrame:
    return pd.DataFrame({
        "id": [1, 2],
        "name": ["Taksim Square", "Istanbul Airport"],
        "country": ["Turkey", "Turkey"],
        "city": ["Istanbul", "Istanbul"],
        "location_code": ["CCIST", "IST"],
    })


@pytest.fixture
def valid_edge_df() -> pd.DataFrame:
    return pd.DataFrame({
        "transportation_id": [1, 2],
        "transportation_type": ["BUS", "FLIGHT"],
        "origin_id": [1, 2],
        "origin_name": ["Taksim Square", "Istanbul Airport"],
        "origin_country": ["Turkey", "Turkey"],
        "origin_city": ["Istanbul", "Istanbul"],
        "origin_code": ["CCIST", "IST"],
        "destination_id": [2, 3],
        "destination_name": ["Istanbul Airport", "London Heathrow"],
        "destination_country": ["Turkey", "UK"],
        "destination_city": ["Istanbul", "London"],
        "destination_code": ["IST", "LHR"],
        "operating_days": ["1,2,3,4,5,6,7", "1,3,5"],
    })


# -------------------------
# Location
# -------------------------


class TestLocation:
    def test_valid_location(self):
        loc = Location("Istanbul Airport", "Turkey", "Istanbul", "IST")
        assert loc.id is None
        assert loc.code == "IST"

    @pytest.mark.parametrize("field", ["name", "country", "city"])
    def test_blank_field_rejected(self, field):
        kwargs = dict(name="Istanbul Airport", country="Turkey", city="Istanbul", code="IST")
        kwargs[field] = "   "
        with pytest.raises(InvalidInputError, match="is required"):
            Location(**kwargs)

    def test_short_code_rejected(self):
        with pytest.raises(InvalidInputError, match="at least 3"):
            Location("Istanbul Airport", "Turkey", "Istanbul", "IS")

    def test_with_id_returns_copy(self):
        loc = Location("Istanbul Airport", "Turkey", "Istanbul", "IST")
        stored = loc.with_id(7)
        assert stored.id == 7
        assert loc.id is None

    def test_location_is_frozen(self, taksim):
        with pytest.raises(AttributeError):
            taksim.name = "Other"


# -------------------------
# TransportMode and weekdays
# -------------------------


class TestTransportMode:
    def test_only_flight_is_not_ground(self):
        assert not TransportMode.FLIGHT.is_ground_transport
        assert TransportMode.BUS.is_ground_transport
        assert TransportMode.SUBWAY.is_ground_transport
        assert TransportMode.UBER.is_ground_transport

    def test_parse_is_case_insensitive(self):
        assert TransportMode.parse("uber") is TransportMode.UBER
        assert TransportMode.parse(" Flight ") is TransportMode.FLIGHT
        assert TransportMode.parse(TransportMode.BUS) is TransportMode.BUS

    def test_parse_unknown_raises(self):
        with pytest.raises(InvalidInputError, match="Unknown transportation type"):
            TransportMode.parse("TRAIN")


class TestWeekdays:
    @pytest.mark.parametrize("day", [1, 4, 7])
    def test_valid_weekday(self, day):
        assert validate_weekday(day) == day

    @pytest.mark.parametrize("day", [0, 8, -1])
    def test_out_of_range_weekday(self, day):
        with pytest.raises(InvalidInputError):
            validate_weekday(day)

    def test_bool_is_not_a_weekday(self):
        with pytest.raises(InvalidInputError):
            validate_weekday(True)

    def test_empty_operating_days(self):
        with pytest.raises(InvalidInputError, match="required"):
            validate_operating_days([])
        with pytest.raises(InvalidInputError, match="required"):
            validate_operating_days(None)

    def test_operating_day_out_of_range(self):
        with pytest.raises(InvalidInputError, match="between 1"):
            validate_operating_days([1, 8])

    def test_parse_operating_days(self):
        assert parse_operating_days("5,1,3") == frozenset({1, 3, 5})


# -------------------------
# ScheduleEdge
# -------------------------


class TestScheduleEdge:
    def test_mode_is_coerced_from_name(self, istanbul_airport, heathrow):
        edge = ScheduleEdge(istanbul_airport, heathrow, "FLIGHT", [1, 2], id=1)
        assert edge.mode is TransportMode.FLIGHT
        assert edge.operating_days == frozenset({1, 2})
        assert edge.is_flight

    def test_same_endpoints_rejected(self, istanbul_airport):
        with pytest.raises(InvalidInputError, match="must be different"):
            ScheduleEdge(istanbul_airport, istanbul_airport, TransportMode.BUS, [1])

    def test_unsaved_same_code_rejected(self):
        a = Location("Istanbul Airport", "Turkey", "Istanbul", "IST")
        b = Location("Istanbul Airport 2", "Turkey", "Istanbul", "IST")
        with pytest.raises(InvalidInputError, match="must be different"):
            ScheduleEdge(a, b, TransportMode.BUS, [1])

    def test_is_active_on(self, make_edge):
        edge = make_edge(1, "IST", "LHR", TransportMode.FLIGHT, days=(1, 3, 5))
        assert edge.is_active_on(3)
        assert not edge.is_active_on(2)
        assert edge.sorted_days == (1, 3, 5)


# -------------------------
# Itinerary
# -------------------------


class TestItinerary:
    def test_three_segment_itinerary(self, make_edge):
        before = make_edge(1, "CCIST", "IST", TransportMode.BUS)
        flight = make_edge(2, "IST", "LHR", TransportMode.FLIGHT)
        after = make_edge(3, "LHR", "WEMB", TransportMode.UBER)

        itinerary = Itinerary.from_segments([
            Segment.from_edge(before, SegmentKind.BEFORE_FLIGHT),
            Segment.from_edge(flight, SegmentKind.FLIGHT),
            Segment.from_edge(after, SegmentKind.AFTER_FLIGHT),
        ])

        assert itinerary.num_segments == 3
        assert itinerary.flight_segment.transportation_id == 2
        assert itinerary.origin.code == "CCIST"
        assert itinerary.destination.code == "WEMB"
        assert itinerary.location_codes == ["CCIST", "IST", "LHR", "WEMB"]

    def test_rejects_no_flight(self, make_edge):
        bus = make_edge(1, "CCIST", "IST", TransportMode.BUS)
        with pytest.raises(ValueError, match="exactly one flight"):
            Itinerary.from_segments([Segment.from_edge(bus, SegmentKind.BEFORE_FLIGHT)])

    def test_rejects_wrong_order(self, make_edge):
        flight = make_edge(2, "IST", "LHR", TransportMode.FLIGHT)
        before = make_edge(1, "CCIST", "IST", TransportMode.BUS)
        with pytest.raises(ValueError, match="out of order"):
            Itinerary.from_segments([
                Segment.from_edge(flight, SegmentKind.FLIGHT),
                Segment.from_edge(before, SegmentKind.BEFORE_FLIGHT),
            ])

    def test_rejects_disconnected_segments(self, make_edge):
        before = make_edge(1, "CCIST", "SAW", TransportMode.BUS)
        flight = make_edge(2, "IST", "LHR", TransportMode.FLIGHT)
        with pytest.raises(ValueError, match="does not connect"):
            Itinerary.from_segments([
                Segment.from_edge(before, SegmentKind.BEFORE_FLIGHT),
                Segment.from_edge(flight, SegmentKind.FLIGHT),
            ])

    def test_rejects_empty(self):
        with pytest.raises(ValueError, match="1-3 segments"):
            Itinerary.from_segments([])

    def test_segment_kind_display_names(self):
        assert SegmentKind.BEFORE_FLIGHT.display_name == "Before Flight Transfer"
        assert SegmentKind.FLIGHT.display_name == "Flight"
        assert SegmentKind.AFTER_FLIGHT.display_name == "After Flight Transfer"


# -------------------------
# Pandera schemas
# -------------------------


class TestLocationSchema:
    def test_valid_frame(self, valid_location_df):
        validated = LocationSchema.validate(valid_location_df)
        assert len(validated) == 2

    def test_duplicate_codes_rejected(self, valid_location_df):
        valid_location_df.loc[1, "location_code"] = "CCIST"
        with pytest.raises(pa.errors.SchemaError):
            LocationSchema.validate(valid_location_df)

    def test_short_code_rejected(self, valid_location_df):
        valid_location_df.loc[0, "location_code"] = "AB"
        with pytest.raises(pa.errors.SchemaError):
            LocationSchema.validate(valid_location_df)


class TestScheduleEdgeSchema:
    def test_valid_frame(self, valid_edge_df):
        validated = ScheduleEdgeSchema.validate(valid_edge_df)
        assert list(validated["transportation_id"]) == [1, 2]

    def test_extra_columns_pass_through(self, valid_edge_df):
        valid_edge_df["note"] = ["a", "b"]
        validated = ScheduleEdgeSchema.validate(valid_edge_df)
        assert "note" in validated.columns

    def test_unknown_type_rejected(self, valid_edge_df):
        valid_edge_df.loc[0, "transportation_type"] = "TRAIN"
        with pytest.raises(pa.errors.SchemaError):
            ScheduleEdgeSchema.validate(valid_edge_df)

    def test_bad_operating_days_rejected(self, valid_edge_df):
        valid_edge_df.loc[1, "operating_days"] = "1,8"
        with pytest.raises(pa.errors.SchemaError):
            ScheduleEdgeSchema.validate(valid_edge_df)

    def test_same_endpoints_rejected(self, valid_edge_df):
        valid_edge_df.loc[0, "destination_id"] = 1
        with pytest.raises(pa.errors.SchemaError):
            ScheduleEdgeSchema.validate(valid_edge_df)
