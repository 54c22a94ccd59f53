from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

from src.route_planner.application import RoutePlanner
from src.route_planner.config import load_settings
from src.route_planner.exceptions import (
    ConflictError,
    EdgeSourceError,
    InvalidInputError,
    NotFoundError,
)
from src.route_planner.logging_config import setup_logging
from src.route_planner.schemas.location import Location
from src.route_planner.schemas.route import Itinerary, Segment
from src.route_planner.schemas.transportation import ScheduleEdge


@lru_cache(maxsize=1)
def get_planner() -> RoutePlanner:
    """Process-wide planner built from environment settings on first use."""
    return RoutePlanner(load_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_planner.cache_info().currsize:
        get_planner().shutdown()
        get_planner.cache_clear()


app = FastAPI(title="Route Planner API", lifespan=lifespan)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error mapping ---


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(404, exc)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error(400, exc)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return _error(409, exc)


@app.exception_handler(EdgeSourceError)
async def edge_source_handler(request: Request, exc: EdgeSourceError):
    return _error(503, exc)


# --- Pydantic Schemas (The JSON Contract) ---


class LocationSchema(BaseModel):
    id: int
    name: str
    country: str
    city: str
    location_code: str

    @classmethod
    def from_domain(cls, location: Location) -> "LocationSchema":
        return cls(
            id=location.id,
            name=location.name,
            country=location.country,
            city=location.city,
            location_code=location.code,
        )


class LocationRequest(BaseModel):
    name: str
    country: str
    city: str
    location_code: str

    def to_domain(self) -> Location:
        # Field rules (required, code length) are enforced by Location itself
        return Location(
            name=self.name,
            country=self.country,
            city=self.city,
            code=self.location_code,
        )


class TransportationSchema(BaseModel):
    id: int
    origin_location_id: int
    destination_location_id: int
    transportation_type: str
    operating_days: List[int]
    origin_location: LocationSchema
    destination_location: LocationSchema

    @classmethod
    def from_domain(cls, edge: ScheduleEdge) -> "TransportationSchema":
        return cls(
            id=edge.id,
            origin_location_id=edge.origin_id,
            destination_location_id=edge.destination_id,
            transportation_type=edge.mode.value,
            operating_days=list(edge.sorted_days),
            origin_location=LocationSchema.from_domain(edge.origin),
            destination_location=LocationSchema.from_domain(edge.destination),
        )


class TransportationRequest(BaseModel):
    origin_location_id: int
    destination_location_id: int
    transportation_type: str
    operating_days: List[int]


class SegmentSchema(BaseModel):
    # 'from' is a keyword, so the field is renamed and exposed by alias
    model_config = ConfigDict(populate_by_name=True)

    transportation_id: int
    type: str
    from_location: LocationSchema = Field(alias="from")
    to_location: LocationSchema = Field(alias="to")
    segment_type: str
    segment_label: str

    @classmethod
    def from_domain(cls, segment: Segment) -> "SegmentSchema":
        return cls(
            transportation_id=segment.transportation_id,
            type=segment.mode.value,
            from_location=LocationSchema.from_domain(segment.origin),
            to_location=LocationSchema.from_domain(segment.destination),
            segment_type=segment.kind.value,
            segment_label=segment.kind.display_name,
        )


class RouteSchema(BaseModel):
    segments: List[SegmentSchema]

    @classmethod
    def from_domain(cls, itinerary: Itinerary) -> "RouteSchema":
        return cls(segments=[SegmentSchema.from_domain(s) for s in itinerary.segments])


# --- API Endpoints: route search ---


@app.get("/api/routes", response_model=List[RouteSchema])
def find_routes(
    origin_id: int = Query(alias="originId"),
    destination_id: int = Query(alias="destinationId"),
    travel_date: str = Query(alias="date", description="Travel date, YYYY-MM-DD"),
    planner: RoutePlanner = Depends(get_planner),
):
    itineraries = planner.find_routes(origin_id, destination_id, travel_date)
    return [RouteSchema.from_domain(itinerary) for itinerary in itineraries]


@app.get("/api/routes/locations", response_model=List[LocationSchema])
def route_locations(planner: RoutePlanner = Depends(get_planner)):
    """Locations offered in the route search form."""
    return [LocationSchema.from_domain(loc) for loc in planner.locations.list_locations()]


# --- API Endpoints: locations ---


@app.get("/api/locations", response_model=List[LocationSchema])
def list_locations(planner: RoutePlanner = Depends(get_planner)):
    return [LocationSchema.from_domain(loc) for loc in planner.locations.list_locations()]


@app.get("/api/locations/{location_id}", response_model=LocationSchema)
def get_location(location_id: int, planner: RoutePlanner = Depends(get_planner)):
    return LocationSchema.from_domain(planner.locations.get_location(location_id))


@app.post("/api/locations", response_model=LocationSchema, status_code=201)
def create_location(request: LocationRequest, planner: RoutePlanner = Depends(get_planner)):
    created = planner.locations.create_location(request.to_domain())
    return LocationSchema.from_domain(created)


@app.put("/api/locations/{location_id}", response_model=LocationSchema)
def update_location(
    location_id: int,
    request: LocationRequest,
    planner: RoutePlanner = Depends(get_planner),
):
    updated = planner.locations.update_location(location_id, request.to_domain())
    return LocationSchema.from_domain(updated)


@app.delete("/api/locations/{location_id}", status_code=204)
def delete_location(location_id: int, planner: RoutePlanner = Depends(get_planner)):
    planner.locations.delete_location(location_id)
    return Response(status_code=204)


# --- API Endpoints: transportations ---


@app.get("/api/transportations", response_model=List[TransportationSchema])
def list_transportations(planner: RoutePlanner = Depends(get_planner)):
    return [
        TransportationSchema.from_domain(edge)
        for edge in planner.transportations.list_transportations()
    ]


@app.get("/api/transportations/{transportation_id}", response_model=TransportationSchema)
def get_transportation(transportation_id: int, planner: RoutePlanner = Depends(get_planner)):
    edge = planner.transportations.get_transportation(transportation_id)
    return TransportationSchema.from_domain(edge)


@app.post("/api/transportations", response_model=TransportationSchema, status_code=201)
def create_transportation(
    request: TransportationRequest,
    planner: RoutePlanner = Depends(get_planner),
):
    created = planner.transportations.create_transportation(
        request.origin_location_id,
        request.destination_location_id,
        request.transportation_type,
        request.operating_days,
    )
    return TransportationSchema.from_domain(created)


@app.put("/api/transportations/{transportation_id}", response_model=TransportationSchema)
def update_transportation(
    transportation_id: int,
    request: TransportationRequest,
    planner: RoutePlanner = Depends(get_planner),
):
    updated = planner.transportations.update_transportation(
        transportation_id,
        request.origin_location_id,
        request.destination_location_id,
        request.transportation_type,
        request.operating_days,
    )
    return TransportationSchema.from_domain(updated)


@app.delete("/api/transportations/{transportation_id}", status_code=204)
def delete_transportation(
    transportation_id: int,
    planner: RoutePlanner = Depends(get_planner),
):
    planner.transportations.delete_transportation(transportation_id)
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn

    setup_logging(load_settings().log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)
