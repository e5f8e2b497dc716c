"""Pydantic schemas for property endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.base import CamelModel


class PropertyForm(BaseModel):
    """Multipart form fields of a new listing, before validation."""

    title: str | None = None
    location: str | None = None
    price: float = 0
    type: str | None = None
    owner_name: str | None = None
    owner_contact: str | None = None
    property_type: str | None = None
    facing: str | None = None
    floor: str | None = None
    carpet_area: str | None = None
    parking: str | None = None
    shared_by: str | None = None
    facilities: str | None = None


class Owner(BaseModel):
    name: str
    contact: str


class Parking(BaseModel):
    car: bool = False
    bike: bool = False


class Facilities(BaseModel):
    food: bool = False
    wifi: bool = False
    transport: bool = False
    laundry: bool = False


class HomeDetails(CamelModel):
    property_type: str | None = None
    facing: str | None = None
    floor: str | None = None
    carpet_area: str | None = None
    parking: Parking = Parking()


class HostelDetails(CamelModel):
    shared_by: str | None = None
    facilities: Facilities = Facilities()


class PropertyResponse(CamelModel):
    id: int
    title: str
    price: float
    location: str
    type: str
    owner: Owner
    images: list[str]
    home_details: HomeDetails | None = None
    hostel_details: HostelDetails | None = None
    created_by: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyListResponse(BaseModel):
    items: list[PropertyResponse]
    total: int
