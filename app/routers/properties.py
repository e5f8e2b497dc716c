"""Property API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.rate_limit import limiter
from app.schemas.auth import MessageResponse
from app.schemas.property import PropertyForm, PropertyListResponse, PropertyResponse
from app.services.image_store import ImageStore, get_image_store
from app.services.property import get_property_service

router = APIRouter(prefix="/api/properties", tags=["Properties"])


@router.get("", response_model=PropertyListResponse)
def list_properties(
    location: str | None = None,
    type: str | None = None,
    db: Session = Depends(get_db),
) -> PropertyListResponse:
    """List properties, optionally filtered by location substring and type."""
    service = get_property_service()
    properties = service.query_properties(db, location=location, property_type=type)
    return PropertyListResponse(
        items=[PropertyResponse.model_validate(p) for p in properties],
        total=len(properties),
    )


@router.post("/add", response_model=PropertyResponse, status_code=201)
@limiter.limit("20/minute")
async def add_property(
    request: Request,
    title: str | None = Form(None),
    location: str | None = Form(None),
    price: float = Form(...),
    type: str | None = Form(None),
    owner_name: str | None = Form(None, alias="ownerName"),
    owner_contact: str | None = Form(None, alias="ownerContact"),
    property_type: str | None = Form(None, alias="propertyType"),
    facing: str | None = Form(None),
    floor: str | None = Form(None),
    carpet_area: str | None = Form(None, alias="carpetArea"),
    parking: str | None = Form(None),
    shared_by: str | None = Form(None, alias="sharedBy"),
    facilities: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> PropertyResponse:
    """Create a home or hostel listing with up to five images."""
    form = PropertyForm(
        title=title,
        location=location,
        price=price,
        type=type,
        owner_name=owner_name,
        owner_contact=owner_contact,
        property_type=property_type,
        facing=facing,
        floor=floor,
        carpet_area=carpet_area,
        parking=parking,
        shared_by=shared_by,
        facilities=facilities,
    )
    service = get_property_service()
    prop = await service.create_property(db, user.user_id, form, images or [], image_store)
    return PropertyResponse.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(property_id: int, db: Session = Depends(get_db)) -> PropertyResponse:
    """Get a single property by ID."""
    return PropertyResponse.model_validate(get_property_service().get_property(db, property_id))


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(
    property_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> MessageResponse:
    """Delete one of the caller's properties together with its images."""
    get_property_service().delete_property(db, property_id, image_store, user_id=user.user_id)
    return MessageResponse(message="Property deleted successfully")
