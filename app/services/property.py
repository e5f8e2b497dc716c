"""Property service: listing creation, lookup, filtering and deletion."""

import json
import logging
import math

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.models.property import PROPERTY_TYPES, Property, PropertyImage
from app.schemas.property import PropertyForm
from app.services.image_store import ImageStore

logger = logging.getLogger("happy_homes")

SHARED_BY_CHOICES = ("1", "2", "3", "4+")
PARKING_KEYS = ("car", "bike")
FACILITY_KEYS = ("food", "wifi", "transport", "laundry")


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def _parse_flags(raw: str | None, keys: tuple[str, ...], field: str) -> dict[str, bool]:
    """Parse a JSON object of booleans; absent keys default to False."""
    if raw is None or not raw.strip():
        return {key: False for key in keys}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"'{field}' must be a JSON object") from None
    if not isinstance(parsed, dict):
        raise ValidationError(f"'{field}' must be a JSON object")
    return {key: _flag(parsed.get(key, False)) for key in keys}


def normalize_type(value: str | None) -> str | None:
    """Return 'home' or 'hostel' for any casing, or None for anything else."""
    if value is None:
        return None
    value = value.strip().lower()
    return value if value in PROPERTY_TYPES else None


class PropertyService:
    """Handles the property record lifecycle and queries."""

    def validate_form(self, form: PropertyForm) -> dict:
        """Check a submitted form and build the column values for a new record.

        Only the details block matching ``type`` is produced.
        """
        property_type = normalize_type(form.type)
        if property_type is None:
            raise ValidationError("Property type must be 'home' or 'hostel'")

        required = {
            "title": form.title,
            "location": form.location,
            "ownerName": form.owner_name,
            "ownerContact": form.owner_contact,
        }
        missing = [name for name, value in required.items() if not value or not value.strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        if not math.isfinite(form.price):
            raise ValidationError("Price must be a finite number")
        if form.price < 0:
            raise ValidationError("Price must not be negative")

        values = {
            "title": form.title.strip(),
            "location": form.location.strip(),
            "price": form.price,
            "type": property_type,
            "owner_name": form.owner_name.strip(),
            "owner_contact": form.owner_contact.strip(),
            "home_details": None,
            "hostel_details": None,
        }

        if property_type == "home":
            values["home_details"] = {
                "propertyType": form.property_type,
                "facing": form.facing,
                "floor": form.floor,
                "carpetArea": form.carpet_area,
                "parking": _parse_flags(form.parking, PARKING_KEYS, "parking"),
            }
        else:
            shared_by = form.shared_by.strip() if form.shared_by else None
            if shared_by is not None and shared_by not in SHARED_BY_CHOICES:
                raise ValidationError(f"sharedBy must be one of: {', '.join(SHARED_BY_CHOICES)}")
            values["hostel_details"] = {
                "sharedBy": shared_by,
                "facilities": _parse_flags(form.facilities, FACILITY_KEYS, "facilities"),
            }
        return values

    async def create_property(
        self,
        db: Session,
        user_id: int,
        form: PropertyForm,
        images: list[UploadFile],
        image_store: ImageStore,
    ) -> Property:
        """Store the images, then insert the record referencing them.

        Images already written are removed again if anything later fails.
        """
        values = self.validate_form(form)

        max_images = get_settings().MAX_IMAGES_PER_PROPERTY
        if len(images) > max_images:
            raise ValidationError(f"At most {max_images} images are allowed per property")
        for upload in images:
            error = image_store.validate_upload_metadata(upload.filename or "", upload.content_type)
            if error:
                raise ValidationError(error)

        stored: list[str] = []
        try:
            for upload in images:
                stored.append(await image_store.store(upload))

            prop = Property(created_by=user_id, **values)
            prop.image_records = [PropertyImage(position=i, path=path) for i, path in enumerate(stored)]
            db.add(prop)
            db.commit()
        except Exception:
            db.rollback()
            image_store.delete_many(stored)
            raise

        db.refresh(prop)
        logger.info("Property %s created by user id=%s with %d image(s)", prop.id, user_id, len(stored))
        return prop

    def get_property(self, db: Session, property_id: int) -> Property:
        prop = db.get(Property, property_id)
        if not prop:
            raise NotFoundError("Property not found")
        return prop

    def list_properties(self, db: Session) -> list[Property]:
        """All properties, newest first. Unpaginated."""
        return db.query(Property).order_by(Property.created_at.desc(), Property.id.desc()).all()

    def query_properties(
        self, db: Session, location: str | None = None, property_type: str | None = None
    ) -> list[Property]:
        """Filter by case-insensitive location substring and type.

        An unrecognised type is ignored rather than rejected.
        """
        query = db.query(Property)

        if location and location.strip():
            query = query.filter(Property.location.icontains(location.strip(), autoescape=True))

        normalized = normalize_type(property_type)
        if normalized:
            query = query.filter(Property.type == normalized)

        return query.order_by(Property.created_at.desc(), Property.id.desc()).all()

    def delete_property(
        self, db: Session, property_id: int, image_store: ImageStore, user_id: int | None = None
    ) -> None:
        """Delete a property and its image files.

        When ``user_id`` is given only the creator may delete. Image removal is
        best effort; the record is removed even if some files are already gone.
        """
        prop = self.get_property(db, property_id)
        if user_id is not None and prop.created_by != user_id:
            raise ForbiddenError("You can only delete your own properties")

        image_store.delete_many(prop.images)
        db.delete(prop)
        db.commit()
        logger.info("Property %s deleted", property_id)


_property_service: PropertyService | None = None


def get_property_service() -> PropertyService:
    """Get singleton property service instance."""
    global _property_service
    if _property_service is None:
        _property_service = PropertyService()
    return _property_service
