"""Property listing and image models."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base

PROPERTY_TYPES = ("home", "hostel")


class Property(Base):
    """A listed home or hostel.

    Exactly one of ``home_details`` / ``hostel_details`` is set, matching ``type``.
    """

    __tablename__ = "property"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(256), nullable=False)
    price = Column(Float, nullable=False)
    location = Column(String(512), nullable=False, index=True)
    type = Column(String(16), nullable=False, index=True)
    owner_name = Column(String(256), nullable=False)
    owner_contact = Column(String(256), nullable=False)
    home_details = Column(JSON(none_as_null=True), nullable=True)
    hostel_details = Column(JSON(none_as_null=True), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    image_records = relationship(
        "PropertyImage",
        order_by="PropertyImage.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def owner(self) -> dict:
        return {"name": self.owner_name, "contact": self.owner_contact}

    @property
    def images(self) -> list[str]:
        return [record.path for record in self.image_records]


class PropertyImage(Base):
    """Reference to a stored image file, ordered within its property."""

    __tablename__ = "property_image"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("property.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    path = Column(String(512), nullable=False, unique=True)
