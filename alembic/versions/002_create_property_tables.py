"""Create property and property_image tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "property",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("location", sa.String(length=512), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("owner_name", sa.String(length=256), nullable=False),
        sa.Column("owner_contact", sa.String(length=256), nullable=False),
        sa.Column("home_details", sa.JSON(none_as_null=True), nullable=True),
        sa.Column("hostel_details", sa.JSON(none_as_null=True), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["created_by"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_property_location"), "property", ["location"], unique=False)
    op.create_index(op.f("ix_property_type"), "property", ["type"], unique=False)
    op.create_index(op.f("ix_property_created_by"), "property", ["created_by"], unique=False)

    op.create_table(
        "property_image",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("path", sa.String(length=512), nullable=False),
        sa.ForeignKeyConstraint(["property_id"], ["property.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("path"),
    )
    op.create_index(op.f("ix_property_image_property_id"), "property_image", ["property_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_property_image_property_id"), table_name="property_image")
    op.drop_table("property_image")
    op.drop_index(op.f("ix_property_created_by"), table_name="property")
    op.drop_index(op.f("ix_property_type"), table_name="property")
    op.drop_index(op.f("ix_property_location"), table_name="property")
    op.drop_table("property")
