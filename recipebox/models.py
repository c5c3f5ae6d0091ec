"""SQLAlchemy ORM models for recipebox.

Tables:
- recipes: Core recipe data, soft-deletable
- tags: Cuisine / Type / Custom labels, deduplicated by lower(name) + type
- equipment: Kitchen equipment, deduplicated by lower(name)
- recipe_tags, recipe_equipment: Join rows (composite keys, cascade on both parents)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Text,
    Integer,
    Boolean,
    ForeignKey,
    Index,
    Numeric,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, false

from .db import Base
from .enums import TagType, WorkspaceNeeded, TimeCategory, Messiness
from .orm_types import OrdinalEnum


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    """Audit and soft-delete columns shared by every base entity."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    deleted_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    def touch(self, actor_id: Optional[str] = None) -> None:
        self.updated_at = utcnow()
        self.updated_by = actor_id

    def soft_delete(self, actor_id: Optional[str] = None) -> None:
        self.is_deleted = True
        self.deleted_at = utcnow()
        self.deleted_by = actor_id


class Recipe(AuditMixin, Base):
    """A recipe in the collection."""
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_is_tried", "is_tried"),
        Index("ix_recipes_time_category", "time_category"),
        Index("ix_recipes_workspace_needed", "workspace_needed"),
        Index("ix_recipes_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)

    prep_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cook_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    protein_grams: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    is_tried: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    source_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Facets
    workspace_needed: Mapped[Optional[WorkspaceNeeded]] = mapped_column(
        OrdinalEnum(WorkspaceNeeded), nullable=True
    )
    time_category: Mapped[Optional[TimeCategory]] = mapped_column(
        OrdinalEnum(TimeCategory), nullable=True
    )
    messiness: Mapped[Optional[Messiness]] = mapped_column(
        OrdinalEnum(Messiness), nullable=True
    )

    # Associations are never lazy loaded; read paths include them explicitly
    recipe_tags: Mapped[list["RecipeTag"]] = relationship(
        "RecipeTag", back_populates="recipe", cascade="all, delete-orphan",
        lazy="raise_on_sql"
    )
    recipe_equipment: Mapped[list["RecipeEquipment"]] = relationship(
        "RecipeEquipment", back_populates="recipe", cascade="all, delete-orphan",
        lazy="raise_on_sql"
    )

    def update(self, **changes) -> None:
        """Set-if-provided: None leaves the current value untouched."""
        for field, value in changes.items():
            if value is None:
                continue
            if not hasattr(self, field):
                raise AttributeError(f"Recipe has no field {field!r}")
            setattr(self, field, value)

    def mark_as_tried(self) -> None:
        self.is_tried = True

    def mark_as_not_tried(self) -> None:
        self.is_tried = False


class Tag(AuditMixin, Base):
    """A label attached to recipes."""
    __tablename__ = "tags"
    __table_args__ = (
        Index("ix_tags_name", "name"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    tag_type: Mapped[TagType] = mapped_column(OrdinalEnum(TagType), nullable=False)


class Equipment(AuditMixin, Base):
    """A piece of equipment a recipe needs."""
    __tablename__ = "equipment"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)


class RecipeTag(Base):
    """Recipe <-> Tag join row."""
    __tablename__ = "recipe_tags"
    __table_args__ = (
        Index("ix_recipe_tags_tag_id", "tag_id"),
    )

    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="recipe_tags")
    tag: Mapped["Tag"] = relationship("Tag")


class RecipeEquipment(Base):
    """Recipe <-> Equipment join row."""
    __tablename__ = "recipe_equipment"
    __table_args__ = (
        Index("ix_recipe_equipment_equipment_id", "equipment_id"),
    )

    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True
    )
    equipment_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("equipment.id", ondelete="CASCADE"), primary_key=True
    )

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="recipe_equipment")
    equipment: Mapped["Equipment"] = relationship("Equipment")


# Case-insensitive uniqueness among live rows; backstop for the get-or-create race
Index(
    "ux_tags_lower_name_type",
    func.lower(Tag.name),
    Tag.tag_type,
    unique=True,
    postgresql_where=Tag.is_deleted.is_(False),
    sqlite_where=Tag.is_deleted.is_(False),
)
Index(
    "ux_equipment_lower_name",
    func.lower(Equipment.name),
    unique=True,
    postgresql_where=Equipment.is_deleted.is_(False),
    sqlite_where=Equipment.is_deleted.is_(False),
)
