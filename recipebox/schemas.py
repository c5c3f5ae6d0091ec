"""Pydantic schemas for the recipebox API.

Request/response models for:
- Recipes (create, partial update, detail, paginated list)
- Tags and equipment (inline references, autocomplete listings)
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, StringConstraints, UrlConstraints

from .enums import TagType, WorkspaceNeeded, TimeCategory, Messiness


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

# Absolute http(s)/ftp URL, stored as its string form
Url = Annotated[AnyUrl, UrlConstraints(max_length=2048, allowed_schemes=["http", "https", "ftp"])]


# --- Tag / Equipment ---

class TagIn(BaseModel):
    name: Name
    tag_type: TagType


class TagOut(BaseModel):
    id: str
    name: str
    tag_type: TagType

    model_config = ConfigDict(from_attributes=True)


class EquipmentOut(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


# --- Recipe ---

class RecipeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    instructions: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=2000)
    prep_time_minutes: Optional[int] = Field(None, ge=1)
    cook_time_minutes: Optional[int] = Field(None, ge=1)
    servings: Optional[int] = Field(None, ge=1)
    protein_grams: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_tried: bool = False
    source_url: Optional[Url] = None
    image_url: Optional[Url] = None
    notes: Optional[str] = None
    workspace_needed: Optional[WorkspaceNeeded] = None
    time_category: Optional[TimeCategory] = None
    messiness: Optional[Messiness] = None
    tags: Optional[list[TagIn]] = None
    equipment_names: Optional[list[Name]] = None


class RecipePatch(BaseModel):
    """Partial update.

    Scalars: omitted or null means "leave unchanged" (no field can be cleared).
    tags / equipment_names: omitted or null leaves associations alone, a list
    (even an empty one) replaces them.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    instructions: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, max_length=2000)
    prep_time_minutes: Optional[int] = Field(None, ge=1)
    cook_time_minutes: Optional[int] = Field(None, ge=1)
    servings: Optional[int] = Field(None, ge=1)
    protein_grams: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_tried: Optional[bool] = None
    source_url: Optional[Url] = None
    image_url: Optional[Url] = None
    notes: Optional[str] = None
    workspace_needed: Optional[WorkspaceNeeded] = None
    time_category: Optional[TimeCategory] = None
    messiness: Optional[Messiness] = None
    tags: Optional[list[TagIn]] = None  # Replaces all tags if provided
    equipment_names: Optional[list[Name]] = None  # Replaces all equipment if provided


class RecipeCreated(BaseModel):
    id: str


class RecipeOut(BaseModel):
    id: str
    title: str
    instructions: str
    description: Optional[str]
    prep_time_minutes: Optional[int]
    cook_time_minutes: Optional[int]
    servings: Optional[int]
    protein_grams: Optional[float]
    is_tried: bool
    source_url: Optional[str]
    image_url: Optional[str]
    notes: Optional[str]
    workspace_needed: Optional[WorkspaceNeeded]
    time_category: Optional[TimeCategory]
    messiness: Optional[Messiness]
    tags: list[TagOut] = []
    equipment: list[EquipmentOut] = []
    created_at: datetime
    updated_at: Optional[datetime] = None


class RecipeFilter(BaseModel):
    """Validated list filter. Absent fields impose no constraint."""
    search_term: Optional[str] = None
    is_tried: Optional[bool] = None
    cuisines: list[str] = []
    types: list[str] = []
    equipment_names: list[str] = []
    workspace_needed: Optional[WorkspaceNeeded] = None
    time_category: Optional[TimeCategory] = None
    messiness: Optional[Messiness] = None
    min_protein_grams: Optional[Decimal] = None
    page_number: int = 1
    page_size: int = 10


class RecipeListOut(BaseModel):
    items: list[RecipeOut]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool


# --- Dev Seed ---

class SeedResponse(BaseModel):
    recipes_created: int
    recipes_skipped: int
    message: str
