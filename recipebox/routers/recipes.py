"""Recipes API router.

Endpoints:
- GET /api/recipes/tags - Tag autocomplete
- GET /api/recipes/equipment - Equipment autocomplete
- POST /api/recipes - Create recipe (tags/equipment resolved inline)
- GET /api/recipes - Filtered, paginated list
- GET /api/recipes/{id} - Get recipe with tags and equipment
- PUT /api/recipes/{id} - Partial update
- DELETE /api/recipes/{id} - Soft delete
- POST /api/recipes/{id}/tried - Mark tried
- DELETE /api/recipes/{id}/tried - Mark not tried
"""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from ..core.text import split_csv_values
from ..db import get_db
from ..deps import get_actor_id
from ..enums import WorkspaceNeeded, TimeCategory, Messiness
from ..schemas import (
    RecipeCreate, RecipeCreated, RecipePatch, RecipeOut, RecipeListOut,
    RecipeFilter, TagOut, EquipmentOut,
)
from ..services import lookup_service, recipe_service
from ..services.errors import RecipeNotFoundError, InvalidPageError
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("recipebox.recipes")


def get_recipe_filter(
    search_term: Optional[str] = Query(None),
    is_tried: Optional[bool] = Query(None),
    cuisines: Optional[list[str]] = Query(None, description="Repeat or comma-separate"),
    types: Optional[list[str]] = Query(None, description="Repeat or comma-separate"),
    equipment: Optional[list[str]] = Query(None, description="Repeat or comma-separate"),
    workspace_needed: Optional[WorkspaceNeeded] = Query(None),
    time_category: Optional[TimeCategory] = Query(None),
    messiness: Optional[Messiness] = Query(None),
    min_protein_grams: Optional[Decimal] = Query(None, ge=0),
    page_number: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> RecipeFilter:
    return RecipeFilter(
        search_term=search_term,
        is_tried=is_tried,
        cuisines=split_csv_values(cuisines),
        types=split_csv_values(types),
        equipment_names=split_csv_values(equipment),
        workspace_needed=workspace_needed,
        time_category=time_category,
        messiness=messiness,
        min_protein_grams=min_protein_grams,
        page_number=page_number,
        page_size=page_size,
    )


def _not_found(e: RecipeNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


# Static paths first so they are not captured by /recipes/{recipe_id}

@router.get("/recipes/tags", response_model=list[TagOut])
def list_tags(
    search_term: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """All live tags for autocomplete, ordered by type then name."""
    return lookup_service.list_tags(db, search_term)


@router.get("/recipes/equipment", response_model=list[EquipmentOut])
def list_equipment(
    search_term: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """All live equipment for autocomplete, ordered by name."""
    return lookup_service.list_equipment(db, search_term)


@router.post("/recipes", response_model=RecipeCreated, status_code=201)
def create_recipe(
    payload: RecipeCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    actor_id: Optional[str] = Depends(get_actor_id),
):
    """Create a new recipe."""
    recipe_id = recipe_service.create_recipe(db, payload, actor_id)
    response.headers["Location"] = str(request.url_for("get_recipe", recipe_id=recipe_id))
    return RecipeCreated(id=recipe_id)


@router.get("/recipes", response_model=RecipeListOut)
def list_recipes(
    filters: RecipeFilter = Depends(get_recipe_filter),
    db: Session = Depends(get_db),
):
    """Filtered list of recipes, newest first."""
    try:
        return recipe_service.list_recipes(db, filters)
    except InvalidPageError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
):
    """Get a recipe by ID with its tags and equipment."""
    try:
        return recipe_service.get_recipe(db, recipe_id)
    except RecipeNotFoundError as e:
        raise _not_found(e)


@router.put("/recipes/{recipe_id}", status_code=204)
def update_recipe(
    recipe_id: str,
    payload: RecipePatch,
    db: Session = Depends(get_db),
    actor_id: Optional[str] = Depends(get_actor_id),
):
    """Partial update. tags / equipment_names replace the current set when present."""
    try:
        recipe_service.update_recipe(db, recipe_id, payload, actor_id)
    except RecipeNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.delete("/recipes/{recipe_id}", status_code=204)
def delete_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    actor_id: Optional[str] = Depends(get_actor_id),
):
    """Soft delete a recipe."""
    try:
        recipe_service.delete_recipe(db, recipe_id, actor_id)
    except RecipeNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.post("/recipes/{recipe_id}/tried", status_code=204)
def mark_as_tried(
    recipe_id: str,
    db: Session = Depends(get_db),
    actor_id: Optional[str] = Depends(get_actor_id),
):
    try:
        recipe_service.mark_as_tried(db, recipe_id, actor_id)
    except RecipeNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.delete("/recipes/{recipe_id}/tried", status_code=204)
def mark_as_not_tried(
    recipe_id: str,
    db: Session = Depends(get_db),
    actor_id: Optional[str] = Depends(get_actor_id),
):
    try:
        recipe_service.mark_as_not_tried(db, recipe_id, actor_id)
    except RecipeNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=204)
