"""Recipe reads and writes.

- Filtered, paginated listing (trigram search + tag/equipment/facet filters)
- Create / partial update / soft delete / tried toggling
- Projection of Recipe rows (with live tags and equipment) to RecipeOut

Every operation runs in the caller's session and commits once at the end.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Query, Session, joinedload, selectinload
from sqlalchemy.sql import false

from ..core.pagination import PageInfo
from ..enums import TagType
from ..models import Recipe, RecipeTag, RecipeEquipment, Tag, Equipment, generate_uuid
from ..schemas import (
    RecipeCreate, RecipePatch, RecipeFilter, RecipeOut, RecipeListOut,
    TagIn, TagOut, EquipmentOut,
)
from ..settings import settings
from .errors import RecipeNotFoundError
from .queries import active
from .resolver import get_or_create_tag, get_or_create_equipment

logger = logging.getLogger("recipebox.recipes")

_TAG_TYPE_ORDER = {t: i for i, t in enumerate(TagType)}

_ASSOCIATIONS = (
    selectinload(Recipe.recipe_tags).joinedload(RecipeTag.tag),
    selectinload(Recipe.recipe_equipment).joinedload(RecipeEquipment.equipment),
)


# --- Projection ---

def recipe_to_out(recipe: Recipe) -> RecipeOut:
    """Convert a Recipe (associations loaded) to RecipeOut.

    Tags/equipment that were soft-deleted on their own are left out.
    """
    tags = sorted(
        (link.tag for link in recipe.recipe_tags if not link.tag.is_deleted),
        key=lambda t: (_TAG_TYPE_ORDER[t.tag_type], t.name.lower()),
    )
    equipment = sorted(
        (link.equipment for link in recipe.recipe_equipment if not link.equipment.is_deleted),
        key=lambda e: e.name.lower(),
    )

    return RecipeOut(
        id=recipe.id,
        title=recipe.title,
        instructions=recipe.instructions,
        description=recipe.description,
        prep_time_minutes=recipe.prep_time_minutes,
        cook_time_minutes=recipe.cook_time_minutes,
        servings=recipe.servings,
        protein_grams=float(recipe.protein_grams) if recipe.protein_grams is not None else None,
        is_tried=recipe.is_tried,
        source_url=recipe.source_url,
        image_url=recipe.image_url,
        notes=recipe.notes,
        workspace_needed=recipe.workspace_needed,
        time_category=recipe.time_category,
        messiness=recipe.messiness,
        tags=[TagOut.model_validate(t) for t in tags],
        equipment=[EquipmentOut.model_validate(e) for e in equipment],
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


# --- Lookup ---

def _get_active_recipe(db: Session, recipe_id: str, with_associations: bool = False) -> Recipe:
    query = active(db, Recipe)
    if with_associations:
        query = query.options(*_ASSOCIATIONS)
    recipe = query.filter(Recipe.id == recipe_id).first()
    if recipe is None:
        raise RecipeNotFoundError(recipe_id)
    return recipe


def get_recipe(db: Session, recipe_id: str) -> RecipeOut:
    return recipe_to_out(_get_active_recipe(db, recipe_id, with_associations=True))


# --- Filtering ---

def _lowered(names: Iterable[str]) -> list[str]:
    return [n.strip().lower() for n in names if n and n.strip()]


def _has_tag(tag_type: TagType, names: Iterable[str]):
    return Recipe.recipe_tags.any(
        RecipeTag.tag.has(
            and_(
                Tag.tag_type == tag_type,
                func.lower(Tag.name).in_(_lowered(names)),
                Tag.is_deleted == false(),
            )
        )
    )


def _has_equipment(names: Iterable[str]):
    return Recipe.recipe_equipment.any(
        RecipeEquipment.equipment.has(
            and_(
                func.lower(Equipment.name).in_(_lowered(names)),
                Equipment.is_deleted == false(),
            )
        )
    )


def _matches_search(term: str, threshold: float):
    return or_(
        func.similarity(func.lower(Recipe.title), term) > threshold,
        and_(
            Recipe.description.isnot(None),
            func.similarity(func.lower(Recipe.description), term) > threshold,
        ),
    )


def build_filter_query(db: Session, filters: RecipeFilter) -> Query:
    """Conjunction of every provided filter over non-deleted recipes."""
    query = active(db, Recipe)

    if filters.search_term and filters.search_term.strip():
        term = filters.search_term.strip().lower()
        query = query.filter(_matches_search(term, settings.recipe_search_threshold))

    if filters.is_tried is not None:
        query = query.filter(Recipe.is_tried == filters.is_tried)

    if _lowered(filters.cuisines):
        query = query.filter(_has_tag(TagType.CUISINE, filters.cuisines))

    if _lowered(filters.types):
        query = query.filter(_has_tag(TagType.TYPE, filters.types))

    if _lowered(filters.equipment_names):
        query = query.filter(_has_equipment(filters.equipment_names))

    if filters.workspace_needed is not None:
        query = query.filter(Recipe.workspace_needed == filters.workspace_needed)

    if filters.time_category is not None:
        query = query.filter(Recipe.time_category == filters.time_category)

    if filters.messiness is not None:
        query = query.filter(Recipe.messiness == filters.messiness)

    if filters.min_protein_grams is not None:
        # NULL protein never satisfies a minimum
        query = query.filter(Recipe.protein_grams >= filters.min_protein_grams)

    return query


def list_recipes(db: Session, filters: RecipeFilter) -> RecipeListOut:
    """Filter, count, then page. Newest first; id breaks created_at ties."""
    logger.debug(f"Listing recipes with filters {filters.model_dump(exclude_defaults=True)}")

    query = build_filter_query(db, filters)
    total_count = query.order_by(None).count()
    page = PageInfo(
        total_count=total_count,
        page_number=filters.page_number,
        page_size=filters.page_size,
    )

    recipes = (
        query
        .options(*_ASSOCIATIONS)
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        .offset(page.offset)
        .limit(page.page_size)
        .all()
    )

    return RecipeListOut(items=[recipe_to_out(r) for r in recipes], **page.as_dict())


# --- Associations ---

def _attach_tags(db: Session, recipe: Recipe, tag_inputs: list[TagIn], actor_id: Optional[str]) -> None:
    seen: set[str] = set()
    for tag_in in tag_inputs:
        tag = get_or_create_tag(db, tag_in.name, tag_in.tag_type, actor_id)
        if tag.id in seen:
            continue
        seen.add(tag.id)
        recipe.recipe_tags.append(RecipeTag(recipe_id=recipe.id, tag=tag))


def _attach_equipment(db: Session, recipe: Recipe, names: list[str], actor_id: Optional[str]) -> None:
    seen: set[str] = set()
    for name in names:
        equipment = get_or_create_equipment(db, name, actor_id)
        if equipment.id in seen:
            continue
        seen.add(equipment.id)
        recipe.recipe_equipment.append(RecipeEquipment(recipe_id=recipe.id, equipment=equipment))


def _replace_tags(db: Session, recipe: Recipe, tag_inputs: list[TagIn], actor_id: Optional[str]) -> None:
    recipe.recipe_tags.clear()
    # old join rows must be gone before re-adding the same (recipe, tag) keys
    db.flush()
    _attach_tags(db, recipe, tag_inputs, actor_id)


def _replace_equipment(db: Session, recipe: Recipe, names: list[str], actor_id: Optional[str]) -> None:
    recipe.recipe_equipment.clear()
    db.flush()
    _attach_equipment(db, recipe, names, actor_id)


# --- Mutations ---

def _url_str(url) -> Optional[str]:
    return str(url) if url is not None else None


def create_recipe(db: Session, payload: RecipeCreate, actor_id: Optional[str] = None) -> str:
    """Create a recipe plus its tag/equipment links; returns the new id."""
    recipe = Recipe(
        id=generate_uuid(),
        title=payload.title,
        instructions=payload.instructions,
        description=payload.description,
        prep_time_minutes=payload.prep_time_minutes,
        cook_time_minutes=payload.cook_time_minutes,
        servings=payload.servings,
        protein_grams=payload.protein_grams,
        is_tried=payload.is_tried,
        source_url=_url_str(payload.source_url),
        image_url=_url_str(payload.image_url),
        notes=payload.notes,
        workspace_needed=payload.workspace_needed,
        time_category=payload.time_category,
        messiness=payload.messiness,
        created_by=actor_id,
        recipe_tags=[],
        recipe_equipment=[],
    )
    db.add(recipe)

    if payload.tags:
        _attach_tags(db, recipe, payload.tags, actor_id)
    if payload.equipment_names:
        _attach_equipment(db, recipe, payload.equipment_names, actor_id)

    recipe_id = recipe.id
    db.commit()

    logger.info(f"Created recipe {recipe_id} with title '{payload.title}'")
    return recipe_id


def update_recipe(
    db: Session, recipe_id: str, payload: RecipePatch, actor_id: Optional[str] = None
) -> None:
    """Partial update. Provided tag/equipment lists replace the current set."""
    recipe = _get_active_recipe(db, recipe_id, with_associations=True)

    changes = payload.model_dump(exclude_unset=True, exclude={"tags", "equipment_names"})
    for field in ("source_url", "image_url"):
        if field in changes:
            changes[field] = _url_str(changes[field])
    recipe.update(**changes)

    if payload.tags is not None:
        _replace_tags(db, recipe, payload.tags, actor_id)
    if payload.equipment_names is not None:
        _replace_equipment(db, recipe, payload.equipment_names, actor_id)

    recipe.touch(actor_id)
    db.commit()

    logger.info(f"Updated recipe {recipe_id}")


def delete_recipe(db: Session, recipe_id: str, actor_id: Optional[str] = None) -> None:
    """Soft delete. Join rows stay; the recipe is simply no longer readable."""
    recipe = _get_active_recipe(db, recipe_id)
    recipe.soft_delete(actor_id)
    recipe.touch(actor_id)
    db.commit()

    logger.info(f"Soft deleted recipe {recipe_id}")


def mark_as_tried(db: Session, recipe_id: str, actor_id: Optional[str] = None) -> None:
    recipe = _get_active_recipe(db, recipe_id)
    recipe.mark_as_tried()
    recipe.touch(actor_id)
    db.commit()


def mark_as_not_tried(db: Session, recipe_id: str, actor_id: Optional[str] = None) -> None:
    recipe = _get_active_recipe(db, recipe_id)
    recipe.mark_as_not_tried()
    recipe.touch(actor_id)
    db.commit()
