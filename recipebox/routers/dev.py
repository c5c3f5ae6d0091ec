"""Dev-only helpers: sample data seeding."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..db import get_db
from ..enums import TagType, WorkspaceNeeded, TimeCategory, Messiness
from ..models import Recipe
from ..schemas import RecipeCreate, SeedResponse, TagIn
from ..services import recipe_service
from ..services.queries import active

router = APIRouter()
logger = logging.getLogger("recipebox.dev")


SAMPLE_RECIPES = [
    RecipeCreate(
        title="Tomato Soup",
        description="Smooth roasted tomato soup with basil.",
        instructions="Roast tomatoes and garlic. Simmer with stock. Blend until smooth.",
        prep_time_minutes=10,
        cook_time_minutes=40,
        servings=4,
        protein_grams=6,
        workspace_needed=WorkspaceNeeded.SMALL,
        time_category=TimeCategory.MEDIUM,
        messiness=Messiness.LOW,
        tags=[TagIn(name="Italian", tag_type=TagType.CUISINE), TagIn(name="Soup", tag_type=TagType.TYPE)],
        equipment_names=["Pot", "Blender", "Oven"],
    ),
    RecipeCreate(
        title="Beef Noodle Soup",
        description="Taiwanese braised beef noodle soup.",
        instructions="Braise beef shank with aromatics for three hours. Cook noodles. Serve in broth.",
        prep_time_minutes=30,
        cook_time_minutes=180,
        servings=6,
        protein_grams=38,
        workspace_needed=WorkspaceNeeded.MEDIUM,
        time_category=TimeCategory.LONG,
        messiness=Messiness.MEDIUM,
        tags=[TagIn(name="Taiwanese", tag_type=TagType.CUISINE), TagIn(name="Soup", tag_type=TagType.TYPE)],
        equipment_names=["Pot"],
    ),
    RecipeCreate(
        title="Sourdough Bread",
        description="Country loaf with an overnight cold proof.",
        instructions="Mix levain, flour and water. Stretch and fold. Shape, proof overnight, bake.",
        prep_time_minutes=60,
        cook_time_minutes=45,
        servings=8,
        protein_grams=9,
        workspace_needed=WorkspaceNeeded.LARGE,
        time_category=TimeCategory.OVERNIGHT,
        messiness=Messiness.HIGH,
        tags=[TagIn(name="French", tag_type=TagType.CUISINE), TagIn(name="Bread", tag_type=TagType.TYPE)],
        equipment_names=["Dutch Oven", "Oven"],
    ),
    RecipeCreate(
        title="Chicken Katsu Curry",
        description="Crispy chicken cutlet with Japanese curry sauce.",
        instructions="Bread and fry chicken. Simmer curry roux with vegetables. Serve over rice.",
        prep_time_minutes=20,
        cook_time_minutes=30,
        servings=2,
        protein_grams=42,
        workspace_needed=WorkspaceNeeded.MEDIUM,
        time_category=TimeCategory.QUICK,
        messiness=Messiness.HIGH,
        tags=[TagIn(name="Japanese", tag_type=TagType.CUISINE), TagIn(name="Weeknight", tag_type=TagType.CUSTOM)],
        equipment_names=["Frying Pan", "Pot"],
    ),
]


def seed_sample_recipes(db: Session) -> tuple[int, int]:
    """Create sample recipes that are not present yet (matched by title)."""
    created = 0
    skipped = 0
    for sample in SAMPLE_RECIPES:
        exists = (
            active(db, Recipe)
            .filter(func.lower(Recipe.title) == sample.title.lower())
            .first()
        )
        if exists:
            skipped += 1
            continue
        recipe_service.create_recipe(db, sample)
        created += 1
    logger.info(f"Seeded {created} recipes ({skipped} already present)")
    return created, skipped


@router.post("/dev/seed", response_model=SeedResponse)
def seed(db: Session = Depends(get_db)):
    """Idempotently load the sample recipes."""
    created, skipped = seed_sample_recipes(db)
    return SeedResponse(
        recipes_created=created,
        recipes_skipped=skipped,
        message=f"Created {created} recipes",
    )
