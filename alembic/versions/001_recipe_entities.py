"""Recipe entities: recipes, tags, equipment and their join tables

Revision ID: 001_recipe_entities
Revises: 
Create Date: 2026-02-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_recipe_entities"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(36), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.String(36), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(36), nullable=True),
    ]


def upgrade() -> None:
    is_postgres = op.get_bind().dialect.name == "postgresql"

    if is_postgres:
        op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")

    # Recipes table
    op.create_table(
        "recipes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(2000), nullable=True),
        sa.Column("instructions", sa.Text, nullable=False),
        sa.Column("prep_time_minutes", sa.Integer, nullable=True),
        sa.Column("cook_time_minutes", sa.Integer, nullable=True),
        sa.Column("servings", sa.Integer, nullable=True),
        sa.Column("protein_grams", sa.Numeric(10, 2), nullable=True),
        sa.Column("is_tried", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("source_url", sa.String(2048), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        # Facets stored as enum ordinals
        sa.Column("workspace_needed", sa.Integer, nullable=True),
        sa.Column("time_category", sa.Integer, nullable=True),
        sa.Column("messiness", sa.Integer, nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_recipes_is_tried", "recipes", ["is_tried"])
    op.create_index("ix_recipes_time_category", "recipes", ["time_category"])
    op.create_index("ix_recipes_workspace_needed", "recipes", ["workspace_needed"])
    op.create_index("ix_recipes_created_at", "recipes", ["created_at"])

    if is_postgres:
        # Trigram indexes back the similarity() search on title/description
        op.create_index(
            "ix_recipes_title_trgm", "recipes", ["title"],
            postgresql_using="gin", postgresql_ops={"title": "gin_trgm_ops"},
        )
        op.create_index(
            "ix_recipes_description_trgm", "recipes", ["description"],
            postgresql_using="gin", postgresql_ops={"description": "gin_trgm_ops"},
        )

    # Tags table
    op.create_table(
        "tags",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("tag_type", sa.Integer, nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_tags_name", "tags", ["name"])
    op.create_index(
        "ux_tags_lower_name_type", "tags", [sa.text("lower(name)"), "tag_type"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
        sqlite_where=sa.text("is_deleted = 0"),
    )

    # Equipment table
    op.create_table(
        "equipment",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_audit_columns(),
    )
    op.create_index(
        "ux_equipment_lower_name", "equipment", [sa.text("lower(name)")],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
        sqlite_where=sa.text("is_deleted = 0"),
    )

    # Join tables
    op.create_table(
        "recipe_tags",
        sa.Column("recipe_id", sa.String(36), sa.ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.String(36), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_recipe_tags_tag_id", "recipe_tags", ["tag_id"])

    op.create_table(
        "recipe_equipment",
        sa.Column("recipe_id", sa.String(36), sa.ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("equipment_id", sa.String(36), sa.ForeignKey("equipment.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_recipe_equipment_equipment_id", "recipe_equipment", ["equipment_id"])


def downgrade() -> None:
    op.drop_table("recipe_equipment")
    op.drop_table("recipe_tags")
    op.drop_table("equipment")
    op.drop_table("tags")
    op.drop_table("recipes")
