class RecipeNotFoundError(ValueError):
    """Requested recipe does not exist or has been soft-deleted."""

    def __init__(self, recipe_id: str | None = None):
        super().__init__("Recipe not found.")
        self.recipe_id = recipe_id


class InvalidPageError(ValueError):
    """Page number / page size outside the accepted range."""
