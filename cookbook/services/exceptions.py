"""Domain errors raised by the cookbook services."""


class CookbookAppError(Exception):
    """Base class for errors the API turns into structured responses."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(CookbookAppError):
    """Malformed or missing input, rejected before any write."""


class NotFoundError(CookbookAppError):
    """The targeted entity does not exist."""


class CookbookNotFoundError(NotFoundError):
    def __init__(self, cookbook_id: int):
        super().__init__("Cookbook not found")
        self.cookbook_id = cookbook_id


class RecipeNotFoundError(NotFoundError):
    def __init__(self, recipe_id: int):
        super().__init__("Recipe not found")
        self.recipe_id = recipe_id


class SchemaBootstrapError(RuntimeError):
    """The store's shape could not be verified or upgraded at startup."""
