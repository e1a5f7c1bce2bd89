"""Recipe schemas."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from cookbook.schemas.cookbook import MAX_ID

MAX_INGREDIENTS = 500
MAX_STEPS = 500
MAX_TAGS = 50

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
TagName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
StepText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000)]
PlainIngredient = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000)]
Author = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]


# --- Ingredient input ---


class StructuredIngredient(BaseModel):
    """Ingredient given as separate quantity/unit/name fields."""

    model_config = ConfigDict(extra="forbid")

    line: Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)] | None = None
    quantity: float | None = Field(None, allow_inf_nan=False)
    unit: Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)] | None = None
    name: Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)] | None = None


# A bare string is a structured entry with only `line` populated.
IngredientInput = PlainIngredient | StructuredIngredient


class IngredientRow(BaseModel):
    """Normalized ingredient line, ready to store."""

    line: str
    quantity: float | None = None
    unit: str | None = None
    name: str | None = None


def to_ingredient_row(entry: IngredientInput) -> IngredientRow:
    """Normalize either input shape into the stored row shape."""
    if isinstance(entry, StructuredIngredient):
        return IngredientRow(
            line=entry.line or entry.name or "",
            quantity=entry.quantity,
            unit=entry.unit or None,
            name=entry.name or None,
        )
    return IngredientRow(line=entry)


# --- Recipe requests ---


def _not_null(value):
    if value is None:
        raise ValueError("must not be null")
    return value


class RecipeBase(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    description: Description | None = None
    author: Author | None = None
    servings: int | None = Field(None, gt=0, le=999)
    ingredients: list[IngredientInput] | None = Field(None, max_length=MAX_INGREDIENTS)
    steps: list[StepText] | None = Field(None, max_length=MAX_STEPS)
    notes: str | None = Field(None, max_length=10_000)
    photo_data_url: str | None = Field(None, alias="photoDataUrl", max_length=35_000_000)
    tags: list[TagName] | None = Field(None, max_length=MAX_TAGS)

    # Optional fields may be omitted but not sent as null. Only the photo
    # accepts null, which clears it.
    @field_validator(
        "description", "author", "servings", "ingredients", "steps", "notes", "tags", mode="before"
    )
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class RecipeCreate(RecipeBase):
    """Create a new recipe."""

    cookbook_id: int = Field(..., gt=0, le=MAX_ID)
    title: Title


class RecipeUpdate(RecipeBase):
    """Sparse update: only fields present in the payload are touched."""

    title: Title | None = None

    @field_validator("title", mode="before")
    @classmethod
    def reject_null_title(cls, value):
        return _not_null(value)

    def is_set(self, field: str) -> bool:
        return field in self.model_fields_set


class RecipeCreated(BaseModel):
    id: int


class UsesResponse(BaseModel):
    """Counter value after an increment or decrement."""

    uses: int


# --- Recipe responses ---


class IngredientLine(BaseModel):
    """Bare ingredient line."""

    model_config = ConfigDict(extra="forbid")

    line: str


class StructuredIngredientLine(IngredientLine):
    """Ingredient line with at least one structured field."""

    quantity: float | None
    unit: str | None
    name: str | None


class RecipeSummary(BaseModel):
    """Recipe list item enriched with tags, likes and catalog ingredient names."""

    id: int
    cookbook_id: int
    title: str
    description: str
    author: str
    photo: str | None
    uses: int
    servings: int
    created_at: datetime
    tags: list[str] = []
    likes: list[str] = []
    ingredient_names: list[str] = []


class RecipeDetail(BaseModel):
    """Full recipe with ordered ingredients and steps."""

    id: int
    cookbook_id: int
    title: str
    description: str
    author: str
    photo: str | None
    uses: int
    servings: int
    created_at: datetime
    ingredients: list[StructuredIngredientLine | IngredientLine]
    steps: list[str]
    notes: str
    tags: list[str]
    likes: list[str]


# --- Filtering ---

FilterMode = Literal["AND", "OR"]
SortMode = Literal["AZ", "ZA", "MOST"]


class RecipeFilterOptions(BaseModel):
    """Tag/ingredient facet selection and sort order for a recipe listing."""

    tags: list[str] = []
    tag_mode: FilterMode = "OR"
    ingredients: list[str] = []
    ingredient_mode: FilterMode = "OR"
    sort: SortMode = "AZ"

