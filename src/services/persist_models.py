# src/services/persist_models.py
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeFields(BaseModel):
    """Columns of the ``recipes`` table that callers may write.

    Unknown keys are dropped. Values are left untyped; the table's column
    types are the schema.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[Any] = None
    source: Optional[Any] = None
    source_link: Optional[Any] = None
    prep_time: Optional[Any] = None
    cook_time: Optional[Any] = None
    rest_time: Optional[Any] = None
    total_time: Optional[Any] = None
    servings: Optional[Any] = None
    yield_: Optional[Any] = Field(default=None, alias="yield")
    oven_temp: Optional[Any] = None
    tin_size: Optional[Any] = None
    dietary_info: Optional[Any] = None
    ingredients: Optional[Any] = None
    method: Optional[Any] = None
    tips: Optional[Any] = None
    notes: Optional[Any] = None
    storage: Optional[Any] = None
    equipment: Optional[Any] = None
    variations: Optional[Any] = None
    make_ahead: Optional[Any] = None

    def to_row(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, keyed by column name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


RECIPE_FIELDS: tuple[str, ...] = tuple(
    field.alias or name for name, field in RecipeFields.model_fields.items()
)


def filter_recipe_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    return RecipeFields.model_validate(dict(payload)).to_row()
