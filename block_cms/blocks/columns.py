"""
Bloc Columns — mise en page à arité fixe.
`children` contient exactement `column_count` colonnes, chacune une séquence de blocs.
"""
from typing import Any, List, Literal

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator

from .base import BaseBlock


def resize_columns(children: List[list], count: int) -> List[list]:
    """
    Redimensionne la liste des colonnes à `count` entrées.
    Les colonnes existantes sont conservées par index, les nouvelles sont vides,
    les colonnes en trop sont tronquées. Retourne toujours une nouvelle liste.
    """
    return [list(children[i]) if i < len(children) else [] for i in range(count)]


class ColumnsBlock(BaseBlock):
    # L'arité est revérifiée à chaque affectation (cols.column_count = 4)
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    type: Literal["columns"] = "columns"
    # Ancien format : la clé `columns` portait le nombre de colonnes
    column_count: int = Field(
        default=2,
        ge=1,
        validation_alias=AliasChoices("columnCount", "column_count", "columns"),
        serialization_alias="columnCount",
    )
    children: List[List["BlockUnion"]] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _null_columns_are_empty(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [[] if col is None else col for col in value]
        return value

    @model_validator(mode="after")
    def _fit_children(self) -> "ColumnsBlock":
        if len(self.children) != self.column_count:
            self.children = resize_columns(self.children, self.column_count)
        return self

    def has_child_sequences(self) -> bool:
        return True

    def child_sequences(self) -> List[list]:
        return list(self.children)
