"""Bloc Grid — grille à arité variable (columns = nombre de pistes CSS, gap en px)."""
from typing import List, Literal

from pydantic import AliasChoices, Field

from .base import BaseBlock


class GridBlock(BaseBlock):
    type: Literal["grid"] = "grid"
    # Ancien format : `cols`
    columns: int = Field(default=3, ge=1, validation_alias=AliasChoices("columns", "cols"))
    gap: int = Field(default=16, ge=0)
    children: List["BlockUnion"] = Field(default_factory=list)

    def has_child_sequences(self) -> bool:
        return True

    def child_sequences(self) -> List[list]:
        return [self.children]
