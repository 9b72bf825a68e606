"""Bloc Heading — titre h1..h6."""
from typing import Literal

from pydantic import Field

from .base import BaseBlock


class HeadingBlock(BaseBlock):
    type: Literal["heading"] = "heading"
    level: int = Field(default=2, ge=1, le=6)
    content: str = ""
