"""Bloc Paragraph — texte libre."""
from typing import Literal

from .base import BaseBlock


class ParagraphBlock(BaseBlock):
    type: Literal["paragraph"] = "paragraph"
    content: str = ""
