"""Bloc Image — URL (upload, externe ou data:) + texte alternatif."""
from typing import Literal

from .base import BaseBlock


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    url: str = ""
    alt: str = ""
