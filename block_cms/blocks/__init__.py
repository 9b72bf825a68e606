"""
Blocs — exports publics + BlockUnion discriminé par `type`.
"""
from typing import Annotated, Dict, Type, Union

from pydantic import Field

from .base import BaseBlock, BlockId, BlockSize
from .heading import HeadingBlock
from .paragraph import ParagraphBlock
from .image import ImageBlock
from .columns import ColumnsBlock, resize_columns
from .grid import GridBlock

# Union fermée des cinq variantes (annotations / isinstance)
Block = Union[HeadingBlock, ParagraphBlock, ImageBlock, ColumnsBlock, GridBlock]

# Union discriminée par type — utilisable dans Pydantic avec discriminator
BlockUnion = Annotated[Block, Field(discriminator="type")]

BLOCK_TYPES: Dict[str, Type[BaseBlock]] = {
    "heading":   HeadingBlock,
    "paragraph": ParagraphBlock,
    "image":     ImageBlock,
    "columns":   ColumnsBlock,
    "grid":      GridBlock,
}

# Résolution des références récursives vers BlockUnion
ColumnsBlock.model_rebuild()
GridBlock.model_rebuild()

__all__ = [
    "BaseBlock", "BlockId", "BlockSize",
    "HeadingBlock", "ParagraphBlock", "ImageBlock", "ColumnsBlock", "GridBlock",
    "Block", "BlockUnion", "BLOCK_TYPES",
    "resize_columns",
]
