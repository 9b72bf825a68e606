"""
block_cms v1.0 — modèle de document en blocs pour un petit CMS.

Usage:
    >>> from block_cms import create_block, update_fields, extract_text
    >>> cols = create_block("columns")
    >>> cols = update_fields(cols, columnCount=3)
    >>> extract_text([cols])

Migration des anciens posts:
    >>> from block_cms import normalize_post
    >>> changed, post = normalize_post({"blocks": None, "content": '[{"id": 1, "type": "paragraph", "content": "hi"}]'})
"""

# ── Blocs ────────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, BlockId, BlockSize,
    HeadingBlock, ParagraphBlock, ImageBlock, ColumnsBlock, GridBlock,
    Block, BlockUnion, BLOCK_TYPES,
)

# ── Cœur ─────────────────────────────────────────────────────────────────────
from .core import (
    BlockModelError, InvalidVariant, ParseFailure, StructuralViolation,
    IdGenerator, SequentialIdGenerator, TimestampIdGenerator,
    BlockFactory, create_block,
    extract_text,
    update_by_id, delete_by_id, reorder, insert_block, update_fields, set_column,
    normalize_post, normalize_posts, normalize_store,
    parse_block, parse_document, dump_document,
    iter_blocks, collect_ids, duplicate_ids, find_by_id,
)

# ── Posts + stockage ─────────────────────────────────────────────────────────
from .posts import Post, blocks_for_editing, ensure_unique_post_id, parse_blocks_and_plain_text
from .store import JsonStore

__version__ = "1.0.0"

__all__ = [
    # blocs
    "BaseBlock", "BlockId", "BlockSize",
    "HeadingBlock", "ParagraphBlock", "ImageBlock", "ColumnsBlock", "GridBlock",
    "Block", "BlockUnion", "BLOCK_TYPES",
    # cœur
    "BlockModelError", "InvalidVariant", "ParseFailure", "StructuralViolation",
    "IdGenerator", "SequentialIdGenerator", "TimestampIdGenerator",
    "BlockFactory", "create_block",
    "extract_text",
    "update_by_id", "delete_by_id", "reorder", "insert_block", "update_fields", "set_column",
    "normalize_post", "normalize_posts", "normalize_store",
    "parse_block", "parse_document", "dump_document",
    "iter_blocks", "collect_ids", "duplicate_ids", "find_by_id",
    # posts
    "Post", "blocks_for_editing", "ensure_unique_post_id", "parse_blocks_and_plain_text",
    "JsonStore",
]
