"""
Cœur du modèle de blocs : factory, extraction texte, mutations, migration.
"""
from .errors import BlockModelError, InvalidVariant, ParseFailure, StructuralViolation
from .ids import IdGenerator, SequentialIdGenerator, TimestampIdGenerator
from .document import (
    child_sequences, collect_ids, dump_document, duplicate_ids, find_by_id, iter_blocks,
    parse_block, parse_document,
)
from .factory import BlockFactory, create_block
from .extract import extract_text
from .tree import (
    delete_by_id, index_of, insert_block, reorder, set_column, update_by_id, update_fields,
)
from .migration import (
    decode_json, looks_like_json_array, normalize_post, normalize_posts, normalize_store,
)

__all__ = [
    "BlockModelError", "InvalidVariant", "ParseFailure", "StructuralViolation",
    "IdGenerator", "SequentialIdGenerator", "TimestampIdGenerator",
    "child_sequences", "collect_ids", "dump_document", "duplicate_ids", "find_by_id", "iter_blocks",
    "parse_block", "parse_document",
    "BlockFactory", "create_block",
    "extract_text",
    "delete_by_id", "index_of", "insert_block", "reorder", "set_column",
    "update_by_id", "update_fields",
    "decode_json", "looks_like_json_array", "normalize_post", "normalize_posts",
    "normalize_store",
]
