"""
Document = séquence ordonnée de blocs de premier niveau.
Parse / dump JSON + parcours récursif (modèles typés ou dicts bruts du stockage).
"""
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Set

from pydantic import TypeAdapter, ValidationError

from ..blocks import BLOCK_TYPES, BaseBlock, Block, BlockId, BlockUnion
from .errors import InvalidVariant, StructuralViolation

_BLOCK_ADAPTER = TypeAdapter(BlockUnion)
_DOCUMENT_ADAPTER = TypeAdapter(List[BlockUnion])


def _raise_on_unknown_tag(exc: ValidationError) -> None:
    for err in exc.errors():
        if err.get("type") in ("union_tag_invalid", "union_tag_not_found"):
            raise InvalidVariant((err.get("ctx") or {}).get("tag"), BLOCK_TYPES) from exc


def parse_block(raw: Any) -> Block:
    """dict JSON → bloc typé. Lève InvalidVariant si `type` est inconnu (à n'importe quelle profondeur)."""
    if isinstance(raw, Mapping) and raw.get("type") not in BLOCK_TYPES:
        raise InvalidVariant(raw.get("type"), BLOCK_TYPES)
    try:
        return _BLOCK_ADAPTER.validate_python(raw)
    except ValidationError as e:
        _raise_on_unknown_tag(e)
        raise


def parse_document(raw: Any) -> List[Block]:
    """list JSON → liste de blocs typés. Lève StructuralViolation si un id apparaît deux fois."""
    try:
        blocks = _DOCUMENT_ADAPTER.validate_python(raw)
    except ValidationError as e:
        _raise_on_unknown_tag(e)
        raise
    dupes = duplicate_ids(blocks)
    if dupes:
        raise StructuralViolation(f"Ids de blocs dupliqués : {sorted(map(str, dupes))}")
    return blocks


def dump_document(blocks: Iterable[BaseBlock]) -> List[dict]:
    """Blocs typés → list JSON (noms de champs canoniques : columnCount, columns, gap…)."""
    return [b.model_dump(mode="json", by_alias=True) for b in blocks]


# ── Parcours ──────────────────────────────────────────────────────────────────

def child_sequences(node: Any) -> List[list]:
    """
    Séquences enfants d'un nœud, modèle typé ou dict brut.
    Columns → une séquence par colonne, Grid → une seule séquence, feuilles → [].
    """
    if isinstance(node, BaseBlock):
        return node.child_sequences()
    if isinstance(node, Mapping):
        children = node.get("children")
        if not isinstance(children, list):
            return []
        kind = node.get("type")
        if kind == "columns":
            return [col for col in children if isinstance(col, list)]
        if kind == "grid":
            return [children]
    return []


def iter_blocks(document: Iterable[Any]) -> Iterator[Any]:
    """Tous les blocs de l'arbre, en profondeur d'abord, dans l'ordre du document."""
    for node in document:
        if node is None:
            continue
        yield node
        for seq in child_sequences(node):
            yield from iter_blocks(seq)


def _node_id(node: Any) -> Optional[BlockId]:
    if isinstance(node, Mapping):
        return node.get("id")
    return getattr(node, "id", None)


def collect_ids(document: Iterable[Any]) -> Set[BlockId]:
    """Ensemble des ids présents à toutes les profondeurs."""
    return {i for i in (_node_id(n) for n in iter_blocks(document)) if i is not None}


def duplicate_ids(document: Iterable[Any]) -> Set[BlockId]:
    """Ids portés par plus d'un bloc (toutes profondeurs confondues)."""
    seen: Set[BlockId] = set()
    dupes: Set[BlockId] = set()
    for block_id in (_node_id(n) for n in iter_blocks(document)):
        if block_id is None:
            continue
        if block_id in seen:
            dupes.add(block_id)
        seen.add(block_id)
    return dupes


def find_by_id(document: Iterable[Any], block_id: BlockId) -> Optional[Any]:
    for node in iter_blocks(document):
        if _node_id(node) == block_id:
            return node
    return None
