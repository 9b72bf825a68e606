"""
Moteur de mutations — opérations sur UN niveau de l'arbre (une séquence ordonnée).

L'appelant descend lui-même dans les conteneurs (colonne d'un Columns, enfants d'un
Grid) et recompose le parent avec le résultat. Toutes les opérations sont pures :
elles retournent une nouvelle liste et ne modifient jamais leur entrée.

Un id absent n'est pas une erreur (état UI périmé, bloc supprimé entre-temps) :
la séquence est retournée inchangée.
"""
import logging
from typing import Any, List, Optional, Sequence

from pydantic import AliasChoices

from ..blocks import BaseBlock, Block, BlockId, ColumnsBlock
from .document import collect_ids, duplicate_ids
from .errors import BlockModelError, StructuralViolation

log = logging.getLogger(__name__)


def index_of(sequence: Sequence[BaseBlock], block_id: BlockId) -> int:
    for i, block in enumerate(sequence):
        if block.id == block_id:
            return i
    return -1


# ── Opérations sur une séquence ───────────────────────────────────────────────

def update_by_id(sequence: Sequence[Block], block_id: BlockId, new_block: Block) -> List[Block]:
    """Remplace le bloc `block_id` par `new_block`, sans changer l'ordre."""
    out = list(sequence)
    idx = index_of(out, block_id)
    if idx < 0:
        log.debug("update_by_id: %r absent, ignoré", block_id)
        return out
    current = out[idx]
    if new_block.type != current.type:
        log.warning("update_by_id: changement de type refusé (%s → %s) pour %r",
                    current.type, new_block.type, block_id)
        return out
    if new_block.id != current.id:
        log.warning("update_by_id: changement d'id refusé (%r → %r)", current.id, new_block.id)
        return out
    # model_copy(update=…) ne valide pas : on revalide pour garder les invariants
    out[idx] = type(new_block).model_validate(dict(new_block))
    return out


def delete_by_id(sequence: Sequence[Block], block_id: BlockId) -> List[Block]:
    """Retire le premier (et unique) bloc `block_id`."""
    out = list(sequence)
    idx = index_of(out, block_id)
    if idx < 0:
        log.debug("delete_by_id: %r absent, ignoré", block_id)
        return out
    del out[idx]
    return out


def reorder(
    sequence: Sequence[Block],
    moved_id: BlockId,
    target_id: BlockId,
    strict: bool = False,
) -> List[Block]:
    """
    Déplace `moved_id` à la position actuellement occupée par `target_id`
    (array move, pas swap) : [a, b, c] avec c → a donne [c, a, b].

    Les deux ids doivent appartenir à CETTE séquence. Si un seul y est, c'est une
    tentative de déplacement entre conteneurs, non supportée : séquence inchangée,
    ou StructuralViolation si `strict`.
    """
    out = list(sequence)
    if moved_id == target_id:
        return out
    old_index = index_of(out, moved_id)
    new_index = index_of(out, target_id)
    if old_index < 0 and new_index < 0:
        log.debug("reorder: %r et %r absents, ignoré", moved_id, target_id)
        return out
    if old_index < 0 or new_index < 0:
        msg = (f"Déplacement entre conteneurs non supporté "
               f"({moved_id!r} → {target_id!r})")
        if strict:
            raise StructuralViolation(msg)
        log.warning("reorder: %s", msg)
        return out
    out.insert(new_index, out.pop(old_index))
    return out


def insert_block(
    sequence: Sequence[Block],
    block: Block,
    index: Optional[int] = None,
    document: Optional[Sequence[Any]] = None,
) -> List[Block]:
    """
    Insère `block` à `index` (fin de séquence si None).

    Les ids doivent rester uniques dans tout le document : passer `document` (la racine)
    quand `sequence` est une colonne ou les enfants d'un Grid. Sans `document`, seule
    `sequence` est vérifiée. Un conflit (y compris à l'intérieur de `block`) est ignoré.
    """
    out = list(sequence)
    clashes = duplicate_ids([block]) | (collect_ids([block]) & collect_ids(document if document is not None else out))
    if clashes:
        log.warning("insert_block: ids déjà présents %r, ignoré", sorted(map(str, clashes)))
        return out
    if index is None:
        out.append(block)
    else:
        out.insert(index, block)
    return out


# ── Édition des champs d'un bloc ──────────────────────────────────────────────

def _field_name(block_cls, key: str) -> str:
    """Nom Python du champ pour `key` (nom, alias de sérialisation ou ancien nom)."""
    fields = block_cls.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if key == info.serialization_alias:
            return name
        if isinstance(info.validation_alias, AliasChoices) and key in info.validation_alias.choices:
            return name
    raise BlockModelError(f"Champ inconnu pour {block_cls.__name__} : {key!r}")


def update_fields(block: Block, **changes: Any) -> Block:
    """
    Retourne une copie validée de `block` avec `changes` appliqués.

    Les champs de forme des conteneurs (columnCount, columns, gap) passent par la
    validation : pour un Columns, `children` est redimensionné (contenu conservé
    par index, colonnes ajoutées vides). Le type et l'id sont immuables.
    """
    block_cls = type(block)
    values = dict(block)
    for key, value in changes.items():
        name = _field_name(block_cls, key)
        if name in ("type", "id") and value != values[name]:
            raise StructuralViolation(f"Le champ {name!r} d'un bloc est immuable")
        values[name] = value
    return block_cls.model_validate(values)


def set_column(block: ColumnsBlock, index: int, sequence: Sequence[Block]) -> ColumnsBlock:
    """Remplace la colonne `index` d'un Columns (l'arité ne change pas)."""
    if not 0 <= index < block.column_count:
        raise StructuralViolation(
            f"Colonne {index} hors limites (column_count={block.column_count})")
    children = [list(col) for col in block.children]
    children[index] = list(sequence)
    return block.model_copy(update={"children": children})
