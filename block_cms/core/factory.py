"""
Factory de blocs — construit un bloc par défaut pour un type donné.
"""
import copy
import logging
from typing import Any, Dict, Iterable, Optional

from ..blocks import BLOCK_TYPES, Block, BlockId
from .document import collect_ids
from .errors import BlockModelError, InvalidVariant
from .ids import IdGenerator, TimestampIdGenerator

log = logging.getLogger(__name__)

_MAX_ID_ATTEMPTS = 1000

# Valeurs par défaut par variante (en plus de id + size="full")
_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "heading":   {"content": "", "level": 2},
    "paragraph": {"content": ""},
    "image":     {"url": "", "alt": ""},
    "columns":   {"column_count": 2, "children": [[], []]},
    "grid":      {"columns": 3, "gap": 16, "children": []},
}


class BlockFactory:
    """
    Factory de blocs avec générateur d'ids injectable.

    Usage:
        >>> factory = BlockFactory(SequentialIdGenerator("b"))
        >>> factory.create("heading", document=blocks)
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self.id_generator = id_generator or TimestampIdGenerator()

    def new_id(self, existing_ids: Iterable[BlockId] = ()) -> BlockId:
        """Tire un id absent de `existing_ids`."""
        taken = set(existing_ids)
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self.id_generator()
            if candidate not in taken:
                return candidate
            log.debug("id %r déjà pris, nouveau tirage", candidate)
        raise BlockModelError(f"Aucun id libre après {_MAX_ID_ATTEMPTS} tirages")

    def create(
        self,
        block_type: str,
        document: Optional[Iterable[Any]] = None,
        existing_ids: Iterable[BlockId] = (),
    ) -> Block:
        """
        Crée un bloc `block_type` avec un id unique dans `document`.

        Args:
            block_type: heading | paragraph | image | columns | grid
            document: document cible (tous niveaux parcourus pour l'unicité)
            existing_ids: ids supplémentaires à éviter

        Raises:
            InvalidVariant: type inconnu
        """
        block_cls = BLOCK_TYPES.get(block_type)
        if block_cls is None:
            raise InvalidVariant(block_type, BLOCK_TYPES)

        taken = set(existing_ids)
        if document is not None:
            taken |= collect_ids(document)

        return block_cls(id=self.new_id(taken), size="full", **copy.deepcopy(_DEFAULTS[block_type]))


_default_factory = BlockFactory()


def create_block(
    block_type: str,
    document: Optional[Iterable[Any]] = None,
    *,
    id_generator: Optional[IdGenerator] = None,
    existing_ids: Iterable[BlockId] = (),
) -> Block:
    """Crée un bloc (fonction raccourcie). Générateur horodaté par défaut."""
    factory = BlockFactory(id_generator) if id_generator is not None else _default_factory
    return factory.create(block_type, document=document, existing_ids=existing_ids)
