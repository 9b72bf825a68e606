"""
Posts — schéma JSON + helpers de création / édition.
"""
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .blocks import Block, BlockUnion
from .core import IdGenerator, create_block, decode_json, extract_text, looks_like_json_array, parse_document
from .core.errors import ParseFailure


class Post(BaseModel):
    """Post tel que stocké (data.json) et servi par l'API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    content: str = ""                                       # texte dérivé, ou ancien texte brut
    blocks: Union[List[BlockUnion], str, None] = None       # canonique, ancien encodage, ou absent
    image: Optional[str] = None
    date: str = Field(default_factory=lambda: date.today().isoformat())
    section_id: int = Field(default=1, alias="sectionId")


# ── Ids de posts ──────────────────────────────────────────────────────────────

def default_post_id(today: Optional[date] = None) -> str:
    """Id par défaut : date du jour (YYYY-MM-DD)."""
    return (today or date.today()).isoformat()


def ensure_unique_post_id(base_id: str, posts: Iterable[Mapping[str, Any]]) -> str:
    """`base_id`, puis `base_id-2`, `base_id-3`… jusqu'à un id libre (comparaison en str)."""
    taken = {str(p.get("id")) for p in posts}
    candidate, n = base_id, 2
    while candidate in taken:
        candidate = f"{base_id}-{n}"
        n += 1
    return candidate


# ── Payload d'édition ─────────────────────────────────────────────────────────

def parse_blocks_and_plain_text(
    blocks: Any,
    content: Any = None,
) -> Tuple[Optional[List[Block]], Optional[str]]:
    """
    Blocs + texte brut dérivé depuis un payload de formulaire.

    `blocks` (liste ou chaîne JSON) est prioritaire ; sinon un `content` qui
    encode une liste JSON est accepté (ancien éditeur). Retourne (None, None) si
    aucun des deux ne donne de blocs.

    Raises:
        InvalidVariant: type de bloc inconnu
        pydantic.ValidationError: bloc mal formé
    """
    raw = None
    if isinstance(blocks, list):
        raw = blocks
    elif isinstance(blocks, str) and blocks:
        try:
            decoded = decode_json(blocks)
        except ParseFailure:
            decoded = None
        if isinstance(decoded, list):
            raw = decoded
    if raw is None and looks_like_json_array(content):
        try:
            decoded = decode_json(content)
        except ParseFailure:
            decoded = None
        if isinstance(decoded, list):
            raw = decoded
    if raw is None:
        return None, None
    parsed = parse_document(raw)
    return parsed, extract_text(parsed)


def blocks_for_editing(post: Mapping[str, Any], id_generator: Optional[IdGenerator] = None) -> List[Any]:
    """
    Séquence de blocs à charger dans l'éditeur pour `post`.
    Un post sans blocs mais avec du texte devient un unique Paragraph.
    """
    blocks = post.get("blocks")
    if isinstance(blocks, list):
        return blocks
    content = post.get("content")
    if isinstance(content, str) and content.strip():
        block = create_block("paragraph", id_generator=id_generator)
        return [block.model_copy(update={"content": content})]
    return []
