"""
Extraction texte brut — projection linéaire d'un arbre de blocs (aperçu, recherche).
Accepte des blocs typés ou des dicts bruts issus du stockage.
Le résultat n'est jamais une structure re-parsable.
"""
from typing import Any, List, Mapping

from .document import child_sequences

TEXT_TYPES = ("heading", "paragraph")


def _field(node: Any, name: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def _walk(node: Any, lines: List[str]) -> None:
    if node is None:
        return
    if isinstance(node, (list, tuple)):
        for item in node:
            _walk(item, lines)
        return
    if _field(node, "type") in TEXT_TYPES:
        content = _field(node, "content")
        # Une ligne par bloc texte, même vide
        lines.append("" if content is None else str(content))
        return
    for seq in child_sequences(node):
        _walk(seq, lines)


def extract_text(node: Any) -> str:
    """
    Texte brut d'un bloc ou d'une séquence de blocs.

    Heading / Paragraph → une ligne (content tel quel), Image → rien,
    Columns → colonnes dans l'ordre des index, Grid → enfants dans l'ordre.
    Lignes jointes par "\\n", sans saut de ligne final.
    """
    lines: List[str] = []
    _walk(node, lines)
    return "\n".join(lines)
