"""
Migration des anciens formats de stockage vers la forme canonique.

Trois formes possibles pour un post :
  (a) canonique      — `blocks` est une liste de blocs
  (b) double-encodée — `blocks` est une chaîne JSON qui encode la liste
  (c) pré-blocs      — pas de `blocks` exploitable, `content` est une chaîne JSON
                       qui encode la liste (format le plus ancien)

normalize_post() est idempotente : appliquée à sa propre sortie, elle retourne
(False, post inchangé). Elle peut donc tourner à chaque lecture ; le résultat
n'est persisté que si `changed` est vrai.

Heuristique « ressemble à du JSON » : le texte (trimé) commence par "[".
Un texte brut qui commence par "[" est donc parsé à tort, puis ignoré si le
parse échoue. Conservée telle quelle pour compatibilité avec les données existantes.
"""
import json
import logging
from typing import Any, List, Mapping, Optional, Tuple

from .errors import ParseFailure
from .extract import extract_text

log = logging.getLogger(__name__)


def looks_like_json_array(value: Any) -> bool:
    return isinstance(value, str) and value.strip().startswith("[")


def decode_json(raw: str) -> Any:
    """json.loads qui lève ParseFailure."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParseFailure(str(e)) from e


def _parse_sequence(raw: str, post_id: Any, field: str) -> Optional[list]:
    """Liste décodée, ou None si illisible / pas une liste (l'étape est alors sautée)."""
    try:
        parsed = decode_json(raw)
    except ParseFailure as e:
        log.debug("post %r : %s illisible, migration sautée (%s)", post_id, field, e)
        return None
    if not isinstance(parsed, list):
        log.debug("post %r : %s ne contient pas une liste, migration sautée", post_id, field)
        return None
    return parsed


def normalize_post(post: Mapping[str, Any]) -> Tuple[bool, dict]:
    """Retourne (changed, post normalisé). L'entrée n'est jamais modifiée."""
    out = dict(post)
    post_id = out.get("id")

    # 1. blocks double-encodé
    if isinstance(out.get("blocks"), str):
        parsed = _parse_sequence(out["blocks"], post_id, "blocks")
        if parsed is not None:
            out["blocks"] = parsed
            if looks_like_json_array(out.get("content")):
                out["content"] = extract_text(parsed)
            return True, out

    # 2. format pré-blocs : la liste est dans content
    if not isinstance(out.get("blocks"), list) and looks_like_json_array(out.get("content")):
        parsed = _parse_sequence(out["content"], post_id, "content")
        if parsed is not None:
            out["blocks"] = parsed
            out["content"] = extract_text(parsed)
            return True, out

    return False, out


def normalize_posts(posts: List[Any]) -> Tuple[bool, List[Any]]:
    """Normalise chaque post indépendamment. Les entrées qui ne sont pas des posts sont conservées."""
    changed = False
    out = []
    for post in posts:
        if not isinstance(post, Mapping):
            log.warning("entrée de post ignorée (type %s)", type(post).__name__)
            out.append(post)
            continue
        post_changed, normalized = normalize_post(post)
        changed = changed or post_changed
        out.append(normalized)
    return changed, out


def normalize_store(data: Mapping[str, Any]) -> Tuple[bool, dict]:
    """Normalise tous les posts d'un document de stockage {sections, posts, nextSectionId}."""
    out = dict(data)
    posts = out.get("posts")
    changed, out["posts"] = normalize_posts(posts if isinstance(posts, list) else [])
    if changed:
        log.info("migration : posts réécrits au format canonique")
    return changed, out
