"""
Stockage JSON plat — data.json = {sections, posts, nextSectionId}.
Migration des posts à chaque lecture, réécriture seulement si nécessaire.
"""
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

from .core import dump_document, normalize_store
from .posts import Post, default_post_id, ensure_unique_post_id, parse_blocks_and_plain_text

log = logging.getLogger(__name__)


def empty_document() -> dict:
    return {"sections": [], "posts": [], "nextSectionId": 1}


class JsonStore:
    """
    Store fichier. Pas de contrôle de concurrence : dernier écrivain gagnant.

    Usage:
        >>> store = JsonStore("data/data.json")
        >>> posts = store.list_posts(section_id=2)
    """

    def __init__(self, path):
        self.path = Path(path)

    # ── Lecture / écriture brutes ──

    def load_document(self) -> dict:
        """Document brut. Fichier absent ou illisible → document vide."""
        if not self.path.exists():
            return empty_document()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("%s illisible, document vide utilisé : %s", self.path, e)
            return empty_document()
        if not isinstance(data, dict):
            log.warning("%s : racine inattendue (%s), document vide utilisé", self.path, type(data).__name__)
            return empty_document()
        return data

    def save_document(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def load(self) -> dict:
        """Document normalisé ; persisté seulement si la migration a changé quelque chose."""
        changed, data = normalize_store(self.load_document())
        if changed:
            self.save_document(data)
            log.info("%s migré et réécrit", self.path)
        return data

    # ── Posts ──

    def list_posts(self, section_id: Optional[int] = None) -> List[dict]:
        posts = self.load()["posts"]
        if section_id is not None:
            posts = [p for p in posts if isinstance(p, dict) and p.get("sectionId") == section_id]
        return posts

    def get_post(self, post_id: str) -> Optional[dict]:
        for p in self.load()["posts"]:
            if isinstance(p, dict) and str(p.get("id")) == str(post_id):
                return p
        return None

    def create_post(
        self,
        title: str = "",
        blocks: Any = None,
        content: Any = None,
        section_id: Optional[int] = None,
        image: Optional[str] = None,
        requested_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> dict:
        data = self.load()
        parsed, plain = parse_blocks_and_plain_text(blocks, content)
        base_id = (requested_id or "").strip() or default_post_id(today)
        post = Post(
            id=ensure_unique_post_id(base_id, [p for p in data["posts"] if isinstance(p, dict)]),
            title=title or "",
            content=plain if plain is not None else (content if isinstance(content, str) else ""),
            blocks=parsed,
            image=image,
            date=(today or date.today()).isoformat(),
            section_id=section_id or 1,
        )
        record = post.model_dump(mode="json", by_alias=True)
        data["posts"].append(record)
        self.save_document(data)
        log.info("post %s créé (section %s)", record["id"], record["sectionId"])
        return record

    def update_post(
        self,
        post_id: str,
        title: Optional[str] = None,
        blocks: Any = None,
        content: Any = None,
        section_id: Optional[int] = None,
        image: Optional[str] = None,
    ) -> Optional[dict]:
        """Mise à jour partielle : les champs non fournis (ou vides) gardent leur valeur."""
        data = self.load()
        posts = data["posts"]
        idx = next((i for i, p in enumerate(posts)
                    if isinstance(p, dict) and str(p.get("id")) == str(post_id)), None)
        if idx is None:
            return None

        existing = posts[idx]
        parsed, plain = parse_blocks_and_plain_text(blocks, content)
        updated = dict(existing)
        updated["title"] = title or existing.get("title", "")
        if plain is not None:
            updated["content"] = plain
        elif isinstance(content, str):
            updated["content"] = content
        if parsed is not None:
            updated["blocks"] = dump_document(parsed)
        else:
            updated.setdefault("blocks", None)
        if section_id:
            updated["sectionId"] = section_id
        if image:
            updated["image"] = image

        posts[idx] = updated
        self.save_document(data)
        log.info("post %s mis à jour", post_id)
        return updated

    def delete_post(self, post_id: str) -> Optional[dict]:
        """Retire le post et le retourne (None si absent)."""
        data = self.load()
        posts = data["posts"]
        for i, p in enumerate(posts):
            if isinstance(p, dict) and str(p.get("id")) == str(post_id):
                del posts[i]
                self.save_document(data)
                log.info("post %s supprimé", post_id)
                return p
        return None
