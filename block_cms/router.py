"""
Router FastAPI — posts.

GET    /api/posts[?sectionId=]  → posts (migrés à la lecture)
POST   /api/posts               → multipart {title, blocks, content, sectionId, id, image}
PUT    /api/posts/{post_id}     → mise à jour partielle, même payload
DELETE /api/posts/{post_id}     → suppression (+ image uploadée)
"""
import logging
import os
import time
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from .store import JsonStore

log = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])

_DEFAULT_DATA_FILE = str(Path(__file__).parent.parent / "data" / "data.json")
_DEFAULT_UPLOADS = str(Path(__file__).parent.parent / "data" / "uploads")
_DEFAULT_MAX_UPLOAD = 15 * 1024 * 1024  # 15 Mo par fichier
_CHUNK = 64 * 1024


def uploads_dir() -> Path:
    return Path(os.getenv("CMS_UPLOADS_DIR", _DEFAULT_UPLOADS))


def max_upload_bytes() -> int:
    return int(os.getenv("CMS_MAX_UPLOAD_BYTES", _DEFAULT_MAX_UPLOAD))


def get_store() -> JsonStore:
    return JsonStore(os.getenv("CMS_DATA_FILE", _DEFAULT_DATA_FILE))


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except ValueError:
        return None


def _save_upload(file: Optional[UploadFile]) -> Optional[str]:
    """
    Sauvegarde l'image uploadée par morceaux, retourne son URL publique (/uploads/…).
    Fichier trop gros → 400, rien ne reste sur disque.
    """
    if file is None or not file.filename:
        return None
    limit = max_upload_bytes()
    dest_dir = uploads_dir()
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / f"{int(time.time() * 1000)}{Path(file.filename).suffix}"
    written = 0
    with open(dest, "wb") as out:
        while True:
            chunk = file.file.read(_CHUNK)
            if not chunk:
                break
            written += len(chunk)
            if written > limit:
                break
            out.write(chunk)
    if written > limit:
        dest.unlink()
        log.warning("upload %s refusé : plus de %d octets", file.filename, limit)
        raise HTTPException(400, f"Fichier trop volumineux (max {limit} octets)")
    return f"/uploads/{dest.name}"


def _remove_upload(url: Optional[str]) -> None:
    if not url or not url.startswith("/uploads/"):
        return
    path = uploads_dir() / Path(url).name
    if path.exists():
        path.unlink()
        log.info("image %s supprimée", path)


# ── Endpoints ─────────────────────────────────────────────────────────────────

@router.get("/api/posts")
def list_posts(
    section_id: Optional[str] = Query(None, alias="sectionId"),
    store: JsonStore = Depends(get_store),
):
    """Liste les posts (filtrés par section si demandé)."""
    return store.list_posts(_parse_int(section_id))


@router.post("/api/posts")
def create_post(
    title: str = Form(""),
    blocks: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    section_id: Optional[str] = Form(None, alias="sectionId"),
    post_id: Optional[str] = Form(None, alias="id"),
    image: Optional[UploadFile] = File(None),
    store: JsonStore = Depends(get_store),
):
    image_url = _save_upload(image)
    try:
        return store.create_post(
            title=title,
            blocks=blocks,
            content=content,
            section_id=_parse_int(section_id),
            image=image_url,
            requested_id=post_id,
        )
    except ValueError as e:
        _remove_upload(image_url)
        raise HTTPException(400, str(e))
    except Exception:
        _remove_upload(image_url)
        log.exception("POST /api/posts")
        raise HTTPException(500, "Erreur interne")


@router.put("/api/posts/{post_id}")
def update_post(
    post_id: str,
    title: Optional[str] = Form(None),
    blocks: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    section_id: Optional[str] = Form(None, alias="sectionId"),
    image: Optional[UploadFile] = File(None),
    store: JsonStore = Depends(get_store),
):
    image_url = _save_upload(image)
    try:
        updated = store.update_post(
            post_id,
            title=title,
            blocks=blocks,
            content=content,
            section_id=_parse_int(section_id),
            image=image_url,
        )
    except ValueError as e:
        _remove_upload(image_url)
        raise HTTPException(400, str(e))
    except Exception:
        _remove_upload(image_url)
        log.exception("PUT /api/posts/%s", post_id)
        raise HTTPException(500, "Erreur interne")
    if updated is None:
        _remove_upload(image_url)
        raise HTTPException(404, f"Post {post_id} introuvable")
    return updated


@router.delete("/api/posts/{post_id}")
def delete_post(post_id: str, store: JsonStore = Depends(get_store)):
    removed = store.delete_post(post_id)
    if removed is None:
        raise HTTPException(404, f"Post {post_id} introuvable")
    _remove_upload(removed.get("image"))
    return {"success": True}
