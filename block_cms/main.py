"""
block_cms — FastAPI app
Démarrer : uvicorn block_cms.main:app --reload --port 4000
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .router import router as posts_router, uploads_dir

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="block_cms", version="1.0.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts_router)


@app.on_event("startup")
def startup():
    # Montage des images uploadées (répertoire créé si absent, monté une seule fois)
    d = uploads_dir()
    try:
        d.mkdir(parents=True, exist_ok=True)
        if any(getattr(r, "name", None) == "uploads" for r in app.routes):
            return
        app.mount("/uploads", StaticFiles(directory=str(d)), name="uploads")
        log.info("Static uploads monté sur %s", d)
    except OSError as e:
        log.warning("Impossible de monter /uploads : %s", e)


@app.get("/health")
def health():
    return {"status": "ok", "service": "block_cms", "version": "1.0.0"}
