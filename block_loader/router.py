"""
Router FastAPI — catalogue et rendu des blocs.

GET  /blocks/                → liste des blocs découverts
GET  /blocks/categories      → catégories configurées
POST /blocks/{slug}/render   → {fields, attributes} → HTMLResponse
"""
from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from .loader import BlockLoader

# Attributs d'instance acceptés depuis l'éditeur (le descripteur n'est jamais surchargé)
INSTANCE_ATTRIBUTES = ("align", "className")


class RenderRequest(BaseModel):
    """Champs de l'instance + attributs (align, className…) fournis par l'éditeur."""
    fields: Dict[str, Any] = Field(default_factory=dict)
    attributes: Dict[str, Any] = Field(default_factory=dict)


def create_router(loader: BlockLoader) -> APIRouter:
    router = APIRouter(prefix="/blocks", tags=["blocks"])

    @router.get("/", summary="Liste les blocs disponibles")
    def catalog() -> JSONResponse:
        blocks = loader.get_blocks()
        return JSONResponse({"blocks": [b.to_dict() for b in blocks.values()]})

    @router.get("/categories", summary="Catégories de blocs configurées")
    def categories() -> JSONResponse:
        return JSONResponse({"categories": loader.block_categories([])})

    @router.post("/{slug}/render", response_class=HTMLResponse, summary="Rend un bloc en HTML")
    def render(slug: str, req: RenderRequest) -> HTMLResponse:
        """Un compteur d'ids neuf par requête : deux requêtes ne partagent rien."""
        block = loader.get_blocks().get(slug)
        if block is None:
            raise HTTPException(status_code=404, detail=f"Bloc inconnu : {slug!r}")

        attributes = {k: v for k, v in req.attributes.items() if k in INSTANCE_ATTRIBUTES}
        data = {**block.to_dict(), **attributes}
        html = loader.render_block(data, fields=req.fields, session=loader.new_session())
        return HTMLResponse(content=html)

    return router
