"""
Exemple d'intégration FastAPI.
Lancer avec : uvicorn fastapi_example:app --reload
"""
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI

from block_loader import BlockLoader, BlockLoaderConfig
from block_loader.router import create_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")

loader = BlockLoader(BlockLoaderConfig(
    root_dir=Path(__file__).parent / "theme",
    categories=[{"slug": "theme", "title": "Blocs du thème", "icon": "layout"}],
))

app = FastAPI(title="Block Loader FastAPI Example")
app.include_router(create_router(loader))
