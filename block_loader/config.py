"""
Configuration du Block Loader — structure typée, immuable après construction.

BlockLoaderConfig remplace l'ancien tableau de config à accès magique :
chaque clé reconnue est un attribut explicite, les clés inconnues sont
rejetées à la construction (ValidationError).

Les points d'extension (filtres) sont des callables injectables regroupés
dans BlockHooks, avec l'identité comme comportement par défaut.
"""
import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_WRAP = '<div id="{2}" class="{1}">{0}</div>'


def _identity(value: Any, *args: Any) -> Any:
    return value


def _default_root_dir() -> Path:
    return Path(os.getenv("BLOCK_LOADER_ROOT_DIR", ".")).resolve()


class RegistrarMode(str, Enum):
    """Intégration hôte active — résolue une seule fois au démarrage."""
    ACF = "acf"
    METABOX = "metabox"
    NONE = "none"


class BlockCategory(BaseModel):
    """Catégorie de blocs ajoutée à la liste de l'hôte."""
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    icon: Optional[str] = None


class BlockHooks(BaseModel):
    """
    Filtres injectables.

    root_dir(path)                  → Path
    paths(paths)                    → List[Path]
    config(config)                  → BlockLoaderConfig
    block_params(data)              → dict
    block_wrap(flag, block)         → bool
    block_classes(classes, block)   → List[str]
    block_wrap_html(wrap, block)    → str
    """
    model_config = ConfigDict(frozen=True)

    config: Callable[..., Any] = _identity
    root_dir: Callable[..., Any] = _identity
    paths: Callable[..., Any] = _identity
    block_params: Callable[..., Any] = _identity
    block_wrap: Callable[..., Any] = _identity
    block_classes: Callable[..., Any] = _identity
    block_wrap_html: Callable[..., Any] = _identity


class BlockLoaderConfig(BaseModel):
    """
    Configuration complète.

    Exemple :
        BlockLoaderConfig(
            dir="blocks",
            categories=[{"slug": "custom", "title": "Custom"}],
            root_dir="/srv/theme",
            registrar="acf",
        )
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    dir: str = "blocks"
    categories: List[BlockCategory] = Field(default_factory=list)
    wrap: Optional[str] = DEFAULT_WRAP
    default_category: Optional[str] = None
    root_dir: Path = Field(default_factory=_default_root_dir)
    registrar: RegistrarMode = RegistrarMode.NONE
    hooks: BlockHooks = Field(default_factory=BlockHooks)

    @field_validator("default_category", mode="before")
    @classmethod
    def _false_means_none(cls, v):
        # `False` reste accepté pour « pas de catégorie par défaut »
        if v is False or v == "":
            return None
        return v

    @model_validator(mode="before")
    @classmethod
    def _derive_default_category(cls, data: Any) -> Any:
        """Une seule catégorie configurée et pas de défaut explicite → son slug."""
        if not isinstance(data, dict):
            return data
        categories = data.get("categories") or []
        if data.get("default_category") or len(categories) != 1:
            return data

        only = categories[0]
        slug = only.get("slug") if isinstance(only, dict) else getattr(only, "slug", None)
        if slug:
            data = {**data, "default_category": slug}
        return data

    @property
    def blocks_dir(self) -> Path:
        return self.root_dir / self.dir

    def categories_as_dicts(self) -> List[Dict[str, Any]]:
        return [c.model_dump(exclude_none=True) for c in self.categories]
