"""
Block Loader — découverte des blocs sur disque + intégrations hôte.

Un bloc est soit un fichier `<slug>.html` directement dans un répertoire de
blocs, soit un sous-répertoire `<slug>/` contenant `template.html`.

Une instance est construite une fois au démarrage puis passée aux
collaborateurs qui en ont besoin (pas de singleton global).

Méthodes exposées :
  get_blocks()                        -> {slug: BlockDescriptor}
  get_blocks_from_path(path)          -> {slug: BlockDescriptor}
  register_acf_blocks(register)       -> nombre de blocs enregistrés
  register_metabox_blocks(meta_boxes) -> meta_boxes complétées
  block_categories(categories, post)  -> categories + catégories configurées
  render_block(block, fields, session) -> HTML
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import BlockLoaderConfig, RegistrarMode
from .filesystem import Filesystem, PathLike
from .headers import get_block_data
from .ids import BlockIdCounter, FieldSource
from .renderer import render_template, wrap_block
from .schemas import BlockDescriptor

log = logging.getLogger(__name__)

TEMPLATE_EXT = ".html"
TEMPLATE_FILE = f"template{TEMPLATE_EXT}"


def _slug_from_name(name: str) -> str:
    """Slug d'une entrée : "hero.html" → "hero" ; un répertoire garde son nom."""
    if name.endswith(TEMPLATE_EXT) and name != TEMPLATE_EXT:
        return name[: -len(TEMPLATE_EXT)]
    return name


class BlockLoader:
    """
    Registre des blocs d'un thème.

    Usage:
        >>> loader = BlockLoader.init({"dir": "blocks", "root_dir": "/srv/theme"})
        >>> blocks = loader.get_blocks()
        >>> session = loader.new_session()
        >>> html = loader.render_block(blocks["hero"], fields={"title": "Bonjour"}, session=session)
    """

    def __init__(self, config: Optional[BlockLoaderConfig] = None):
        config = config or BlockLoaderConfig()
        self.config = config.hooks.config(config)
        self.root_dir = Path(self.config.hooks.root_dir(self.config.root_dir))

    @classmethod
    def init(cls, config: Union[BlockLoaderConfig, Mapping[str, Any], None] = None) -> "BlockLoader":
        """Construit un loader depuis une config typée ou un dict de config."""
        if config is None or isinstance(config, BlockLoaderConfig):
            return cls(config)
        return cls(BlockLoaderConfig(**config))

    @property
    def default_category(self) -> Optional[str]:
        return self.config.default_category

    # ── Découverte ──────────────────────────────────────────────────────────

    def paths(self) -> List[Path]:
        default = [self.root_dir / self.config.dir]
        return [Path(p) for p in self.config.hooks.paths(default)]

    def get_blocks(self) -> Dict[str, BlockDescriptor]:
        """Fusionne les blocs de chaque chemin, dans l'ordre (le dernier gagne)."""
        blocks: Dict[str, BlockDescriptor] = {}
        paths = self.paths()

        for path in paths:
            found = self.get_blocks_from_path(path)
            for slug in found.keys() & blocks.keys():
                log.debug("Bloc %r remplacé par %s", slug, path)
            blocks.update(found)

        log.info("%d bloc(s) chargé(s) depuis %d chemin(s)", len(blocks), len(paths))
        return blocks

    def get_blocks_from_path(self, path: PathLike) -> Dict[str, BlockDescriptor]:
        fs = Filesystem(path)
        blocks: Dict[str, BlockDescriptor] = {}

        for entry in fs.dirlist():
            if fs.is_file(entry.name):
                filename = entry.name
            elif fs.is_file(f"{entry.name}/{TEMPLATE_FILE}"):
                filename = f"{entry.name}/{TEMPLATE_FILE}"
            else:
                log.debug("Ignoré (pas un bloc) : %s", entry)
                continue

            filepath = fs.path(filename)
            data = get_block_data(filepath)
            slug = _slug_from_name(entry.name)

            if "title" not in data:
                log.debug("Ignoré (pas de Block Name) : %s", filepath)
                continue

            data.update({
                "name": slug,
                "slug": slug,
                "template_file": str(filepath),
            })

            if "category" not in data and self.default_category:
                data["category"] = self.default_category

            data = self.config.hooks.block_params(data)
            blocks[slug] = BlockDescriptor(**data)

        return blocks

    # ── Intégrations hôte ───────────────────────────────────────────────────

    def register_acf_blocks(self, register: Callable[[Dict[str, Any]], Any]) -> int:
        """Passe chaque bloc au registrar ACF (no-op hors mode ACF)."""
        if self.config.registrar is not RegistrarMode.ACF:
            return 0

        count = 0
        for block in self.get_blocks().values():
            params = block.to_dict()
            params["render_callback"] = self.render_block
            params.setdefault("mode", "edit")
            register(params)
            count += 1
        return count

    def register_metabox_blocks(self, meta_boxes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Copie des meta boxes, celles de type "block" dont l'id correspond à un slug complétées."""
        if self.config.registrar is not RegistrarMode.METABOX:
            return meta_boxes

        blocks = self.get_blocks()
        result = list(meta_boxes)

        for i, meta_box in enumerate(result):
            if meta_box.get("type") != "block":
                continue

            block = blocks.get(meta_box.get("id"))
            if block is None:
                continue

            params = block.to_dict()
            params["render_template"] = block.template_file
            result[i] = {**meta_box, **params}

        return result

    def block_categories(self, categories: List[Dict[str, Any]], post: Any = None) -> List[Dict[str, Any]]:
        if self.config.categories:
            categories = categories + self.config.categories_as_dicts()
        return categories

    # ── Rendu ───────────────────────────────────────────────────────────────

    @staticmethod
    def new_session() -> BlockIdCounter:
        """Nouveau compteur d'ids — un par rendu de page / requête."""
        return BlockIdCounter()

    def render_block(
        self,
        block: Union[BlockDescriptor, Mapping[str, Any]],
        fields: Optional[FieldSource] = None,
        session: Optional[BlockIdCounter] = None,
    ) -> str:
        """Rend le template du bloc puis l'enveloppe. Template absent → ""."""
        data = block.to_dict() if isinstance(block, BlockDescriptor) else dict(block)
        template_file = data.get("template_file")

        if not template_file or not Path(template_file).is_file():
            log.warning("Template introuvable pour le bloc %r : %s", data.get("slug"), template_file)
            return ""

        content = render_template(template_file, data, fields)
        counter = session if session is not None else self.new_session()
        return wrap_block(content, data, counter, self.config, fields)
