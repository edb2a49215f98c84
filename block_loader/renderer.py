"""
Renderer — template Jinja2 du bloc + enveloppe HTML configurable.

Le template reçoit :
  block   → dict du descripteur (+ attributs d'instance : align, className…)
  fields  → valeurs de champs de l'instance (mapping ou callable)
  field() → accès uniforme à un champ : {{ field("title") }}

L'enveloppe `wrap` a trois emplacements positionnels :
  {0} contenu rendu, {1} classes (échappées), {2} id unique (échappé)
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import escape

from .config import BlockLoaderConfig
from .ids import BlockIdCounter, FieldSource, get_context_field

log = logging.getLogger(__name__)

_ENV_CACHE: Dict[str, Environment] = {}


def _environment(directory: Path) -> Environment:
    """Un Environment Jinja2 par répertoire de templates (lazy, mis en cache)."""
    key = str(directory)
    if key not in _ENV_CACHE:
        _ENV_CACHE[key] = Environment(
            loader=FileSystemLoader(key),
            autoescape=select_autoescape(["html", "htm", "xml"]),
            keep_trailing_newline=True,
        )
    return _ENV_CACHE[key]


def reload_cache():
    """Force le rechargement des templates (utile en dev)."""
    _ENV_CACHE.clear()


def render_template(template_file: str, block: Mapping[str, Any], fields: Optional[FieldSource] = None) -> str:
    path = Path(template_file)
    template = _environment(path.parent).get_template(path.name)
    return template.render(
        block=dict(block),
        fields=fields if fields is not None else {},
        field=lambda name: get_context_field(fields, name),
    )


def block_classes(block: Mapping[str, Any]) -> List[str]:
    """["block", slug] + "align{align}" + className éventuel."""
    classes = ["block", block["slug"]]

    if block.get("align"):
        classes.append(f"align{block['align']}")

    if block.get("className"):
        classes.append(block["className"])

    return classes


def wrap_block(
    content: str,
    block: Mapping[str, Any],
    counter: BlockIdCounter,
    config: BlockLoaderConfig,
    fields: Optional[FieldSource] = None,
) -> str:
    """Enveloppe le contenu rendu, ou le renvoie tel quel si le wrap est désactivé."""
    hooks = config.hooks

    if hooks.block_wrap(bool(config.wrap), block) is False:
        return content

    classes = hooks.block_classes(block_classes(block), block)
    wrap_html = hooks.block_wrap_html(config.wrap or "", block)
    if not wrap_html:
        return content

    block_id = counter.next_unique_id(block["slug"], fields)
    return wrap_html.format(
        content,
        escape(" ".join(classes)),
        escape(block_id),
    )
