"""
Header parser — métadonnées de bloc lues dans le commentaire d'en-tête.

Format attendu (un label par ligne, en tête de fichier) :

    {#
      Block Name: Hero
      Description: Bannière pleine largeur
      Keywords: hero, banner
      Supports Align: wide, full
      Supports Anchor: true
    #}

Les styles `<!-- ... -->` et `/** ... */` sont aussi reconnus.

Fonctions exposées :
  parse_file_headers(contents, headers)  -> {field: raw}
  get_file_data(path, headers)           -> {field: raw}
  parse_comma_separated_list(value)      -> list
  normalize(raw)                         -> dict (types + supports)
  get_block_data(path)                   -> dict
"""
import re
from typing import Any, Dict, List, Mapping

from .filesystem import Filesystem, PathLike

HEADER_READ_BYTES = 8192

HEADERS: Dict[str, str] = {
    "title":                    "Block Name",
    "description":              "Description",
    "category":                 "Category",
    "icon":                     "Icon",
    "keywords":                 "Keywords",
    "post_types":               "Post Types",
    "mode":                     "Mode",
    "align":                    "Align",
    "context":                  "Context",
    "enqueue_style":            "Enqueue Style",
    "enqueue_script":           "Enqueue Script",
    "enqueue_assets":           "Enqueue Assets",
    "supports_align":           "Supports Align",
    "supports_anchor":          "Supports Anchor",
    "supports_customClassName": "Supports Custom Class Name",
    "supports_mode":            "Supports Mode",
    "supports_multiple":        "Supports Multiple",
    "supports_reusable":        "Supports Reusable",
}

LIST_FIELDS = frozenset({"keywords", "post_types", "supports_align"})
SUPPORTS_PREFIX = "supports_"

# Fin de commentaire collée à la valeur : `*/`, `#}`, `-->`, `?>`
_COMMENT_END = re.compile(r"\s*(?:\*/|#\}|-->|\?>).*")


def _cleanup_header_comment(value: str) -> str:
    return _COMMENT_END.sub("", value).strip()


def parse_file_headers(contents: str, headers: Mapping[str, str] = HEADERS) -> Dict[str, str]:
    """
    Extrait chaque label de `headers` depuis `contents`.
    Un label absent donne "" (jamais d'erreur).
    """
    contents = contents.replace("\r\n", "\n").replace("\r", "\n")
    found: Dict[str, str] = {}
    for field, label in headers.items():
        pattern = re.compile(
            r"^[ \t/*#@{<!\-]*" + re.escape(label) + r":(.*)$",
            re.IGNORECASE | re.MULTILINE,
        )
        m = pattern.search(contents)
        found[field] = _cleanup_header_comment(m.group(1)) if m else ""
    return found


def get_file_data(path: PathLike, headers: Mapping[str, str] = HEADERS) -> Dict[str, str]:
    """Lit l'en-tête d'un fichier. Fichier illisible → tous les champs à ""."""
    contents = Filesystem.read_head(path, HEADER_READ_BYTES)
    if contents is None:
        return {field: "" for field in headers}
    return parse_file_headers(contents, headers)


def parse_comma_separated_list(value: str) -> List[str]:
    """Split sur "," + trim : "a, b,,c" → ["a", "b", "", "c"] (vides conservés)."""
    return [piece.strip() for piece in value.split(",")]


def normalize(raw: Mapping[str, str]) -> Dict[str, Any]:
    """
    Valeurs brutes → fragment de descripteur.

    1. valeurs vides écartées
    2. champs liste : split + trim
    3. sinon "true"/"false" exacts → bool
    4. `supports_X` déplacé sous data["supports"]["X"]
    """
    data: Dict[str, Any] = {}
    supports: Dict[str, Any] = {}

    for key, value in raw.items():
        if not value:
            continue

        if key in LIST_FIELDS:
            value = parse_comma_separated_list(value)
        elif value in ("true", "false"):
            value = value == "true"

        if key.startswith(SUPPORTS_PREFIX):
            supports[key[len(SUPPORTS_PREFIX):]] = value
        else:
            data[key] = value

    if supports:
        data["supports"] = supports
    return data


def get_block_data(path: PathLike, headers: Mapping[str, str] = HEADERS) -> Dict[str, Any]:
    return normalize(get_file_data(path, headers))
